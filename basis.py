# Basis matrices for cubic curve windows (Bézier / Catmull-Rom).
# A window of 4 control points is evaluated as  P(t) = G · M · T(t)
#   G: 3x4, control points as columns
#   M: 4x4, row k = polynomial coefficients of control point k
#   T: parameter vector, [t^3, t^2, t, 1] ('descending') or [1, t, t^2, t^3] ('ascending')
# The matrix and the parameter vector must be built with the same order;
# both helpers below take it as an argument so callers cannot mix them up.

import numpy as np

FAMILIES = ('bezier', 'catmull-rom')
ORDERS = ('descending', 'ascending')

# windows advance by 3 for Bézier (shared end point), by 1 for Catmull-Rom
WINDOW_STRIDE = {'bezier': 3, 'catmull-rom': 1}

_BEZIER = (
    (-1.0,  3.0, -3.0, 1.0),
    ( 3.0, -6.0,  3.0, 0.0),
    (-3.0,  3.0,  0.0, 0.0),
    ( 1.0,  0.0,  0.0, 0.0),
)

# uniform Catmull-Rom, tension 0.5
_CATMULL_ROM = (
    (-0.5,  1.0, -0.5, 0.0),
    ( 1.5, -2.5,  0.0, 1.0),
    (-1.5,  2.0,  0.5, 0.0),
    ( 0.5, -0.5,  0.0, 0.0),
)


def _check_order(order):
    if order not in ORDERS:
        raise ValueError("Unknown parameter order: %r (expected one of %s)" % (order, ', '.join(ORDERS)))


def basis_matrix(family, order='descending'):
    """
    Return a fresh 4x4 basis matrix for a curve family.

    family: 'bezier' or 'catmull-rom'
    order:  'descending' pairs with T = [t^3, t^2, t, 1],
            'ascending' pairs with T = [1, t, t^2, t^3] (columns reversed).
    """
    _check_order(order)
    if family == 'bezier':
        m = np.array(_BEZIER, dtype=float)
    elif family == 'catmull-rom':
        m = np.array(_CATMULL_ROM, dtype=float)
    else:
        raise ValueError("Unknown curve family: %r (expected one of %s)" % (family, ', '.join(FAMILIES)))
    if order == 'ascending':
        m = m[:, ::-1].copy()
    return m


def parameter_vectors(ts, order='descending'):
    """Stack T(t) rows for each t in ts -> array (len(ts), 4)."""
    _check_order(order)
    t = np.asarray(ts, dtype=float).reshape(-1)
    T = np.stack([t ** 3, t ** 2, t, np.ones_like(t)], axis=1)
    if order == 'ascending':
        T = T[:, ::-1]
    return T
