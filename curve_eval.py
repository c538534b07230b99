# Curve evaluators: segmented cubic windows (Bézier / Catmull-Rom) and the
# global Bézier curve of arbitrary degree (Bernstein sum over the whole hull).
# Control points come in as (n, 3) arrays; every evaluator returns a new
# (m, 3) array of curve points in line-strip order.

import logging
import math
import numbers

import numpy as np

from basis import WINDOW_STRIDE, basis_matrix, parameter_vectors

logger = logging.getLogger(__name__)

MODES = ('global', 'bezier', 'catmull-rom')

# above this degree the Pascal coefficients times raw powers lose precision
# (and eventually overflow); switch to log-domain terms
PASCAL_MAX_DEGREE = 20


def _empty():
    return np.empty((0, 3), dtype=float)


def as_points(points):
    """
    Coerce a point sequence into a float array of shape (n, 3).
    2D points are lifted to z = 0.
    """
    a = np.asarray(points, dtype=float)
    if a.size == 0:
        return _empty()
    if a.ndim != 2 or a.shape[1] not in (2, 3):
        raise ValueError("Control points must have shape (n, 2) or (n, 3), got %r" % (a.shape,))
    if a.shape[1] == 2:
        a = np.column_stack([a, np.zeros(len(a))])
    return a


def check_count(value, name, minimum=1):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError("%s must be an integer, got %r" % (name, value))
    if value < minimum:
        raise ValueError("%s must be >= %d, got %d" % (name, minimum, value))
    return int(value)


# --- segmented cubic evaluator ---

def eval_segment_at_t(window, t, M, order='descending'):
    """Evaluate one 4-point window at parameter t -> (3,) array."""
    G = as_points(window)
    if len(G) != 4:
        raise ValueError("A cubic window needs exactly 4 control points, got %d" % len(G))
    w = parameter_vectors([t], order) @ np.asarray(M, dtype=float).T
    return (w @ G)[0]


def sample_segments(points, samples, M, stride, include_end=False, order='descending'):
    """
    Walk the control points in windows of 4 and sample each cubic piece.

    Windows start at 0, stride, 2*stride, ... while i + 3 < len(points);
    trailing points that do not fill a window are dropped.
    Per window t = j / samples for j in [0, samples), or [0, samples] when
    include_end is set. Fewer than 4 points gives an empty result.
    """
    P = as_points(points)
    samples = check_count(samples, 'samples')
    stride = check_count(stride, 'stride')
    M = np.asarray(M, dtype=float)
    if M.shape != (4, 4):
        raise ValueError("Basis matrix must be 4x4, got %r" % (M.shape,))

    n = len(P)
    if n < 4:
        return _empty()

    m = samples + 1 if include_end else samples
    ts = np.arange(m, dtype=float) / float(samples)
    # weights[j, k]: contribution of window point k at sample j
    weights = parameter_vectors(ts, order) @ M.T

    pieces = [weights @ P[i:i + 4] for i in range(0, n - 3, stride)]
    return np.concatenate(pieces, axis=0)


def sample_bezier_segments(points, samples, include_end=False):
    """Cubic Bézier pieces sharing end points (P3 of piece k is P0 of piece k+1)."""
    return sample_segments(points, samples, basis_matrix('bezier'),
                           WINDOW_STRIDE['bezier'], include_end=include_end)


def sample_catmull_rom(points, samples, duplicate_endpoints=False):
    """
    Catmull-Rom spline through consecutive windows (stride 1). Each window spans
    its two middle points, so callers duplicate the first and last point to reach
    the true ends; pass duplicate_endpoints=True to have it done here.
    """
    P = as_points(points)
    if duplicate_endpoints and len(P):
        P = np.concatenate([P[:1], P, P[-1:]], axis=0)
    return sample_segments(P, samples, basis_matrix('catmull-rom'),
                           WINDOW_STRIDE['catmull-rom'])


# --- global Bézier evaluator ---

def binomial_row(n):
    """Row n of Pascal's triangle as floats, built by addition (no factorials)."""
    n = check_count(n, 'n', minimum=0)
    row = [1.0]
    for _ in range(n):
        row = [1.0] + [row[k] + row[k + 1] for k in range(len(row) - 1)] + [1.0]
    return np.array(row)


def log_binomial_row(n):
    """log C(n, i) for i = 0..n via log-gamma."""
    n = check_count(n, 'n', minimum=0)
    lg = math.lgamma(n + 1)
    return np.array([lg - math.lgamma(i + 1) - math.lgamma(n - i + 1) for i in range(n + 1)])


def _bernstein_pascal(n, t):
    i = np.arange(n + 1)
    return binomial_row(n)[None, :] * (1.0 - t[:, None]) ** (n - i)[None, :] * t[:, None] ** i[None, :]


def _bernstein_log(n, t):
    # t strictly inside (0, 1)
    i = np.arange(n + 1)
    logb = (log_binomial_row(n)[None, :]
            + (n - i)[None, :] * np.log1p(-t[:, None])
            + i[None, :] * np.log(t[:, None]))
    return np.exp(logb)


def bernstein_basis(n, ts):
    """
    Bernstein weights B_{i,n}(t) for each t -> array (len(ts), n+1).
    Rows for t = 0 and t = 1 are exact unit vectors. Any t outside [0, 1]
    (or NaN) raises ValueError.
    """
    n = check_count(n, 'n', minimum=0)
    t = np.asarray(ts, dtype=float).reshape(-1)
    bad = ~((t >= 0.0) & (t <= 1.0))
    if bad.any():
        raise ValueError("Bernstein parameter must lie in [0, 1], got %r" % (t[bad][0],))
    B = np.zeros((len(t), n + 1))
    inner = (t > 0.0) & (t < 1.0)
    if inner.any():
        if n <= PASCAL_MAX_DEGREE:
            B[inner] = _bernstein_pascal(n, t[inner])
        else:
            B[inner] = _bernstein_log(n, t[inner])
    B[t <= 0.0, 0] = 1.0
    B[t >= 1.0, n] = 1.0
    return B


def sample_global_bezier(points, samples):
    """
    Single Bézier curve of degree n = len(points) - 1, sampled at
    t = j / samples for j in [0, samples] (inclusive, samples + 1 rows).
    Fewer than 2 points gives an empty result.
    """
    P = as_points(points)
    samples = check_count(samples, 'samples')
    if len(P) < 2:
        return _empty()
    ts = np.arange(samples + 1, dtype=float) / float(samples)
    return bernstein_basis(len(P) - 1, ts) @ P


# --- curve entity ---

def curve_point_count(n_points, samples, mode, include_end=False):
    """Number of curve points a regeneration will produce."""
    samples = check_count(samples, 'samples')
    if mode == 'global':
        return samples + 1 if n_points >= 2 else 0
    if mode not in WINDOW_STRIDE:
        raise ValueError("Unknown curve mode: %r (expected one of %s)" % (mode, ', '.join(MODES)))
    if n_points < 4:
        return 0
    windows = (n_points - 4) // WINDOW_STRIDE[mode] + 1
    per_window = samples + 1 if include_end and mode == 'bezier' else samples
    return windows * per_window


def make_curve(name, control_points, mode='global'):
    """
    Build a curve dict:
      {'name', 'mode', 'control_points', 'M', 'samples', 'include_end', 'curve_points'}
    Control points are copied and frozen; curve_points stays empty until
    regenerate_curve is called.
    """
    if mode not in MODES:
        raise ValueError("Unknown curve mode: %r (expected one of %s)" % (mode, ', '.join(MODES)))
    pts = as_points(control_points).copy()
    pts.flags.writeable = False
    return {
        'name': name,
        'mode': mode,
        'control_points': pts,
        'M': None if mode == 'global' else basis_matrix(mode),
        'samples': None,
        'include_end': mode == 'global',
        'curve_points': _empty(),
    }


def regenerate_curve(curve, samples, include_end=False):
    """
    Recompute curve['curve_points'] from its control points. The new array is
    built completely and then swapped in; the old one is never modified.
    include_end only applies to segmented Bézier curves.
    """
    mode = curve['mode']
    cps = curve['control_points']
    if mode == 'global':
        pts = sample_global_bezier(cps, samples)
        include_end = True
    elif mode == 'bezier':
        pts = sample_segments(cps, samples, curve['M'], WINDOW_STRIDE[mode], include_end=include_end)
    elif mode == 'catmull-rom':
        pts = sample_segments(cps, samples, curve['M'], WINDOW_STRIDE[mode])
        include_end = False
    else:
        raise ValueError("Unknown curve mode: %r" % (mode,))

    pts.flags.writeable = False
    curve['samples'] = samples
    curve['include_end'] = include_end
    curve['curve_points'] = pts
    logger.debug("regenerated %s (%s): %d control points -> %d curve points",
                 curve['name'], mode, len(cps), len(pts))
    return pts
