# Demo scene: a Bézier curve over the control points and a Catmull-Rom spline
# through the same points (endpoints duplicated so the spline reaches them).

import logging

from control_points import duplicate_endpoints
from curve_eval import as_points, make_curve, regenerate_curve

logger = logging.getLogger(__name__)


def build_scene(control_points, bezier_mode='global', bezier_samples=100,
                catmull_samples=10, include_end=False):
    """
    Return {'control_points': (n, 3) array, 'curves': [bezier, catmull-rom]}.
    bezier_mode is 'global' (one curve over the whole hull) or 'bezier'
    (cubic pieces sharing end points).
    """
    if bezier_mode not in ('global', 'bezier'):
        raise ValueError("bezier_mode must be 'global' or 'bezier', got %r" % (bezier_mode,))
    cps = as_points(control_points)

    bezier = make_curve('bezier', cps, mode=bezier_mode)
    regenerate_curve(bezier, bezier_samples, include_end=include_end)

    curves = [bezier]
    if len(cps):
        catmull = make_curve('catmull-rom', duplicate_endpoints(cps), mode='catmull-rom')
        regenerate_curve(catmull, catmull_samples)
        curves.append(catmull)

    logger.info("scene: %d control points, %s",
                len(cps), ', '.join(f"{c['name']}={len(c['curve_points'])}" for c in curves))
    return {
        'control_points': cps,
        'curves': curves,
    }
