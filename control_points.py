# Control-point sources: closed parametric curves (heart), literal presets,
# and the endpoint duplication Catmull-Rom input needs.

import math

import numpy as np

from curve_eval import check_count, as_points

# hand-authored point lists
PRESETS = {
    # S-shaped run of 7 points: two cubic Bézier pieces sharing (0, 0)
    'zigzag': (
        (-0.6, -0.4, 0.0),
        (-0.4, -0.6, 0.0),
        (-0.2, -0.2, 0.0),
        ( 0.0,  0.0, 0.0),
        ( 0.2,  0.2, 0.0),
        ( 0.4,  0.6, 0.0),
        ( 0.6,  0.4, 0.0),
    ),
    # single cubic arch
    'arch': (
        (-0.8, -0.4, 0.0),
        (-0.4,  0.4, 0.0),
        ( 0.4,  0.4, 0.0),
        ( 0.8, -0.4, 0.0),
    ),
}

SOURCES = ('heart',) + tuple(PRESETS)


def closed_parametric_points(fx, fy, num_points, scale=(1.0, 1.0), offset=(0.0, 0.0)):
    """
    Sample (fx(t), fy(t)) at num_points - 1 even steps over [0, 2*pi), scale and
    shift into place, then append a copy of the first point to close the loop.
    The result has exactly num_points rows and result[0] == result[-1].
    """
    num_points = check_count(num_points, 'num_points', minimum=2)
    sx, sy = scale
    ox, oy = offset
    step = 2.0 * math.pi / (num_points - 1)

    pts = []
    for i in range(num_points - 1):
        t = i * step
        pts.append((fx(t) * sx + ox, fy(t) * sy + oy, 0.0))
    pts.append(pts[0])
    return np.array(pts, dtype=float)


def _heart_x(t):
    return 16.0 * math.sin(t) ** 3


def _heart_y(t):
    return 13.0 * math.cos(t) - 5.0 * math.cos(2 * t) - 2.0 * math.cos(3 * t) - math.cos(4 * t)


def heart_points(num_points=20):
    """Closed heart curve normalised to roughly [-1, 1] and lifted by 0.15 in y."""
    return closed_parametric_points(_heart_x, _heart_y, num_points,
                                    scale=(1.0 / 16.0, 1.0 / 16.0), offset=(0.0, 0.15))


def duplicate_endpoints(points):
    """[first] + points + [last]: k points in, k + 2 out."""
    P = as_points(points)
    if len(P) == 0:
        raise ValueError("duplicate_endpoints needs at least one point")
    return np.concatenate([P[:1], P, P[-1:]], axis=0)


def preset_points(name):
    try:
        pts = PRESETS[name]
    except KeyError:
        raise KeyError("No such preset: %s (available: %s)" % (name, ', '.join(PRESETS)))
    return np.array(pts, dtype=float)


def get_control_points(source, num_points=20):
    """Resolve a source name ('heart' or a preset) to an (n, 3) array."""
    if source == 'heart':
        return heart_points(num_points)
    return preset_points(source)
