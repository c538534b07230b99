# Plotting helpers (matplotlib render adapter).
# Every draw_* call takes the Axes it draws into; figures are created only by
# plot_scene / animate_scene. Curves are drawn as line strips, control points
# as discrete markers, over a reference grid with x/y axes.
import logging
import math

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation
from matplotlib.patches import Polygon

import query as q
from tangent import Mover

logger = logging.getLogger(__name__)

CURVE_COLORS = {
    'global': 'magenta',
    'bezier': 'magenta',
    'catmull-rom': 'green',
}

# marker triangle in its own frame, pointing along +y
_MARKER = np.array([(-0.5, -0.5), (0.5, -0.5), (0.0, 0.5)])


def _axis_labels(projection):
    """Return appropriate axis labels for the given projection."""
    if projection == 'xy':
        return 'X', 'Y'
    elif projection == 'xz':
        return 'X', 'Z'
    elif projection == 'yz':
        return 'Y', 'Z'
    elif projection == 'iso':
        return 'Iso-X', 'Iso-Y'
    else:
        return 'X', 'Y'  # default to xy


def _project_points(points, projection):
    """Project (n, 3) points to two coordinate arrays."""
    P = np.asarray(points, dtype=float).reshape(-1, 3)
    x, y, z = P[:, 0], P[:, 1], P[:, 2]
    if projection == 'xz':
        return x, z
    if projection == 'yz':
        return y, z
    if projection == 'iso':
        # rotate 45° about Z, then 35.264° about X, drop depth
        angle_x = math.radians(35.26438968)
        angle_z = math.radians(45)
        xr = x * math.cos(angle_z) - y * math.sin(angle_z)
        yr = x * math.sin(angle_z) + y * math.cos(angle_z)
        yr2 = yr * math.cos(angle_x) - z * math.sin(angle_x)
        return xr, yr2
    return x, y


def draw_grid(ax, cell_size=0.1, extent=1.0):
    """Square grid over [-extent, extent]^2."""
    n_cells = int(round(2.0 * extent / cell_size))
    for i in range(n_cells + 1):
        pos = -extent + i * cell_size
        ax.plot([pos, pos], [-extent, extent], color='gray', linewidth=0.5, zorder=0)
        ax.plot([-extent, extent], [pos, pos], color='gray', linewidth=0.5, zorder=0)


def draw_axes(ax, extent=1.0):
    ax.plot([-extent, extent], [0.0, 0.0], color='red', linewidth=1.5, zorder=1)
    ax.plot([0.0, 0.0], [-extent, extent], color='blue', linewidth=1.5, zorder=1)


def draw_curve(ax, curve, projection='xy', color=None, linewidth=2.5):
    pts = curve['curve_points']
    if len(pts) == 0:
        logger.debug("curve %s has no points, nothing to draw", curve['name'])
        return None
    xs, ys = _project_points(pts, projection)
    color = color or CURVE_COLORS.get(curve['mode'], 'black')
    line, = ax.plot(xs, ys, color=color, linewidth=linewidth, label=curve['name'], zorder=2)
    return line


def draw_control_points(ax, points, projection='xy'):
    if len(points) == 0:
        return None
    xs, ys = _project_points(points, projection)
    return ax.scatter(xs, ys, s=40, color='black', label='control points', zorder=3)


def marker_vertices(position, angle, size=0.2):
    """Triangle marker vertices, rotated by angle and centred on position (xy)."""
    c, s = math.cos(angle), math.sin(angle)
    rot = np.array([[c, -s], [s, c]])
    return (_MARKER * size) @ rot.T + np.asarray(position, dtype=float)[:2]


def _scene_axes(idx, projection='xy', grid=True):
    fig = plt.figure(figsize=(6, 6))
    ax = fig.gca()
    if grid and projection == 'xy':
        draw_grid(ax)
        draw_axes(ax)
    for curve in idx['by_name'].values():
        draw_curve(ax, curve, projection=projection)
    draw_control_points(ax, idx['scene']['control_points'], projection=projection)
    xl, yl = _axis_labels(projection)
    ax.set_xlabel(xl)
    ax.set_ylabel(yl)
    ax.set_aspect('equal', adjustable='box')
    ax.legend(loc='upper right', fontsize=8)
    return fig, ax


def plot_scene(idx, projection='xy', show=True):
    """Static view of every curve in the index plus the control points."""
    fig, ax = _scene_axes(idx, projection)
    ax.set_title(f"Parametric curves ({projection})")
    if show:
        plt.show()
    return fig


def animate_scene(idx, follow='catmull-rom', fps=60.0, size=0.2, show=True):
    """
    Scene view with a triangle marker travelling along the curve named follow.
    Returns (figure, animation); keep a reference to the animation while it runs.
    """
    curve = q.get_curve(idx, follow)
    if curve is None:
        raise KeyError("No such curve: " + follow)
    mover = Mover(curve['curve_points'], fps=fps)

    fig, ax = _scene_axes(idx, 'xy')
    ax.set_title(f"Marker following {follow}")
    position, angle = mover.step()
    marker = Polygon(marker_vertices(position, angle, size), closed=True,
                     color='blue', zorder=4)
    ax.add_patch(marker)

    def update(_frame):
        pos, ang = mover.step()
        marker.set_xy(marker_vertices(pos, ang, size))
        return (marker,)

    ani = FuncAnimation(fig, update, interval=1000.0 / fps, blit=True,
                        cache_frame_data=False)
    if show:
        plt.show()
    return fig, ani
