# Print curve data to terminal (mode, counts, basis matrix, points)
import numpy as np


def print_summary(idx):
    """One line per curve: mode, control point count, curve point count."""
    scene = idx['scene']
    print(f"Control points: {len(scene['control_points'])}")
    for name, curve in idx['by_name'].items():
        print(f"{name} ({curve['mode']}): {len(curve['control_points'])} control points, "
              f"{len(curve['curve_points'])} curve points")


def print_curve_data(idx, name, max_points=None):
    """Print the data of one curve; max_points limits the curve point listing."""
    curve = idx['by_name'].get(name)
    if curve is None:
        raise KeyError("No such curve: " + name)

    print(f"Curve: {name}")
    print(f"Mode: {curve['mode']}")
    print()

    print("=== CURVE DETAILS ===")
    print(f"Samples: {curve['samples']} ({'inclusive' if curve['include_end'] else 'exclusive'} of t=1)")
    if curve['M'] is None:
        n = len(curve['control_points']) - 1
        print(f"Degree: {n} (Bernstein sum over the whole hull)")
    else:
        print("Basis matrix (rows: window points, columns: t^3 t^2 t 1):")
        with np.printoptions(precision=3, suppress=True):
            for row in curve['M']:
                print(f"  {row}")
    print()

    _print_points("Control points", curve['control_points'])
    print()
    _print_points("Curve points", curve['curve_points'], max_points)


def _print_points(title, points, max_points=None):
    n = len(points)
    print(f"--- {title} ({n}) ---")
    shown = n if max_points is None else max(0, min(n, max_points))
    for i in range(shown):
        x, y, z = points[i]
        print(f"Point {i+1}: ({x:.6g}, {y:.6g}, {z:.6g})")
    if shown < n:
        print(f"... {n - shown} more")
