# Tiny curves CLI: build the demo scene, list/print curves, plot or animate.
# Usage:
#   python cli.py --list
#   python cli.py --source zigzag --mode bezier --print bezier
#   python cli.py --plot
#   python cli.py --animate --follow catmull-rom --fps 60
#   python cli.py --points my_points.csv --export ./exports
#
# Notes:
# - Default scene: 20-point heart, global Bézier (100 samples) and
#   Catmull-Rom (10 samples per span) over the same points.
# - --plot / --animate open one matplotlib window; --viewer opens Qt3D.

import argparse
import logging
from textwrap import fill

import control_points as cp
import data_print
import index
import points_io
import query
import scene as sc


def main(argv=None):
    ap = argparse.ArgumentParser(description="Parametric curves: Bézier, global Bézier, Catmull-Rom")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--points", dest="points_file", help="Read control points from a text file (x,y[,z] per line)")
    src.add_argument("--source", choices=cp.SOURCES, default="heart",
                     help="Built-in control points: generated heart curve or a literal preset")
    ap.add_argument("--num-points", type=int, default=20, help="Number of points for the generated heart curve")
    ap.add_argument("--mode", choices=["global", "bezier"], default="global",
                    help="Bézier evaluation: one global curve (global) or cubic pieces (bezier)")
    ap.add_argument("--samples", type=int, default=100,
                    help="Bézier samples (whole curve in global mode, per piece in bezier mode)")
    ap.add_argument("--catmull-samples", type=int, default=10, help="Catmull-Rom samples per span")
    ap.add_argument("--include-end", action="store_true",
                    help="Bézier pieces also sample t=1 (bezier mode only)")
    ap.add_argument("--list", action="store_true", help="List curves with their point counts")
    ap.add_argument("--print", dest="print_name", help='Print curve data to terminal (e.g., "bezier")')
    ap.add_argument("--max-points", type=int, default=None, help="Limit the curve points listed by --print")
    ap.add_argument("--plot", action="store_true", help="Plot the scene")
    ap.add_argument("--projection", "-p", dest="projection", choices=["xy", "yz", "xz", "iso"], default="xy",
                    help="2D projection for --plot: xy, yz, xz, or iso (isometric)")
    ap.add_argument("--animate", action="store_true", help="Animate a marker along a curve (matplotlib)")
    ap.add_argument("--viewer", action="store_true", help="Show the scene with the animated marker in a Qt3D window")
    ap.add_argument("--follow", default="catmull-rom", help="Curve the marker follows")
    ap.add_argument("--fps", type=float, default=60.0, help="Marker steps per second")
    ap.add_argument("--export", dest="out_dir", help="Export every curve's points as CSV into this directory")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.points_file:
            cps = points_io.read_points(args.points_file)
        else:
            cps = cp.get_control_points(args.source, args.num_points)
        scene = sc.build_scene(
            cps,
            bezier_mode=args.mode,
            bezier_samples=args.samples,
            catmull_samples=args.catmull_samples,
            include_end=args.include_end,
        )
    except (OSError, ValueError) as ex:
        ap.error(str(ex))
    idx = index.build_index(scene)

    if (args.animate or args.viewer) and not args.fps > 0:
        ap.error(f"--fps must be positive, got {args.fps}")
    if args.follow not in idx['by_name'] and (args.animate or args.viewer):
        ap.error(f"--follow: no such curve {args.follow!r} (have: {', '.join(idx['by_name'])})")
    if (args.animate or args.viewer) and len(idx['by_name'][args.follow]['curve_points']) == 0:
        ap.error(f"--follow: curve {args.follow!r} has no points (too few control points)")

    if args.list:
        data_print.print_summary(idx)
        for mode in ("global", "bezier", "catmull-rom"):
            names = query.list_names_by_mode(idx, mode)
            if names:
                print(f"{mode} ({len(names)}):")
                print('  ' + fill(', '.join(names), width=100, subsequent_indent='  '))

    if args.print_name:
        try:
            data_print.print_curve_data(idx, args.print_name, max_points=args.max_points)
        except KeyError as ex:
            ap.error(str(ex.args[0]))

    if args.out_dir:
        for p in points_io.export_curves(idx, args.out_dir):
            print(f"Exported curve CSV -> {p}")

    if args.plot:
        import plot
        plot.plot_scene(idx, projection=args.projection)

    if args.animate:
        import plot
        plot.animate_scene(idx, follow=args.follow, fps=args.fps)

    if args.viewer:
        import viewer_qt3d
        return viewer_qt3d.main(idx, follow=args.follow, fps=args.fps)

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
