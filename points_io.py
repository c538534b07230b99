# Plain-text point files.
# - Reading: one point per line, "x,y[,z]" or whitespace separated
# - Lines starting with "#" (after optional spaces) are comments
# - An optional "x,y,z" / "x,y" column line is skipped
# - Writing: CSV with a "#" header block, an "x,y,z" column line, %.17g numbers

import logging
import os
import re

import numpy as np

from curve_eval import as_points

logger = logging.getLogger(__name__)

_columns = re.compile(r'^\s*x\s*[,;\s]\s*y(\s*[,;\s]\s*z)?\s*$', re.IGNORECASE)
_separators = re.compile(r'[,;\s]+')


def _is_comment(s):
    return s.lstrip().startswith('#')


def _iter_records(path):
    with open(path, 'r', encoding='utf-8') as f:
        for i, raw in enumerate(f, start=1):
            yield i, raw.rstrip('\r\n')


def _parse_point(text, lineno, path):
    parts = [p for p in _separators.split(text.strip()) if p != '']
    if len(parts) not in (2, 3):
        raise ValueError(f"{path}:{lineno}: expected 2 or 3 coordinates, got {len(parts)}")
    try:
        coords = [float(p) for p in parts]
    except ValueError:
        raise ValueError(f"{path}:{lineno}: non-numeric coordinate in {text.strip()!r}")
    if len(coords) == 2:
        coords.append(0.0)
    return coords


def read_points(path):
    """Read control points from a text file -> (n, 3) array."""
    pts = []
    for lineno, line in _iter_records(path):
        if not line.strip() or _is_comment(line):
            continue
        if not pts and _columns.match(line):
            continue
        pts.append(_parse_point(line, lineno, path))
    logger.debug("read %d points from %s", len(pts), path)
    if not pts:
        return np.empty((0, 3), dtype=float)
    return np.array(pts, dtype=float)


def write_points(path, points, header=None):
    """Write points as CSV; header is an optional dict of '# key: value' lines."""
    P = as_points(points)
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as fh:
        for key, value in (header or {}).items():
            fh.write(f"# {key}: {value}\n")
        fh.write(f"# points: {len(P)}\n")
        fh.write("x,y,z\n")
        for x, y, z in P:
            fh.write(f"{x:.17g},{y:.17g},{z:.17g}\n")
    return path


def export_curves(idx, out_dir):
    """Write one <name>.csv per curve in the index. Returns the written paths."""
    written = []
    for name, curve in idx['by_name'].items():
        path = os.path.join(out_dir, f"{name}.csv")
        write_points(path, curve['curve_points'], header={
            'curve': name,
            'mode': curve['mode'],
            'samples': curve['samples'],
            'control points': len(curve['control_points']),
        })
        written.append(path)
    return written
