# Marker orientation along a sampled curve, plus the fixed-rate gate that
# decides when the marker moves on to the next curve point.

import logging
import math
import time

import numpy as np

from curve_eval import as_points

logger = logging.getLogger(__name__)

# the marker triangle points along +y; rotate so it points along +x at angle 0
HEADING_OFFSET = math.radians(-90.0)


def heading_angle(current, nxt, previous=0.0, offset=HEADING_OFFSET):
    """
    Heading (radians) of the step current -> nxt in the xy plane:
        atan2(d.y, d.x) + offset,  d = normalize(nxt - current)
    A zero-length (or non-finite) step keeps the previous angle.
    """
    d = np.asarray(nxt, dtype=float)[:3] - np.asarray(current, dtype=float)[:3]
    length = float(np.linalg.norm(d))
    if length == 0.0 or not math.isfinite(length):
        logger.debug("degenerate heading step, keeping angle %.6g", previous)
        return previous
    d = d / length
    return math.atan2(d[1], d[0]) + offset


class FrameGate:
    """Opens at most once per 1/fps seconds of the given monotonic clock."""

    def __init__(self, fps=60.0, clock=time.monotonic):
        if not fps > 0:
            raise ValueError("fps must be positive, got %r" % (fps,))
        self.period = 1.0 / float(fps)
        self.clock = clock
        self.last = clock()

    def ready(self):
        now = self.clock()
        if now - self.last >= self.period:
            self.last = now
            return True
        return False


class Mover:
    """
    Walks the points of a curve cyclically at a fixed rate.

    step() returns (position, angle): position is the point at the current
    index; whenever the gate opens the index advances (mod len) and the angle
    is recomputed towards the new point.
    """

    def __init__(self, curve_points, fps=60.0, offset=HEADING_OFFSET, clock=time.monotonic):
        self.points = as_points(curve_points)
        if len(self.points) == 0:
            raise ValueError("Mover needs at least one curve point")
        self.gate = FrameGate(fps, clock)
        self.offset = offset
        self.index = 0
        self.angle = 0.0

    def step(self):
        position = self.points[self.index]
        if self.gate.ready():
            self.index = (self.index + 1) % len(self.points)
            self.angle = heading_angle(position, self.points[self.index], self.angle, self.offset)
        return position, self.angle
