"""
Two-pass 8-point sequential Euclidean distance transform (8SSEDT).

Propagates the nearest known boundary point of every pixel to its
neighbours in two raster passes: top to bottom with a trailing right to
left sweep per row, then bottom to top with a trailing left to right sweep.
Each pass covers one half-plane of directions.

The order pixels are visited in is part of the result: a pixel may pick up
a point that a neighbour received earlier in the same pass. It cannot be
parallelized or reordered without changing the output.
"""

from collections import namedtuple

import numpy as np

from sdfgen.kernel.scratch import ScratchBuffer
from sdfgen.tracer import get_tracer, trace


N, S, E, W = (0, -1), (0, 1), (1, 0), (-1, 0)
NE, NW, SE, SW = (1, -1), (-1, -1), (1, 1), (-1, 1)

# Neighbour offsets checked per pass and column position.
#   first/last: the row's first and last visited column (edge of the image)
#   middle: every column between them, in visiting order
#   sweep: the single offset of the trailing sweep back along the row
PassOffsets = namedtuple("PassOffsets", ["first", "middle", "last", "sweep"])

FORWARD = PassOffsets(
    first=(N, NE),
    middle=(NW, N, NE, W),
    last=(NW, N, W),
    sweep=(E,),
)
BACKWARD = PassOffsets(
    first=(S, SW),
    middle=(E, SW, S, SE),
    last=(S, SE, E),
    sweep=(W,),
)

PASS_COUNT = 2


def _row_order(forward, width):
    """
    Yield (x, offsets) in visiting order for one row of a pass.

    Forward rows run left to right, then sweep right to left from the
    second to last column. Backward rows mirror that.
    """
    table = FORWARD if forward else BACKWARD
    if forward:
        first_x, middle_xs, last_x = 0, range(1, width - 1), width - 1
        sweep_xs = range(width - 2, -1, -1)
    else:
        first_x, middle_xs, last_x = width - 1, range(width - 2, 0, -1), 0
        sweep_xs = range(1, width)

    yield first_x, table.first
    for x in middle_xs:
        yield x, table.middle
    yield last_x, table.last
    for x in sweep_xs:
        yield x, table.sweep


def update_point(dist, px, py, x, y, ox, oy, width):
    """
    Adopt the boundary point of neighbour (x + ox, y + oy) if it is closer.

    dist, px, py are flat row-major sequences of the grid's squared
    distances and point coordinates. Returns True when the pixel changed.
    """
    k = x + y * width
    kn = k + ox + oy * width
    current = dist[k]
    if dist[kn] < current:
        dx = px[kn] - x
        dy = py[kn] - y
        d = dx * dx + dy * dy
        if d < current:
            px[k] = px[kn]
            py[k] = py[kn]
            dist[k] = d
            return True
    return False


def _run_pass(forward, dist, px, py, width, height):
    rows = range(1, height - 1) if forward else range(height - 2, 0, -1)
    updates = 0
    # the per-row visiting order does not depend on y
    order = list(_row_order(forward, width))
    for y in rows:
        for x, offsets in order:
            for ox, oy in offsets:
                if update_point(dist, px, py, x, y, ox, oy, width):
                    updates += 1
    return updates


@trace(label="propagate")
def propagate(scratch: ScratchBuffer, width, height):
    """
    Run both passes over a seeded width x height closest-point grid.

    Returns the number of point updates made. Rows 0 and height-1 are read
    as neighbours but never updated.
    """
    tracer = get_tracer()
    distance, points = scratch.grids(width, height)

    # scalar indexing into python lists is much faster than into numpy arrays
    dist = distance.ravel().tolist()
    px = points[..., 0].ravel().tolist()
    py = points[..., 1].ravel().tolist()

    total = 0
    for forward in (True, False):
        name = "forward" if forward else "backward"
        with tracer.span(f"{name}_pass", module="propagate"):
            updates = _run_pass(forward, dist, px, py, width, height)
            tracer.event(f"{name} pass updates={updates}", level="DEBUG")
        total += updates

    distance[...] = np.asarray(dist, dtype=np.float32).reshape(height, width)
    points[..., 0] = np.asarray(px, dtype=np.float32).reshape(height, width)
    points[..., 1] = np.asarray(py, dtype=np.float32).reshape(height, width)
    return total
