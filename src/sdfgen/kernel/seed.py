"""
Boundary seeding for the distance transform.

Finds the antialiased pixels of a coverage image and places, for each, an
estimate of the nearest point on the ideal edge into the closest-point grid.
Every pixel is independent of the others, so the whole interior is handled
with array operations.
"""

import cv2
import numpy as np

from sdfgen.kernel.edge import GRADIENT_X_KERNEL, GRADIENT_Y_KERNEL, estimate_edge_distance_array
from sdfgen.kernel.scratch import ScratchBuffer
from sdfgen.tracer import get_tracer, trace


FULL = 255
EMPTY = 0

GRADIENT_EPSILON = 0.001      # both components below this: flat, no edge
NORMALIZE_EPSILON = 0.0001    # squared length above this: normalize


def compute_gradient(coverage):
    """
    3x3 gradient of a coverage grid as two float32 arrays of the same shape.

    Values on the outermost rows and columns use replicated borders and are
    not meaningful; callers only read the interior.
    """
    src = np.ascontiguousarray(coverage, dtype=np.float32)
    gx = cv2.filter2D(src, cv2.CV_32F, GRADIENT_X_KERNEL, borderType=cv2.BORDER_REPLICATE)
    gy = cv2.filter2D(src, cv2.CV_32F, GRADIENT_Y_KERNEL, borderType=cv2.BORDER_REPLICATE)
    return gx, gy


def flat_mask(coverage):
    """
    Interior pixels that carry no edge information, shape (h-2, w-2).

    A pixel is flat when it is fully covered, or when it is empty and none of
    its four orthogonal neighbours is fully covered. An empty pixel touching
    a full one is a hard, unfiltered edge and is kept.
    """
    center = coverage[1:-1, 1:-1]
    touches_full = (
        (coverage[1:-1, :-2] == FULL)
        | (coverage[1:-1, 2:] == FULL)
        | (coverage[:-2, 1:-1] == FULL)
        | (coverage[2:, 1:-1] == FULL)
    )
    return (center == FULL) | ((center == EMPTY) & ~touches_full)


def seed_mask(coverage, gradient=None):
    """
    Full-size boolean mask of the pixels that receive a boundary seed.

    Border pixels are never seeded.
    """
    gx, gy = gradient if gradient is not None else compute_gradient(coverage)
    inner_gx = gx[1:-1, 1:-1]
    inner_gy = gy[1:-1, 1:-1]
    no_edge = (np.abs(inner_gx) < GRADIENT_EPSILON) & (np.abs(inner_gy) < GRADIENT_EPSILON)

    mask = np.zeros(coverage.shape, dtype=bool)
    mask[1:-1, 1:-1] = ~(flat_mask(coverage) | no_edge)
    return mask


@trace(label="seed_closest_points")
def seed_closest_points(coverage, scratch: ScratchBuffer):
    """
    Write boundary seeds for a coverage grid into scratch.

    The scratch grid must already be reset. Returns the number of seeded
    pixels.
    """
    tracer = get_tracer()
    height, width = coverage.shape
    distance, points = scratch.grids(width, height)

    gx, gy = compute_gradient(coverage)
    mask = seed_mask(coverage, (gx, gy))
    ys, xs = np.nonzero(mask)
    if ys.size == 0:
        tracer.event("No boundary pixels found")
        return 0

    sx = gx[ys, xs].astype(np.float64)
    sy = gy[ys, xs].astype(np.float64)
    glen = sx * sx + sy * sy
    long_enough = glen > NORMALIZE_EPSILON
    inv = np.where(long_enough, 1.0 / np.sqrt(np.where(long_enough, glen, 1.0)), 1.0)
    sx *= inv
    sy *= inv

    a = coverage[ys, xs].astype(np.float64) / 255.0
    d = estimate_edge_distance_array(sx, sy, a)

    px = xs + sx * d
    py = ys + sy * d
    points[ys, xs, 0] = px
    points[ys, xs, 1] = py
    distance[ys, xs] = (px - xs) ** 2 + (py - ys) ** 2

    tracer.event(f"Seeded {ys.size} boundary pixels")
    return int(ys.size)
