"""
Sub-pixel edge distance under a box-filter coverage model.

Given the local gradient direction and the coverage of a pixel, estimate the
signed distance from the pixel centre to the ideal straight edge that would
produce that coverage. Positive values are outside the shape.
"""

import math

import numpy as np


SDF_SQRT2 = math.sqrt(2.0)

# 3x3 gradient kernels: diagonal taps 1, cardinal taps sqrt(2)
GRADIENT_X_KERNEL = np.array([
    [-1.0, 0.0, 1.0],
    [-SDF_SQRT2, 0.0, SDF_SQRT2],
    [-1.0, 0.0, 1.0],
], dtype=np.float32)
GRADIENT_Y_KERNEL = GRADIENT_X_KERNEL.T.copy()


def estimate_edge_distance(gx, gy, a):
    """
    Signed distance from the pixel centre to the edge, in pixels.

    gx, gy: gradient direction (normalized for seeding)
    a: coverage in [0, 1]
    """
    if gx == 0 or gy == 0:
        # axis aligned edge, or no direction at all: linear estimate
        return 0.5 - a

    # symmetric in sign and transposition, so fold into the first octant
    gx = abs(gx)
    gy = abs(gy)
    if gx < gy:
        gx, gy = gy, gx

    a1 = 0.5 * gy / gx
    if a < a1:
        return 0.5 * (gx + gy) - math.sqrt(2.0 * gx * gy * a)
    if a < 1.0 - a1:
        return (0.5 - a) * gx
    return -0.5 * (gx + gy) + math.sqrt(2.0 * gx * gy * (1.0 - a))


def estimate_edge_distance_array(gx, gy, a):
    """Vectorized estimate_edge_distance over same-shaped arrays."""
    gx = np.asarray(gx, dtype=np.float64)
    gy = np.asarray(gy, dtype=np.float64)
    a = np.asarray(a, dtype=np.float64)

    linear = (gx == 0) | (gy == 0)

    ax = np.abs(gx)
    ay = np.abs(gy)
    hi = np.maximum(ax, ay)
    lo = np.minimum(ax, ay)

    with np.errstate(divide="ignore", invalid="ignore"):
        a1 = np.where(linear, 0.0, 0.5 * lo / np.where(hi == 0, 1.0, hi))

    prod = 2.0 * hi * lo
    low_branch = 0.5 * (hi + lo) - np.sqrt(prod * a)
    mid_branch = (0.5 - a) * hi
    high_branch = -0.5 * (hi + lo) + np.sqrt(prod * (1.0 - a))

    d = np.where(a < a1, low_branch, np.where(a < 1.0 - a1, mid_branch, high_branch))
    return np.where(linear, 0.5 - a, d)
