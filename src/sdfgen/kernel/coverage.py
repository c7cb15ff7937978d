"""
Single-pass coverage to distance field conversion.

The cheapest way to turn an antialiased image into a contour texture: each
pixel's edge distance is estimated from its own 3x3 neighbourhood, with no
propagation. The result is only meaningful within about sqrt(2) pixels of
the edge; farther pixels saturate to 0 or 255. Good enough for sharp
rendering, not for wide outlines or drop shadows.
"""

import numpy as np

from sdfgen.kernel.edge import SDF_SQRT2, estimate_edge_distance_array
from sdfgen.kernel.seed import FULL, compute_gradient, flat_mask
from sdfgen.raster import validate_pair, zero_border
from sdfgen.tracer import get_tracer, trace


AXIS_EPSILON = 0.0001


def edge_field_values(coverage):
    """
    Byte values for the interior pixels of a coverage grid, shape (h-2, w-2).
    """
    center = coverage[1:-1, 1:-1]
    gx, gy = compute_gradient(coverage)
    gx = np.abs(gx[1:-1, 1:-1].astype(np.float64))
    gy = np.abs(gy[1:-1, 1:-1].astype(np.float64))
    a = center.astype(np.float64) / 255.0

    axis = gx < AXIS_EPSILON
    glen = np.sqrt(gx * gx + gy * gy)
    safe = np.where(axis, 1.0, glen)
    d = estimate_edge_distance_array(gx / safe, gy / safe, a)
    d = np.where(axis, (0.5 - a) * SDF_SQRT2, d)
    d *= 1.0 / SDF_SQRT2

    values = (np.clip(0.5 - d, 0.0, 1.0) * 255.0).astype(np.uint8)

    flat = flat_mask(coverage)
    values[flat] = np.where(center[flat] == FULL, 255, 0)
    return values


@trace(label="coverage_to_distance_field")
def coverage_to_distance_field(out, coverage):
    """
    Convert a coverage grid to a distance field with a sqrt(2) pixel band.

    out and coverage must be distinct buffers: neighbours of later pixels
    would otherwise be overwritten before they are read. Sharing memory
    raises ValueError. Border rows and columns of out are set to 0.
    """
    validate_pair(out, coverage)
    if np.shares_memory(out, coverage):
        raise ValueError("coverage_to_distance_field requires distinct input and output buffers")

    height, width = coverage.shape
    zero_border(out)
    if width > 2 and height > 2:
        out[1:-1, 1:-1] = edge_field_values(coverage)

    get_tracer().event(f"Single pass field {width}x{height}")
    return out
