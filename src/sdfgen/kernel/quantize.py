"""
Quantization of propagated distances into 8-bit narrow band values.

Outside the shape the byte falls from 128 at the edge to 0 at
outside_radius. In signed mode pixels on the filled side rise from 128 to
255 at inside_radius; in unsigned mode every pixel uses the outside ramp.
"""

import numpy as np

from sdfgen.models import InsideMode, RadiusPair
from sdfgen.raster import zero_border
from sdfgen.tracer import trace


# Coverage at or above this puts the pixel centre on the filled side
INSIDE_THRESHOLD = 128

ROUNDING_BIAS = 0.5 / 255.0


def encode_alpha(alpha):
    """Map alpha in [0, 1] (clamped) to bytes, truncating like a C cast."""
    return (np.clip(alpha + ROUNDING_BIAS, 0.0, 1.0) * 255.0).astype(np.uint8)


def inside_mask(coverage, inside_mode):
    """Pixels encoded with the inside ramp."""
    if InsideMode(inside_mode) is InsideMode.UNSIGNED:
        return np.zeros(coverage.shape, dtype=bool)
    return coverage >= INSIDE_THRESHOLD


@trace(label="quantize")
def quantize(out, coverage, distance, radii: RadiusPair, inside_mode=InsideMode.SIGNED):
    """
    Write the 8-bit field for a (height, width) grid of squared distances.

    out may be the same array as coverage; coverage is fully read before
    out is written. Border rows and columns are set to 0.
    """
    dist = np.sqrt(distance.astype(np.float64))
    dout = dist * radii.outside_scale
    din = dist * radii.inside_scale

    alpha = np.where(inside_mask(coverage, inside_mode), din * 0.5 + 0.5, (1.0 - dout) * 0.5)
    encoded = encode_alpha(alpha)

    out[...] = encoded
    zero_border(out)
    return out
