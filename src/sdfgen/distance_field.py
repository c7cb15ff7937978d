"""
Entry points for distance field generation.

Antialiased coverage grids in, 8-bit narrow band distance fields out.
White (255) pixels are the shape, 0 pixels are background, and intermediate
values are expected to be a box-filter sampling of a crisp edge. An
antialiased region wider than one pixel makes the result inaccurate.

Two paths are offered:
- build_distance_field / build_distance_field_into: seed boundary points,
  propagate them with a two-pass 8SSEDT and quantize with separate inside
  and outside radii. In-place (out is coverage) is supported.
- coverage_to_distance_field: single pass, fixed sqrt(2) pixel band, no
  scratch memory, distinct buffers required.
"""

import numpy as np

from sdfgen.kernel.coverage import coverage_to_distance_field
from sdfgen.kernel.propagate import PASS_COUNT, propagate
from sdfgen.kernel.quantize import quantize
from sdfgen.kernel.scratch import ScratchBuffer
from sdfgen.kernel.seed import seed_closest_points
from sdfgen.models import FieldMode, FieldStats, InsideMode, RadiusPair
from sdfgen.raster import CHANNEL_INDEX, channel_index, channel_view, validate_pair
from sdfgen.tracer import get_tracer, trace


ALPHA_INDEX = CHANNEL_INDEX["a"]


__all__ = [
    "build_distance_field",
    "build_distance_field_into",
    "coverage_to_distance_field",
    "build_channel_fields",
    "distance_field_from_config",
]


@trace(label="build_distance_field_into", arg_names=["outside_radius", "inside_radius"])
def build_distance_field_into(out, outside_radius, inside_radius, coverage, scratch,
                              inside_mode=InsideMode.SIGNED):
    """
    Build a distance field using caller-owned scratch.

    Args:
        out: writable (height, width) uint8 grid, may be coverage itself
        outside_radius: band radius in pixels outside the shape
        inside_radius: band radius in pixels inside the shape
        coverage: (height, width) uint8 coverage grid
        scratch: ScratchBuffer able to hold width x height entries
        inside_mode: InsideMode.SIGNED or InsideMode.UNSIGNED

    Returns:
        FieldStats for the run.

    Raises ValueError on mismatched or undersized grids, scratch that does
    not fit, or non-positive radii.
    """
    tracer = get_tracer()

    radii = RadiusPair(outside_radius=outside_radius, inside_radius=inside_radius)
    inside_mode = InsideMode(inside_mode)
    validate_pair(out, coverage)
    height, width = coverage.shape
    if not scratch.fits(width, height):
        raise ValueError(
            f"Scratch of {scratch.capacity} entries cannot hold a {width}x{height} grid"
        )

    with tracer.span("reset_scratch", module="distance_field"):
        scratch.reset(width, height)

    seeded = seed_closest_points(coverage, scratch)
    propagate(scratch, width, height)

    distance, _ = scratch.grids(width, height)
    quantize(out, coverage, distance, radii, inside_mode)

    return FieldStats(
        width=width,
        height=height,
        seeded_pixels=seeded,
        passes=PASS_COUNT,
        radii=radii,
        inside_mode=inside_mode,
    )


@trace(label="build_distance_field")
def build_distance_field(out, outside_radius, inside_radius, coverage,
                         inside_mode=InsideMode.SIGNED):
    """
    Build a distance field, allocating scratch for the duration of the call.

    Returns True on success and False if the scratch memory could not be
    allocated, in which case out is left untouched.
    """
    validate_pair(out, coverage)
    height, width = coverage.shape

    scratch = ScratchBuffer.allocate(width, height)
    if scratch is None:
        return False

    build_distance_field_into(out, outside_radius, inside_radius, coverage, scratch,
                              inside_mode=inside_mode)
    return True


@trace(label="build_channel_fields")
def build_channel_fields(pixels, channels="a", outside_radius=64.0, inside_radius=None,
                         mode=FieldMode.EDT, inside_mode=InsideMode.SIGNED):
    """
    Replace selected channels of an interleaved (h, w, c) image with their
    distance fields, in place.

    Channels are letters from "rgba" or integer indices. A channel named
    more than once is transformed once. Alpha is skipped with a WARN event
    when the image has fewer than four channels; any other missing channel
    raises ValueError. One scratch buffer is shared by all channels of the
    propagated path. inside_radius defaults to outside_radius.

    Returns a dict mapping each processed channel to its FieldStats (None
    for the single pass path).
    """
    tracer = get_tracer()
    if inside_radius is None:
        inside_radius = outside_radius
    mode = FieldMode(mode)

    if pixels.ndim != 3:
        raise ValueError(f"Expected an (h, w, c) array, got shape {pixels.shape}")

    selected = {}
    for channel in channels:
        index = channel_index(channel)
        if index == ALPHA_INDEX and pixels.shape[2] <= ALPHA_INDEX:
            tracer.event(f"Skipping alpha, image has {pixels.shape[2]} channels", level="WARN")
            continue
        selected.setdefault(index, channel)

    views = [(channel, channel_view(pixels, channel)) for channel in selected.values()]
    height, width = pixels.shape[:2]

    results = {}
    scratch = None
    if mode is FieldMode.EDT:
        scratch = ScratchBuffer.allocate(width, height)
        if scratch is None:
            raise MemoryError(f"Cannot allocate scratch for a {width}x{height} image")

    for channel, view in views:
        with tracer.span(f"channel_{channel}", module="distance_field"):
            if mode is FieldMode.EDT:
                results[channel] = build_distance_field_into(
                    view, outside_radius, inside_radius, view, scratch, inside_mode=inside_mode
                )
            else:
                source = view.copy()
                coverage_to_distance_field(view, source)
                results[channel] = None

    return results


def distance_field_from_config(coverage, config):
    """
    Build a new distance field array for a coverage grid using SdfConfig.

    Dispatches on config.distance.mode.
    """
    settings = config.distance
    out = np.zeros(coverage.shape, dtype=np.uint8)

    if FieldMode(settings.mode) is FieldMode.COVERAGE:
        return coverage_to_distance_field(out, coverage)

    ok = build_distance_field(
        out,
        settings.outside_radius,
        settings.inside_radius,
        coverage,
        inside_mode=settings.inside_mode,
    )
    if not ok:
        raise MemoryError(f"Cannot allocate scratch for a {coverage.shape[1]}x{coverage.shape[0]} image")
    return out
