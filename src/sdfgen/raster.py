"""
Raster helpers for sdfgen.

Grids are 2-D uint8 numpy arrays of shape (height, width). Flat byte
buffers addressed as pixel[offset + x * channels + y * stride] are wrapped
into such arrays without copying, so a single channel of an interleaved
image can be transformed in place.
"""

import numpy as np


CHANNEL_INDEX = {"r": 0, "g": 1, "b": 2, "a": 3}


def strided_view(buffer, width, height, stride, offset=0, channels=1):
    """
    Wrap a flat byte buffer as a (height, width) uint8 view.

    Args:
        buffer: bytes, bytearray, memoryview or 1-D uint8 array
        width, height: logical grid size in pixels
        stride: bytes between row starts
        offset: byte offset of pixel (0, 0), e.g. the channel index
        channels: bytes between horizontally adjacent samples

    The view is writable when the buffer is. Raises ValueError if the
    addressed region runs past the end of the buffer.
    """
    flat = np.frombuffer(buffer, dtype=np.uint8) if not isinstance(buffer, np.ndarray) else buffer.reshape(-1)
    if flat.dtype != np.uint8:
        raise ValueError(f"Expected a byte buffer, got dtype {flat.dtype}")

    last = offset + (width - 1) * channels + (height - 1) * stride
    if width < 1 or height < 1 or offset < 0 or last >= flat.size:
        raise ValueError(
            f"Grid {width}x{height} stride={stride} offset={offset} "
            f"does not fit a buffer of {flat.size} bytes"
        )

    return np.lib.stride_tricks.as_strided(
        flat[offset:],
        shape=(height, width),
        strides=(stride, channels),
        writeable=flat.flags.writeable,
    )


def channel_index(channel):
    """Map a channel letter ('r', 'g', 'b', 'a') or an integer to its index."""
    if isinstance(channel, str):
        if channel.lower() not in CHANNEL_INDEX:
            raise ValueError(f"Unknown channel {channel!r} (expected one of 'rgba')")
        return CHANNEL_INDEX[channel.lower()]
    return int(channel)


def channel_view(pixels, channel):
    """Return the 2-D view of one channel ('r', 'g', 'b', 'a' or an index)."""
    if pixels.ndim != 3:
        raise ValueError(f"Expected an (h, w, c) array, got shape {pixels.shape}")
    index = channel_index(channel)
    if index >= pixels.shape[2]:
        raise ValueError(f"Channel {channel!r} not present in a {pixels.shape[2]}-channel image")
    return pixels[:, :, index]


def validate_grid(grid, name="grid", min_size=2):
    """
    Check that a grid is a 2-D uint8 array of at least min_size on each side.

    Raises ValueError otherwise.
    """
    if not isinstance(grid, np.ndarray):
        raise ValueError(f"{name} must be a numpy array, got {type(grid).__name__}")
    if grid.ndim != 2:
        raise ValueError(f"{name} must be 2-D, got shape {grid.shape}")
    if grid.dtype != np.uint8:
        raise ValueError(f"{name} must be uint8, got {grid.dtype}")
    height, width = grid.shape
    if width < min_size or height < min_size:
        raise ValueError(f"{name} must be at least {min_size}x{min_size}, got {width}x{height}")


def validate_pair(out, coverage):
    """Validate an output/input grid pair of matching extent."""
    validate_grid(coverage, "coverage")
    validate_grid(out, "out")
    if out.shape != coverage.shape:
        raise ValueError(f"out shape {out.shape} does not match coverage shape {coverage.shape}")
    if not out.flags.writeable:
        raise ValueError("out must be writable")


def zero_border(grid):
    """Set the outermost rows and columns of a grid to 0."""
    grid[0, :] = 0
    grid[-1, :] = 0
    grid[:, 0] = 0
    grid[:, -1] = 0
