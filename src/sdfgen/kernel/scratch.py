"""
Working storage for the closest-point grid.

One entry per pixel: the best known squared distance to a boundary point
and that point's sub-pixel coordinates. Held as two typed arrays rather
than one reinterpreted byte block.
"""

import numpy as np

from sdfgen.tracer import get_tracer


# Larger than any squared distance a real grid can produce
SDF_BIG = 1e37

FLOATS_PER_PIXEL = 3  # squared distance + point x + point y


class ScratchBuffer:
    """
    Closest-point grid storage for one transform at a time.

    distance: float32 [width * height], squared distance to the stored point
    points: float32 [width * height, 2], boundary point (x, y)
    """

    def __init__(self, width, height):
        if width < 1 or height < 1:
            raise ValueError(f"Scratch size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.distance = np.empty(width * height, dtype=np.float32)
        self.points = np.empty((width * height, 2), dtype=np.float32)

    @classmethod
    def allocate(cls, width, height):
        """
        Allocate scratch for a width x height grid.

        Returns None when the memory cannot be obtained.
        """
        try:
            return cls(width, height)
        except MemoryError:
            get_tracer().event(
                f"Scratch allocation failed for {width}x{height}",
                level="ERROR",
                nbytes=required_nbytes(width, height),
            )
            return None

    @property
    def capacity(self):
        return self.distance.size

    @property
    def nbytes(self):
        return self.distance.nbytes + self.points.nbytes

    def fits(self, width, height):
        """True if the buffer can hold a width x height grid."""
        return width * height <= self.capacity

    def grids(self, width, height):
        """
        Return (distance, points) reshaped to (height, width) and
        (height, width, 2). Both are views into this buffer.
        """
        if not self.fits(width, height):
            raise ValueError(
                f"Scratch of {self.capacity} entries cannot hold a {width}x{height} grid"
            )
        n = width * height
        return self.distance[:n].reshape(height, width), self.points[:n].reshape(height, width, 2)

    def reset(self, width, height):
        """Mark every entry of a width x height grid as unknown."""
        distance, points = self.grids(width, height)
        distance.fill(SDF_BIG)
        points.fill(0.0)


def required_nbytes(width, height):
    """Bytes of scratch needed for a width x height grid."""
    return width * height * FLOATS_PER_PIXEL * np.dtype(np.float32).itemsize
