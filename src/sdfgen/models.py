"""
Pydantic data models for sdfgen.

Validated parameters passed into the kernel and the summary it returns.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InsideMode(str, Enum):
    """How pixels on the filled side of the shape are encoded."""
    SIGNED = "signed"      # inside pixels map above 128, outside below
    UNSIGNED = "unsigned"  # every pixel uses the outside ramp


class FieldMode(str, Enum):
    """Which generation path to run."""
    EDT = "edt"
    COVERAGE = "coverage"


class RadiusPair(BaseModel):
    """Narrow band radii in pixels. They may differ for asymmetric bands."""
    outside_radius: float = Field(..., gt=0.0)
    inside_radius: float = Field(..., gt=0.0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def outside_scale(self):
        return 1.0 / self.outside_radius

    @property
    def inside_scale(self):
        return 1.0 / self.inside_radius


class FieldStats(BaseModel):
    """Summary of one distance field build."""
    width: int
    height: int
    seeded_pixels: int = 0
    passes: int = 0
    radii: RadiusPair
    inside_mode: InsideMode = InsideMode.SIGNED

    model_config = ConfigDict(extra="forbid")
