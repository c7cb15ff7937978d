"""Tests for 8-bit quantization of propagated distances."""

import numpy as np
import pytest


def _radii(outside=4.0, inside=4.0):
    from sdfgen.models import RadiusPair
    return RadiusPair(outside_radius=outside, inside_radius=inside)


class TestEncodeAlpha:
    """Tests for the byte encoding."""

    def test_half_maps_to_128(self):
        """Alpha 0.5 lands on the middle of the byte range."""
        from sdfgen.kernel.quantize import encode_alpha

        value = int(encode_alpha(np.array([0.5]))[0])
        assert 127 <= value <= 128

    def test_clamped(self):
        """Out of range alphas saturate."""
        from sdfgen.kernel.quantize import encode_alpha

        values = encode_alpha(np.array([-5.0, 0.0, 1.0, 7.0]))
        assert values.tolist() == [0, 0, 255, 255]


class TestQuantize:
    """Tests for the quantizer."""

    def test_zero_distance_is_mid_grey(self):
        """Pixels on the edge encode to about 128."""
        from sdfgen.kernel.quantize import quantize

        coverage = np.zeros((5, 5), dtype=np.uint8)
        out = np.empty_like(coverage)

        quantize(out, coverage, np.zeros((5, 5), dtype=np.float32), _radii())

        assert np.all((out[1:-1, 1:-1] >= 127) & (out[1:-1, 1:-1] <= 128))

    def test_border_forced_to_zero(self):
        """Border rows and columns are 0 regardless of distance."""
        from sdfgen.kernel.quantize import quantize

        coverage = np.full((6, 7), 255, dtype=np.uint8)
        out = np.full_like(coverage, 99)

        quantize(out, coverage, np.zeros((6, 7), dtype=np.float32), _radii())

        assert np.all(out[0] == 0) and np.all(out[-1] == 0)
        assert np.all(out[:, 0] == 0) and np.all(out[:, -1] == 0)

    def test_outside_ramp_reaches_zero_at_radius(self):
        """An outside pixel one radius away encodes to 0."""
        from sdfgen.kernel.quantize import quantize

        coverage = np.zeros((3, 3), dtype=np.uint8)
        distance = np.full((3, 3), 16.0, dtype=np.float32)
        out = np.empty_like(coverage)

        quantize(out, coverage, distance, _radii(outside=4.0))

        assert out[1, 1] == 0

    def test_signed_inside_ramp(self):
        """Inside pixels rise above 128 and saturate at the inside radius."""
        from sdfgen.kernel.quantize import quantize
        from sdfgen.models import InsideMode

        coverage = np.full((3, 4), 255, dtype=np.uint8)
        distance = np.array([
            [0.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 4.0, 0.0],
            [0.0, 0.0, 0.0, 0.0],
        ], dtype=np.float32)
        out = np.empty_like(coverage)

        quantize(out, coverage, distance, _radii(outside=1.0, inside=2.0), InsideMode.SIGNED)

        assert 190 <= out[1, 1] <= 192
        assert out[1, 2] == 255

    def test_radii_are_independent(self):
        """Outside radius scales outside pixels, inside radius scales inside pixels."""
        from sdfgen.kernel.quantize import quantize

        coverage = np.array([
            [0, 0, 0, 0],
            [0, 0, 255, 0],
            [0, 0, 0, 0],
        ], dtype=np.uint8)
        distance = np.full((3, 4), 4.0, dtype=np.float32)
        out = np.empty_like(coverage)

        quantize(out, coverage, distance, _radii(outside=8.0, inside=2.0))

        # outside: (1 - 2/8) / 2 -> 96, inside: saturated
        assert 95 <= out[1, 1] <= 96
        assert out[1, 2] == 255

    def test_unsigned_uses_outside_ramp_everywhere(self):
        """In unsigned mode covered pixels fall below 128 with distance."""
        from sdfgen.kernel.quantize import quantize
        from sdfgen.models import InsideMode

        coverage = np.full((3, 3), 255, dtype=np.uint8)
        distance = np.full((3, 3), 4.0, dtype=np.float32)
        out = np.empty_like(coverage)

        quantize(out, coverage, distance, _radii(outside=4.0, inside=1.0), InsideMode.UNSIGNED)

        # (1 - 2/4) / 2 -> 64
        assert 63 <= out[1, 1] <= 64

    def test_unknown_distance_saturates(self):
        """Sentinel distances saturate to 0 outside and 255 inside in signed mode."""
        from sdfgen.kernel.quantize import quantize
        from sdfgen.kernel.scratch import SDF_BIG

        coverage = np.array([[0, 0, 0, 0], [0, 0, 255, 0], [0, 0, 0, 0]], dtype=np.uint8)
        distance = np.full((3, 4), SDF_BIG, dtype=np.float32)
        out = np.empty_like(coverage)

        quantize(out, coverage, distance, _radii())

        assert out[1, 1] == 0
        assert out[1, 2] == 255

    def test_in_place_on_coverage(self):
        """Writing into the coverage array reads the inside mask first."""
        from sdfgen.kernel.quantize import quantize

        coverage = np.full((3, 3), 255, dtype=np.uint8)
        expected = np.empty_like(coverage)
        distance = np.full((3, 3), 1.0, dtype=np.float32)

        quantize(expected, coverage.copy(), distance, _radii())
        quantize(coverage, coverage, distance, _radii())

        np.testing.assert_array_equal(coverage, expected)

    def test_invalid_mode_rejected(self):
        """Unknown inside modes raise ValueError."""
        from sdfgen.kernel.quantize import quantize

        coverage = np.zeros((3, 3), dtype=np.uint8)
        with pytest.raises(ValueError):
            quantize(coverage.copy(), coverage, np.zeros((3, 3), dtype=np.float32), _radii(), "mirror")
