"""Tests for the command-line interface."""

import os

import numpy as np
import yaml


class TestBuildCommand:
    """Tests for `sdfgen build`."""

    def test_build_coverage_array(self, temp_dir, circle_image):
        """A 2-D array is transformed and saved."""
        from sdfgen.cli import main
        from sdfgen.distance_field import build_distance_field

        src = os.path.join(temp_dir, "glyph.npy")
        dst = os.path.join(temp_dir, "glyph_sdf.npy")
        np.save(src, circle_image)

        code = main(["build", "--input", src, "--out", dst,
                     "--outside-radius", "6", "--inside-radius", "6"])

        assert code == 0
        expected = np.empty_like(circle_image)
        build_distance_field(expected, 6.0, 6.0, circle_image)
        np.testing.assert_array_equal(np.load(dst), expected)

    def test_build_interleaved_channels(self, temp_dir, rgba_image):
        """A 3-D array has only the selected channels replaced."""
        from sdfgen.cli import main

        src = os.path.join(temp_dir, "sprite.npy")
        dst = os.path.join(temp_dir, "sprite_sdf.npy")
        np.save(src, rgba_image)

        code = main(["build", "-i", src, "-o", dst, "--mode", "coverage", "--channels", "a"])

        assert code == 0
        result = np.load(dst)
        assert result.shape == rgba_image.shape
        np.testing.assert_array_equal(result[..., :3], rgba_image[..., :3])
        assert not np.array_equal(result[..., 3], rgba_image[..., 3])

    def test_rgb_input_with_default_channels(self, temp_dir, circle_image):
        """An RGB array under the default alpha selection is written unchanged."""
        from sdfgen.cli import main

        rgb = np.stack([circle_image] * 3, axis=-1)
        src = os.path.join(temp_dir, "rgb.npy")
        dst = os.path.join(temp_dir, "rgb_sdf.npy")
        np.save(src, rgb)

        assert main(["build", "-i", src, "-o", dst]) == 0
        np.testing.assert_array_equal(np.load(dst), rgb)

    def test_tracing_section_of_config_used(self, temp_dir, circle_image):
        """Without trace flags the tracing section of the config drives the tracer."""
        from sdfgen.cli import main
        from sdfgen.tracer import configure_tracer

        src = os.path.join(temp_dir, "glyph.npy")
        log = os.path.join(temp_dir, "trace.log")
        config_path = os.path.join(temp_dir, "sdfgen.yaml")
        np.save(src, circle_image)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"tracing": {"enabled": True, "level": "INFO", "file_path": log}}, f)

        try:
            code = main(["build", "-i", src, "-o", os.path.join(temp_dir, "o.npy"),
                         "-c", config_path, "--outside-radius", "4"])
        finally:
            configure_tracer(enabled=False)

        assert code == 0
        with open(log, encoding="utf-8") as f:
            text = f.read()
        assert "cli_build" in text
        assert "seed_closest_points" in text

    def test_trace_flags_override_config(self, temp_dir, circle_image):
        """--trace-level wins over the level in the config."""
        from sdfgen.cli import main
        from sdfgen.tracer import configure_tracer

        src = os.path.join(temp_dir, "glyph.npy")
        log = os.path.join(temp_dir, "trace.log")
        config_path = os.path.join(temp_dir, "sdfgen.yaml")
        np.save(src, circle_image)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"tracing": {"enabled": True, "level": "INFO", "file_path": log}}, f)

        try:
            code = main(["build", "-i", src, "-o", os.path.join(temp_dir, "o.npy"),
                         "-c", config_path, "--outside-radius", "4", "--trace-level", "ERROR"])
        finally:
            configure_tracer(enabled=False)

        assert code == 0
        with open(log, encoding="utf-8") as f:
            assert f.read() == ""

    def test_bad_dtype_fails(self, temp_dir, capsys):
        """Non-byte input exits with 1 and an error message."""
        from sdfgen.cli import main

        src = os.path.join(temp_dir, "float.npy")
        np.save(src, np.zeros((8, 8), dtype=np.float32))

        code = main(["build", "-i", src, "-o", os.path.join(temp_dir, "out.npy")])

        assert code == 1
        assert "uint8" in capsys.readouterr().err

    def test_missing_input_fails(self, temp_dir):
        """A missing input file exits with 1."""
        from sdfgen.cli import main

        code = main(["build", "-i", os.path.join(temp_dir, "nope.npy"), "-o", os.path.join(temp_dir, "o.npy")])

        assert code == 1


class TestInitConfigCommand:
    """Tests for `sdfgen init-config`."""

    def test_writes_config(self, temp_dir):
        """init-config writes a loadable YAML file."""
        from sdfgen.cli import main
        from sdfgen.config import load_config

        path = os.path.join(temp_dir, "sdfgen.yaml")

        assert main(["init-config", "--out", path]) == 0
        assert load_config(path).distance.mode == "edt"

    def test_no_command_prints_help(self, capsys):
        """Running without a command prints usage."""
        from sdfgen.cli import main

        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
