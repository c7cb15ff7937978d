"""
Command-line interface for sdfgen.

Transforms coverage arrays stored as .npy files and writes default
configuration files.
"""

import argparse
import sys

import numpy as np

from sdfgen.config import load_config, save_default_config, validate_config
from sdfgen.tracer import configure_tracer, get_tracer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="sdfgen: Convert antialiased coverage arrays to signed distance fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Build command
    build_parser = subparsers.add_parser("build", help="Build a distance field from a .npy array")
    build_parser.add_argument(
        "--input", "-i",
        required=True,
        help="Input uint8 .npy array, (h, w) coverage or (h, w, c) interleaved",
    )
    build_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output .npy path",
    )
    build_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    build_parser.add_argument(
        "--mode",
        choices=["edt", "coverage"],
        default=None,
        help="Propagated transform or single pass coverage conversion",
    )
    build_parser.add_argument(
        "--outside-radius",
        type=float,
        default=None,
        help="Narrow band radius outside the shape, in pixels",
    )
    build_parser.add_argument(
        "--inside-radius",
        type=float,
        default=None,
        help="Narrow band radius inside the shape, in pixels",
    )
    build_parser.add_argument(
        "--inside-mode",
        choices=["signed", "unsigned"],
        default=None,
        help="Encode the filled side above 128 (signed) or with the outside ramp (unsigned)",
    )
    build_parser.add_argument(
        "--channels",
        default=None,
        help="Channels of an interleaved input to transform, e.g. 'a' or 'rgb'",
    )
    build_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    build_parser.add_argument(
        "--trace-level",
        default=None,
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level (default: tracing.level from the config)",
    )
    build_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    build_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="sdfgen_config.yaml",
        help="Output path for config file",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "build":
        return handle_build(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def apply_overrides(config, args):
    """Apply command-line values over the loaded configuration."""
    overrides = {
        "mode": args.mode,
        "outside_radius": args.outside_radius,
        "inside_radius": args.inside_radius,
        "inside_mode": args.inside_mode,
        "channels": args.channels,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config.distance, key, value)
    validate_config(config)
    return config


def tracing_options(config, args):
    """Trace flags given on the command line win over the tracing section."""
    tracing = config.tracing
    return {
        "enabled": args.trace or tracing.enabled,
        "level": args.trace_level or tracing.level,
        "file_path": args.trace_file or tracing.file_path,
        "json_output": args.trace_json or tracing.json_output,
    }


def handle_build(args):
    """Handle the build command."""
    tracer = get_tracer()

    try:
        from sdfgen.distance_field import build_channel_fields, distance_field_from_config

        config = apply_overrides(load_config(args.config), args)
        configure_tracer(**tracing_options(config, args))

        with tracer.span("cli_build", module="cli"):
            pixels = np.load(args.input)
            if pixels.dtype != np.uint8:
                raise ValueError(f"Input must be a uint8 array, got {pixels.dtype}")

            if pixels.ndim == 2:
                result = distance_field_from_config(pixels, config)
            elif pixels.ndim == 3:
                result = pixels.copy()
                build_channel_fields(
                    result,
                    channels=config.distance.channels,
                    outside_radius=config.distance.outside_radius,
                    inside_radius=config.distance.inside_radius,
                    mode=config.distance.mode,
                    inside_mode=config.distance.inside_mode,
                )
            else:
                raise ValueError(f"Input must be 2-D or 3-D, got shape {pixels.shape}")

            np.save(args.out, result)

        height, width = result.shape[:2]
        print(f"Distance field written to: {args.out}")
        print(f"  Size: {width}x{height}")
        print(f"  Mode: {config.distance.mode}")
        return 0

    except Exception as e:
        tracer.event(f"Build failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    finally:
        tracer.config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
