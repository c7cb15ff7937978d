"""
Configuration management for sdfgen.

Loads YAML configuration with defaults for the distance field kernel and
runtime tracing.
"""

import os
from dataclasses import dataclass, field

import yaml


@dataclass
class FieldConfig:
    """Configuration for distance field generation."""
    mode: str = "edt"  # "edt" (propagated) or "coverage" (single pass)
    outside_radius: float = 64.0
    inside_radius: float = 64.0
    inside_mode: str = "signed"  # "signed" or "unsigned"
    channels: str = "a"  # subset of "rgba" for interleaved inputs


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class SdfConfig:
    """Complete sdfgen configuration."""
    distance: FieldConfig = field(default_factory=FieldConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


VALID_MODES = ("edt", "coverage")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = SdfConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    validate_config(config)
    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass. Unknown keys are ignored."""
    for section in ("distance", "tracing"):
        if section in yaml_data:
            target = getattr(config, section)
            for key, value in (yaml_data[section] or {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)
    return config


def validate_config(config):
    """
    Check config values the kernel cannot run with.

    Raises ValueError on an unknown mode or channel letter.
    """
    if config.distance.mode not in VALID_MODES:
        raise ValueError(f"Unknown field mode: {config.distance.mode!r} (expected one of {VALID_MODES})")

    bad = [c for c in config.distance.channels.lower() if c not in "rgba"]
    if bad or not config.distance.channels:
        raise ValueError(f"Invalid channel selection: {config.distance.channels!r}")


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = SdfConfig()

    yaml_data = {
        "distance": {
            "mode": config.distance.mode,
            "outside_radius": config.distance.outside_radius,
            "inside_radius": config.distance.inside_radius,
            "inside_mode": config.distance.inside_mode,
            "channels": config.distance.channels,
        },
        "tracing": {
            "enabled": config.tracing.enabled,
            "level": config.tracing.level,
        },
    }

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
