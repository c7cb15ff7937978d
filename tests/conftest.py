"""Pytest fixtures for sdfgen tests."""

import tempfile

import cv2
import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def circle_image():
    """Antialiased filled circle on an empty background."""
    img = np.zeros((64, 64), dtype=np.uint8)
    cv2.circle(img, (32, 32), 12, 255, -1, lineType=cv2.LINE_AA)
    return img


@pytest.fixture
def step_edge_image():
    """Vertical edge: columns 0-19 covered, column 20 half covered, rest empty."""
    img = np.zeros((9, 40), dtype=np.uint8)
    img[:, :20] = 255
    img[:, 20] = 128
    return img


@pytest.fixture
def hard_edge_image():
    """Vertical edge without antialiasing."""
    img = np.zeros((8, 12), dtype=np.uint8)
    img[:, :5] = 255
    return img


@pytest.fixture
def rgba_image(circle_image):
    """Interleaved RGBA image with the circle in the alpha channel."""
    img = np.zeros((64, 64, 4), dtype=np.uint8)
    img[..., 0] = 200
    img[..., 1] = 100
    img[..., 2] = 50
    img[..., 3] = circle_image
    return img


@pytest.fixture
def default_config():
    """Create default configuration."""
    from sdfgen.config import SdfConfig
    return SdfConfig()
