"""Pytest configuration for pixel-layers tests."""

import logging

import numpy as np
import pytest

from pixel_layers import Engine
from pixel_layers.blend import BLEND_FUNC

logging.basicConfig(level=logging.DEBUG)


def _make_engine(*pixels):
    buffer = np.array(pixels, dtype=np.uint8).reshape(-1)
    return Engine(len(pixels), 1, buffer)


@pytest.fixture
def make_engine():
    """Factory building a 1-row engine from RGBA tuples."""
    return _make_engine


@pytest.fixture
def gray_engine():
    return _make_engine((100, 100, 100, 255), (100, 100, 100, 128))


@pytest.fixture
def mixed_engine():
    return _make_engine(
        (0, 0, 0, 255),
        (255, 255, 255, 0),
        (12, 130, 250, 77),
        (128, 64, 32, 255),
    )


@pytest.fixture
def custom_modes():
    """Names registered during a test are removed afterwards."""
    names = []
    yield names
    for name in names:
        BLEND_FUNC.pop(name, None)
