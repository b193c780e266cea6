"""
Pixel buffer helpers.

A pixel buffer is a flat, contiguous ``numpy.uint8`` array holding
interleaved R, G, B, A bytes. Every buffer in a stack has the length
``width * height * 4``.
"""

import logging
from typing import Optional

import numpy as np
from attrs import define, field

from pixel_layers.constants import CHANNELS, MAX_DIMENSION
from pixel_layers.validators import range_

logger = logging.getLogger(__name__)


@define(frozen=True)
class Dimensions:
    """
    Image dimensions shared by every buffer of an engine.

    .. py:attribute:: width

        Width in pixels.

    .. py:attribute:: height

        Height in pixels.
    """

    width: int = field(converter=int, validator=range_(1, MAX_DIMENSION))
    height: int = field(converter=int, validator=range_(1, MAX_DIMENSION))

    @property
    def size(self) -> int:
        """Buffer length in bytes."""
        return self.width * self.height * CHANNELS


def new_buffer(dimensions: Dimensions) -> np.ndarray:
    """Allocate a zero-filled (transparent black) buffer."""
    return np.zeros(dimensions.size, dtype=np.uint8)


def check_buffer(buffer: np.ndarray, size: Optional[int] = None) -> np.ndarray:
    """
    Validate that ``buffer`` is a flat uint8 RGBA buffer.

    :param buffer: Buffer to check.
    :param size: Expected length, if known.
    :raise ValueError: If the buffer has a wrong type, shape or length.
    """
    if not isinstance(buffer, np.ndarray) or buffer.dtype != np.uint8:
        raise ValueError("Pixel buffer must be a numpy uint8 array")
    if buffer.ndim != 1 or len(buffer) % CHANNELS or not buffer.flags.c_contiguous:
        raise ValueError(
            "Pixel buffer must be flat, contiguous and a multiple of %d bytes: "
            "shape %r"
            % (CHANNELS, buffer.shape)
        )
    if size is not None and len(buffer) != size:
        raise ValueError(
            "Pixel buffer size mismatch: expected %d, got %d" % (size, len(buffer))
        )
    return buffer


def as_pixels(buffer: np.ndarray) -> np.ndarray:
    """Return an (N, 4) view of a flat buffer."""
    return buffer.reshape((-1, CHANNELS))


def to_bytes(values: np.ndarray) -> np.ndarray:
    """
    Round to nearest and saturate float channel values to uint8.

    :raise ValueError: If any value is NaN.
    """
    if np.isnan(values).any():
        raise ValueError("Channel values must not be NaN")
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)
