"""
Engine module.

The engine owns the base image buffer and the stack of layer buffers above
it. Fills and filters always target the current top of the stack, which is
the active layer while an effect callback runs.

Example::

    from pixel_layers import Engine

    engine = Engine(64, 64)
    engine.fill_color('#808080')

    def effect(layer):
        layer.set_blending_mode('multiply').set_opacity(50)
        layer.fill_color(255, 0, 0)

        # Nested layers compose into this layer first.
        layer.new_layer(lambda inner: inner.copy_parent())

    engine.new_layer(effect)
    image = engine.topil()
"""

import logging
from typing import Any, Callable, Optional, Sequence

import numpy as np
from PIL import ImageColor

from pixel_layers import pil_io
from pixel_layers.buffer import (
    Dimensions,
    as_pixels,
    check_buffer,
    new_buffer,
    to_bytes,
)
from pixel_layers.layer import Layer
from pixel_layers.stack import PixelStack

logger = logging.getLogger(__name__)


class Engine(object):
    """
    Layer stack over a base RGBA buffer.

    :param width: Image width in pixels.
    :param height: Image height in pixels.
    :param pixel_data: Optional flat RGBA ``uint8`` buffer to use as the
        base image. It is modified in place. Defaults to transparent black.
    """

    def __init__(
        self, width: int, height: int, pixel_data: Optional[np.ndarray] = None
    ):
        self._dimensions = Dimensions(width=width, height=height)
        if pixel_data is None:
            pixel_data = new_buffer(self._dimensions)
        check_buffer(pixel_data, self._dimensions.size)
        self._stack = PixelStack(pixel_data)
        self._layers: list = []

    @classmethod
    def from_pil(cls, image: Any) -> "Engine":
        """Create an engine whose base buffer is a copy of ``image``."""
        dimensions, buffer = pil_io.from_pil(image)
        return cls(dimensions.width, dimensions.height, buffer)

    def __repr__(self) -> str:
        return "%s(width=%d, height=%d, depth=%d)" % (
            self.__class__.__name__,
            self.width,
            self.height,
            len(self._stack),
        )

    @property
    def dimensions(self) -> Dimensions:
        return self._dimensions

    @property
    def width(self) -> int:
        return self._dimensions.width

    @property
    def height(self) -> int:
        return self._dimensions.height

    @property
    def pixel_stack(self) -> PixelStack:
        """Buffer stack, base image first."""
        return self._stack

    @property
    def pixel_data(self) -> np.ndarray:
        """Currently active buffer."""
        return self._stack.top

    @property
    def current_layer(self) -> Optional[Layer]:
        """Active layer, or None when the base image is active."""
        return self._layers[-1] if self._layers else None

    def fill_color(self, *args: Any) -> None:
        """
        Fill the active buffer with a single color.

        Accepts a color string understood by :py:mod:`PIL.ImageColor`
        (``'#ff8800'``, ``'rgb(255, 136, 0)'``, ``'orange'``), an RGB(A)
        sequence, or 3 or 4 integers. Alpha defaults to 255.

        :raise ValueError: If the color cannot be parsed.
        """
        rgba = _parse_color(args)
        logger.debug("Filling buffer with %r" % (rgba,))
        as_pixels(self.pixel_data)[:] = rgba

    def process(self, func: Callable[[np.ndarray], np.ndarray]) -> None:
        """
        Run a per-pixel filter over the active buffer.

        ``func`` receives a float array of shape (N, 4) and returns an array
        of shape (N, 3) or (N, 4). Values are rounded and clamped to bytes.
        With 3 channels the alpha channel is left unchanged.
        """
        pixels = as_pixels(self.pixel_data)
        values = np.asarray(func(pixels.astype(np.float64)), dtype=np.float64)
        if values.ndim != 2 or values.shape[0] != len(pixels) or \
                values.shape[1] not in (3, 4):
            raise ValueError(
                "Filter returned shape %r, expected (%d, 3) or (%d, 4)"
                % (values.shape, len(pixels), len(pixels))
            )
        pixels[:, : values.shape[1]] = to_bytes(values)

    def new_layer(self, callback: Callable[[Layer], Any]) -> Layer:
        """
        Push a new layer, run ``callback`` on it, then blend it into its
        parent and pop it.

        If the callback or the blend fails, the layer is discarded without
        modifying the parent and the error propagates.
        """
        layer = Layer(self)
        self._stack.push(layer.pixel_data)
        self._layers.append(layer)
        logger.debug("Entering %r" % layer)
        try:
            callback(layer)
            layer.apply_to_parent()
        finally:
            self._layers.pop()
            self._stack.pop()
            logger.debug("Leaving %r" % layer)
        return layer

    def topil(self) -> Any:
        """Return the active buffer as an RGBA PIL Image."""
        return pil_io.to_pil(self.pixel_data, self._dimensions)


def _parse_color(args: Sequence[Any]) -> tuple:
    if len(args) == 1 and isinstance(args[0], str):
        return ImageColor.getcolor(args[0], "RGBA")
    if len(args) == 1 and isinstance(args[0], (tuple, list)):
        args = tuple(args[0])
    if len(args) == 3:
        args = tuple(args) + (255,)
    if len(args) != 4:
        raise ValueError("Expected a color string or 3 or 4 channels: %r" % (args,))
    for value in args:
        if not isinstance(value, (int, np.integer)) or not 0 <= value <= 255:
            raise ValueError("Color channels must be integers in [0, 255]: %r"
                             % (args,))
    return tuple(int(value) for value in args)
