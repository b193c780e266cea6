"""
Layer module.

A layer owns a pixel buffer the size of the engine's image. Effect code
initializes it either by copying the parent buffer or by filling it with a
solid color, applies any filters, and the engine then blends it back into
the buffer beneath it.

Typical use goes through :py:meth:`~pixel_layers.engine.Engine.new_layer`::

    def effect(layer):
        layer.set_blending_mode('screen').set_opacity(40)
        layer.copy_parent()
        layer.process(lambda pixels: 255 - pixels[:, :3])

    engine.new_layer(effect)

Compositing, for every pixel, linearly interpolates the parent color toward
the blended color::

    w = opacity * (result_alpha / 255)
    parent = parent - (parent - result) * w

The parent alpha channel is never rewritten.
"""

import itertools
import logging
from typing import TYPE_CHECKING, Any, Callable, Union

import numpy as np
from attrs import define, field

from pixel_layers.blend import get_blend_func
from pixel_layers.buffer import as_pixels, new_buffer, to_bytes
from pixel_layers.constants import BlendMode

if TYPE_CHECKING:
    from pixel_layers.engine import Engine

logger = logging.getLogger(__name__)

_layer_ids = itertools.count(1)


@define
class LayerOptions:
    """
    Compositing options of a layer.

    .. py:attribute:: blending_mode

        Name of a registered blend function. Resolved only at compositing
        time, so modes may be registered after the layer is configured.

    .. py:attribute:: opacity

        Compositing weight, normally in [0.0, 1.0]. Not clamped.
    """

    blending_mode: Union[str, BlendMode] = field(default=BlendMode.NORMAL.value)
    opacity: float = field(default=1.0)


class Layer(object):
    """
    Pixel layer bound to an :py:class:`~pixel_layers.engine.Engine`.

    The layer keeps a non-owning reference to its engine and reads the
    engine's stack to find its parent buffer. Its own buffer starts zero
    filled, i.e. fully transparent black.

    .. py:attribute:: layer_id

        Process-unique integer identifier.

    .. py:attribute:: pixel_data

        Flat RGBA ``uint8`` buffer owned by this layer.
    """

    def __init__(self, engine: "Engine"):
        self.engine = engine
        self.options = LayerOptions()
        self.layer_id = next(_layer_ids)

        dimensions = engine.dimensions
        self.width = dimensions.width
        self.height = dimensions.height
        self.pixel_data = new_buffer(dimensions)
        self._merged = False

    def __repr__(self) -> str:
        return "%s(id=%d mode=%r opacity=%g)" % (
            self.__class__.__name__,
            self.layer_id,
            self.options.blending_mode,
            self.options.opacity,
        )

    @property
    def is_active(self) -> bool:
        """True while this layer is the top of the engine's stack."""
        return self.engine.pixel_stack.top is self.pixel_data

    @property
    def merged(self) -> bool:
        return self._merged

    def new_layer(self, callback: Callable[["Layer"], Any]) -> "Layer":
        """Create a nested layer on top of this one."""
        return self.engine.new_layer(callback)

    def set_blending_mode(self, mode: Union[str, BlendMode]) -> "Layer":
        """
        Set the blend mode by name. The name is validated when the layer is
        composited, not here.
        """
        self.options.blending_mode = mode
        return self

    def set_opacity(self, percent: float) -> "Layer":
        """
        Set the opacity from a percentage in [0, 100].

        Values outside the range are stored as is and scale the compositing
        weight accordingly.
        """
        self.options.opacity = percent / 100
        return self

    def copy_parent(self) -> "Layer":
        """Copy the parent buffer into this layer, alpha included."""
        np.copyto(self.pixel_data, self._parent_buffer())
        return self

    def fill_color(self, *args: Any) -> None:
        """Fill this layer with a single color via the engine."""
        self._ensure_active("fill")
        self.engine.fill_color(*args)

    def process(self, func: Callable[[np.ndarray], np.ndarray]) -> "Layer":
        """Apply a per-pixel filter to this layer via the engine."""
        self._ensure_active("process")
        self.engine.process(func)
        return self

    def apply_to_parent(self) -> None:
        """
        Blend this layer into the buffer directly beneath it.

        Called once by the engine after the effect callback returns. Every
        check happens before the parent is written, so a failure leaves the
        parent untouched.

        :raise RuntimeError: If the layer is not on top of the stack or was
            already merged.
        :raise ValueError: If the blend mode is unknown, the parent size
            differs, or the blend function returns a malformed result.
        """
        if self._merged:
            raise RuntimeError("%r was already applied to its parent" % self)
        if not self.is_active:
            raise RuntimeError("%r is not on top of the pixel stack" % self)

        parent = self.engine.pixel_stack.parent
        if len(parent) != len(self.pixel_data):
            raise ValueError(
                "Layer buffer size %d does not match parent size %d"
                % (len(self.pixel_data), len(parent))
            )
        blend_fn = get_blend_func(self.options.blending_mode)
        logger.debug("Applying %r to parent" % self)

        parent_pixels = as_pixels(parent)
        rgba_parent = parent_pixels.astype(np.float64)
        rgba_layer = as_pixels(self.pixel_data).astype(np.float64)

        result = np.asarray(blend_fn(rgba_layer, rgba_parent), dtype=np.float64)
        if result.ndim != 2 or result.shape[0] != len(rgba_layer) or \
                result.shape[1] not in (3, 4):
            raise ValueError(
                "Blend mode %r returned shape %r, expected (%d, 3) or (%d, 4)"
                % (
                    self.options.blending_mode,
                    result.shape,
                    len(rgba_layer),
                    len(rgba_layer),
                )
            )

        color = np.clip(result[:, :3], 0., 255.)
        if result.shape[1] == 4:
            alpha = result[:, 3:4]
        else:
            alpha = rgba_layer[:, 3:4]
        weight = self.options.opacity * (alpha / 255.)

        base = rgba_parent[:, :3]
        parent_pixels[:, :3] = to_bytes(base - (base - color) * weight)
        self._merged = True

    def _parent_buffer(self) -> np.ndarray:
        stack = self.engine.pixel_stack
        if self.is_active:
            return stack.parent
        return stack.top

    def _ensure_active(self, action: str) -> None:
        if not self.is_active:
            raise RuntimeError("Cannot %s %r: layer is not active" % (action, self))
