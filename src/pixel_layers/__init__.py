"""
pixel-layers: layered pixel compositing for RGBA buffers.

This package keeps a stack of raster buffers on top of a base image. Each
layer can be filled, copied from its parent, or processed with per-pixel
filters, and is then blended back into the buffer beneath it with a named
blend mode and an opacity.

Basic usage::

    from pixel_layers import Engine

    engine = Engine.from_pil(image)

    def effect(layer):
        layer.set_blending_mode("multiply").set_opacity(60)
        layer.fill_color("#336699")

    engine.new_layer(effect)
    engine.topil().save("output.png")

Architecture:

- :py:mod:`pixel_layers.engine`: Owns the base buffer and the layer stack
- :py:mod:`pixel_layers.layer`: Layer buffers and the compositing algorithm
- :py:mod:`pixel_layers.blend`: Blend mode registry
- :py:mod:`pixel_layers.stack`: Ordered buffer stack
"""

from pixel_layers.engine import Engine
from pixel_layers.layer import Layer
from pixel_layers.version import __version__

__all__ = ["Engine", "Layer", "__version__"]
