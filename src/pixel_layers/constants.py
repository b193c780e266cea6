"""
Various constants for pixel_layers
"""
from enum import Enum

#: Number of interleaved channels per pixel (R, G, B, A).
CHANNELS = 4

#: Largest width or height accepted for a buffer.
MAX_DIMENSION = 300000


class BlendMode(str, Enum):
    """
    Built-in blend modes.

    Values are the registry keys, so either the member or its string value
    can be passed to :py:meth:`~pixel_layers.layer.Layer.set_blending_mode`.
    """
    NORMAL = 'normal'
    MULTIPLY = 'multiply'
    SCREEN = 'screen'
    OVERLAY = 'overlay'
    DIFFERENCE = 'difference'
    ADDITION = 'addition'
    EXCLUSION = 'exclusion'
    SOFT_LIGHT = 'softLight'
    LIGHTEN = 'lighten'
    DARKEN = 'darken'
