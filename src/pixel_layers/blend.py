"""
Blend mode implementations.

Every blend function takes the layer pixels and the parent pixels as float
arrays of shape (N, 4) holding RGBA values in [0, 255], and returns the
blended colors. A result with 3 channels leaves alpha unset, in which case
the layer's own alpha is used as the compositing mask. Results may fall
outside [0, 255]; the compositor clamps them.

Custom modes can be registered at any time before compositing::

    from pixel_layers.blend import register

    @register('invert')
    def invert(layer, parent):
        return 255. - parent[:, :3]
"""
import logging

import numpy as np

from pixel_layers.constants import BlendMode
from pixel_layers.registry import new_registry

logger = logging.getLogger(__name__)

BLEND_FUNC, register = new_registry(attribute='blend_mode')


def register_blender(name, func):
    """Register ``func`` under ``name``, replacing any existing mode."""
    logger.debug('Registering blend mode %r' % (name))
    return register(_key(name))(func)


def get_blend_func(name):
    """
    Look up the blend function registered under ``name``.

    :raise ValueError: If no such mode is registered.
    """
    try:
        return BLEND_FUNC[_key(name)]
    except (KeyError, TypeError):
        raise ValueError(
            'Unknown blend mode %r; registered modes: %s' %
            (name, ', '.join(sorted(BLEND_FUNC)))
        ) from None


def _key(name):
    return name.value if isinstance(name, BlendMode) else name


@register(BlendMode.NORMAL.value)
def normal(layer, parent):
    return layer[:, :3]


@register(BlendMode.MULTIPLY.value)
def multiply(layer, parent):
    return layer[:, :3] * parent[:, :3] / 255.


@register(BlendMode.SCREEN.value)
def screen(layer, parent):
    return 255. - (255. - layer[:, :3]) * (255. - parent[:, :3]) / 255.


@register(BlendMode.OVERLAY.value)
def overlay(layer, parent):
    Cl, Cp = layer[:, :3], parent[:, :3]
    return np.where(
        Cp > 128,
        255. - 2 * (255. - Cl) * (255. - Cp) / 255.,
        Cp * Cl * 2 / 255.,
    )


@register(BlendMode.DIFFERENCE.value)
def difference(layer, parent):
    # Signed; negative values are clamped by the compositor.
    return layer[:, :3] - parent[:, :3]


@register(BlendMode.ADDITION.value)
def addition(layer, parent):
    return parent[:, :3] + layer[:, :3]


@register(BlendMode.EXCLUSION.value)
def exclusion(layer, parent):
    return 128. - 2 * (parent[:, :3] - 128.) * (layer[:, :3] - 128.) / 255.


@register(BlendMode.SOFT_LIGHT.value)
def soft_light(layer, parent):
    Cl, Cp = layer[:, :3], parent[:, :3]
    return np.where(
        Cp > 128,
        255. - (255. - Cp) * (255. - (Cl - 128.)) / 255.,
        Cp * (Cl + 128.) / 255.,
    )


@register(BlendMode.LIGHTEN.value)
def lighten(layer, parent):
    return np.maximum(layer[:, :3], parent[:, :3])


@register(BlendMode.DARKEN.value)
def darken(layer, parent):
    return np.minimum(layer[:, :3], parent[:, :3])
