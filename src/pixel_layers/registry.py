"""
Registry pattern utility for creating name registries.

This module provides the ``new_registry`` function which creates a registry
dictionary and a decorator for registering handlers. Blend modes are looked
up through such a registry.

Usage example::

    from pixel_layers.registry import new_registry

    BLENDERS, register = new_registry(attribute='blend_mode')

    @register('invert')
    def invert(layer, parent):
        return 255 - parent[:, :3]

    blender = BLENDERS['invert']
"""

from typing import Any, Callable, Tuple, TypeVar, Union

T = TypeVar("T")


def new_registry(attribute: Union[str, None] = None) -> Tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name to set on registered objects.
                     The key will be stored as this attribute on the object.
    :return: Tuple of (registry_dict, register_decorator)

    Registering an existing key replaces the previous entry, which lets
    callers override a built-in handler at runtime.
    """
    registry = {}

    def register(key: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            registry[key] = func
            if attribute:
                setattr(func, attribute, key)
            return func

        return decorator

    return registry, register
