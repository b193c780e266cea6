"""Ordered stack of pixel buffers."""

import logging
from typing import Iterator

import numpy as np

from pixel_layers.buffer import check_buffer

logger = logging.getLogger(__name__)


class PixelStack(object):
    """
    Stack of equally sized buffers with the base image at the bottom.

    The stack owns its buffers. :py:meth:`push` takes a buffer and
    :py:meth:`pop` hands it back; the base buffer can never be popped.

    Example::

        stack = PixelStack(base)
        stack.push(layer_buffer)
        assert stack.parent is base
        buffer = stack.pop()
    """

    def __init__(self, base: np.ndarray):
        self._buffers = [check_buffer(base)]

    @property
    def base(self) -> np.ndarray:
        return self._buffers[0]

    @property
    def top(self) -> np.ndarray:
        """Currently active buffer."""
        return self._buffers[-1]

    @property
    def parent(self) -> np.ndarray:
        """Buffer directly beneath the top one."""
        if len(self._buffers) < 2:
            raise IndexError("Base buffer has no parent")
        return self._buffers[-2]

    def push(self, buffer: np.ndarray) -> None:
        check_buffer(buffer, len(self.base))
        self._buffers.append(buffer)
        logger.debug("Pushed buffer, depth %d" % len(self))

    def pop(self) -> np.ndarray:
        if len(self._buffers) < 2:
            raise IndexError("Cannot pop the base buffer")
        buffer = self._buffers.pop()
        logger.debug("Popped buffer, depth %d" % len(self))
        return buffer

    def __len__(self) -> int:
        return len(self._buffers)

    def __getitem__(self, index: int) -> np.ndarray:
        return self._buffers[index]

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._buffers)

    def __repr__(self) -> str:
        return "%s(depth=%d, size=%d)" % (
            self.__class__.__name__,
            len(self),
            len(self.base),
        )
