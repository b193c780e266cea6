import logging

import numpy as np
import pytest

from pixel_layers.stack import PixelStack

logger = logging.getLogger(__name__)


@pytest.fixture
def stack():
    return PixelStack(np.zeros(8, dtype=np.uint8))


def test_stack_base(stack):
    assert len(stack) == 1
    assert stack.top is stack.base
    with pytest.raises(IndexError):
        stack.parent
    with pytest.raises(IndexError):
        stack.pop()


def test_stack_push_pop(stack):
    first = np.ones(8, dtype=np.uint8)
    second = np.full(8, 2, dtype=np.uint8)
    stack.push(first)
    stack.push(second)
    assert len(stack) == 3
    assert stack.top is second
    assert stack.parent is first
    assert stack[0] is stack.base
    assert list(stack) == [stack.base, first, second]

    assert stack.pop() is second
    assert stack.parent is stack.base
    assert stack.pop() is first
    assert len(stack) == 1


@pytest.mark.parametrize('buffer', [
    np.zeros(4, dtype=np.uint8),
    np.zeros(8, dtype=np.float32),
    np.zeros((2, 4), dtype=np.uint8),
    np.zeros(16, dtype=np.uint8)[::2],
    b'\x00' * 8,
])
def test_stack_push_invalid(stack, buffer):
    with pytest.raises(ValueError):
        stack.push(buffer)
    assert len(stack) == 1


def test_stack_invalid_base():
    with pytest.raises(ValueError):
        PixelStack(np.zeros(6, dtype=np.uint8))
