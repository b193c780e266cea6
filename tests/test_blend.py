import logging

import numpy as np
import pytest

from pixel_layers import blend
from pixel_layers.blend import BLEND_FUNC, get_blend_func, register_blender
from pixel_layers.constants import BlendMode

logger = logging.getLogger(__name__)


def _rgba(*values):
    return np.array([values], dtype=np.float64)


@pytest.mark.parametrize('mode', list(BlendMode))
def test_builtin_modes_registered(mode):
    func = get_blend_func(mode)
    assert func is BLEND_FUNC[mode.value]
    assert func.blend_mode == mode.value
    assert get_blend_func(mode.value) is func


@pytest.mark.parametrize('name', ['nope', '', 'Normal', None, ['normal']])
def test_unknown_mode(name):
    with pytest.raises(ValueError, match='Unknown blend mode'):
        get_blend_func(name)


def test_register_blender(custom_modes):
    custom_modes.append('keep')

    def keep(layer, parent):
        return parent[:, :3]

    assert register_blender('keep', keep) is keep
    assert get_blend_func('keep') is keep
    assert keep.blend_mode == 'keep'


@pytest.mark.parametrize('func, layer, parent, expected', [
    (blend.normal, (200, 50, 0, 10), (1, 2, 3, 4), (200, 50, 0)),
    (blend.multiply, (255, 0, 51, 255), (100, 100, 100, 255), (100, 0, 20)),
    (blend.screen, (0, 255, 51, 255), (100, 100, 100, 255), (100, 255, 131)),
    (blend.overlay, (255, 255, 0, 255), (100, 200, 200, 255), (200, 255, 145)),
    (blend.difference, (50, 200, 0, 255), (100, 100, 0, 255), (-50, 100, 0)),
    (blend.addition, (200, 0, 5, 255), (100, 0, 5, 255), (300, 0, 10)),
    (blend.exclusion, (128, 128, 0, 255), (30, 200, 128, 255), (128, 128, 128)),
    (blend.soft_light, (127, 255, 128, 255), (100, 255, 200, 255), (100, 255, 200)),
    (blend.lighten, (10, 200, 30, 255), (100, 100, 30, 255), (100, 200, 30)),
    (blend.darken, (10, 200, 30, 255), (100, 100, 30, 255), (10, 100, 30)),
])
def test_blend_values(func, layer, parent, expected):
    result = func(_rgba(*layer), _rgba(*parent))
    assert result.shape == (1, 3)
    np.testing.assert_allclose(result, [expected])


@pytest.mark.parametrize('mode', list(BlendMode))
def test_blend_does_not_modify_inputs(mode):
    layer = np.array([[10., 20., 30., 40.], [250., 128., 0., 255.]])
    parent = np.array([[200., 100., 0., 255.], [0., 129., 255., 0.]])
    layer_before, parent_before = layer.copy(), parent.copy()
    result = get_blend_func(mode)(layer, parent)
    assert result.shape == (2, 3)
    np.testing.assert_array_equal(layer, layer_before)
    np.testing.assert_array_equal(parent, parent_before)
