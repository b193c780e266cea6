"""
PIL IO module.
"""
import logging

import numpy as np
from PIL import Image

from pixel_layers.buffer import Dimensions, check_buffer

logger = logging.getLogger(__name__)


def from_pil(image):
    """Convert a PIL Image to dimensions and a flat RGBA buffer."""
    if image.mode != 'RGBA':
        logger.debug('Converting %s image to RGBA' % image.mode)
        image = image.convert('RGBA')
    dimensions = Dimensions(width=image.width, height=image.height)
    buffer = np.asarray(image, dtype=np.uint8).reshape(-1).copy()
    return dimensions, check_buffer(buffer, dimensions.size)


def to_pil(buffer, dimensions):
    """Convert a flat RGBA buffer to a PIL Image."""
    check_buffer(buffer, dimensions.size)
    array = buffer.reshape((dimensions.height, dimensions.width, 4))
    return Image.fromarray(array, 'RGBA')
