# materials/texture_loader.py
import logging
import os
from PIL import Image
import numpy as np
from materials.textures import ImageTexture

logger = logging.getLogger(__name__)


def load_texture(image_path: str) -> ImageTexture:
    """
    Reads an image file into an ImageTexture with channels scaled to [0, 1].
    Any mode Pillow can open is converted to RGB first.

    Raises FileNotFoundError for a missing path and ValueError when Pillow
    cannot decode the file.
    """
    if not os.path.isfile(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            data = np.asarray(img.convert("RGB"), dtype=np.float64) / 255.0
    except OSError as e:
        raise ValueError(f"Cannot decode texture {image_path}: {e}") from e

    logger.info("Loaded texture %s (%dx%d)", image_path, data.shape[1], data.shape[0])
    return ImageTexture(data)
