# renderer/image_io.py
import logging
import os
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def save_image(image: np.ndarray, path: str) -> None:
    """
    Saves a (height, width, 4) uint8 RGBA image. The format follows the file
    extension (PNG, TGA, ...).
    """
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected a (height, width, 4) uint8 image, got {image.dtype} {image.shape}")
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    Image.fromarray(image).save(path)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
