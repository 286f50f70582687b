# renderer/tone_mapping.py
import numpy as np
from numba import njit


@njit(nogil=True)
def srgb_kernel(linear, output, inv_gamma):
    height, width = linear.shape[0], linear.shape[1]
    for y in range(height):
        for x in range(width):
            for c in range(3):
                v = linear[y, x, c]
                # Also catches NaN
                if not v > 0.0:
                    v = 0.0
                elif v > 1.0:
                    v = 1.0
                output[y, x, c] = int(255.0 * v ** inv_gamma)
            output[y, x, 3] = 255


def encode_srgb(linear: np.ndarray, gamma: float = 2.2) -> np.ndarray:
    """
    Converts a linear (height, width, 3) radiance image to 8-bit RGBA:
    clamp to [0, 1], gamma-encode, scale to 255 and truncate.
    A gamma of 1 gives a plain linear encode.
    """
    linear = np.ascontiguousarray(linear, dtype=np.float64)
    if linear.ndim != 3 or linear.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) image, got {linear.shape}")
    output = np.zeros((linear.shape[0], linear.shape[1], 4), dtype=np.uint8)
    srgb_kernel(linear, output, 1.0 / gamma)
    return output
