# renderer/env_map_utils.py
import numpy as np

ZENITH = (0.2, 0.4, 0.8)
HORIZON = (1.0, 0.8, 0.6)


def generate_gradient_env_map(width: int = 512, height: int = 256,
                              zenith=ZENITH, horizon=HORIZON) -> np.ndarray:
    """
    Equirectangular sky image for an EnvironmentMap background: row 0 (the
    top, v = 1) is the zenith color, the last row blends fully to the horizon.
    Returns a float64 array of shape (height, width, 3).
    """
    blend = np.linspace(0.0, 1.0, height)[:, None] if height > 1 else np.zeros((1, 1))
    rows = (1.0 - blend) * np.asarray(zenith, dtype=np.float64) + blend * np.asarray(horizon, dtype=np.float64)
    return np.broadcast_to(rows[:, None, :], (height, width, 3)).copy()
