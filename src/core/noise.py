# core/noise.py
"""
Coherent-noise integer hash (libnoise style).

The hash is computed with 64-bit two's complement wrapping so that the same
lattice point and seed always give the same value, with no permutation table.
"""

_MASK = (1 << 64) - 1
_SIGN = 1 << 63
_INT_MAX = float((1 << 63) - 1)

_A = 0x369E6D3B899E43CF
_B = 0x53F89E7FFDA3B07D
_C = 0x3B13C1CA4937E629
_D = 0x577C2C6E4019D645
_E = 60493
_F = 19990303
_G = 1376312589


def _wrap(x: int) -> int:
    x &= _MASK
    return x - (1 << 64) if x & _SIGN else x


def integer(x: int, y: int, z: int, seed: int) -> int:
    """
    Hashes a lattice point to a signed 64-bit integer.
    """
    h = _wrap(_A * x + _B * y + _C * z + _D * seed)
    h = (h >> 13) ^ h
    h = _wrap(h * _wrap(_wrap(h * h) * _E + _F) + _G)
    return h


def real(x: int, y: int, z: int, seed: int) -> float:
    """
    Hashes a lattice point to a float in [-1, 1].
    """
    return integer(x, y, z, seed) / _INT_MAX
