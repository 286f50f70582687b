# core/uv.py
class UV:
    """
    A texture coordinate. Image lookups wrap it into the unit square.
    """
    __slots__ = ("u", "v")

    def __init__(self, u: float, v: float):
        self.u = float(u)
        self.v = float(v)

    def __add__(self, other: "UV") -> "UV":
        return UV(self.u + other.u, self.v + other.v)

    def __mul__(self, t: float) -> "UV":
        return UV(self.u * t, self.v * t)

    __rmul__ = __mul__

    def wrapped(self) -> "UV":
        """Fractional parts, so both coordinates land in [0, 1)."""
        return UV(self.u % 1.0, self.v % 1.0)

    def __eq__(self, other) -> bool:
        if not isinstance(other, UV):
            return NotImplemented
        return self.u == other.u and self.v == other.v

    def __repr__(self) -> str:
        return f"UV({self.u}, {self.v})"
