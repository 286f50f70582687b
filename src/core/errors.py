# core/errors.py
"""
Error taxonomy for the renderer.

Degenerate geometry (parallel rays, tangent rays, total internal reflection)
is not an error: those cases return a miss or a fallback direction.
"""


class RaytracerError(Exception):
    """Base class for renderer errors."""


class InvalidIndexError(RaytracerError, IndexError):
    """A material, texture or mesh id does not address its table."""


class IllegalOperationError(RaytracerError, TypeError):
    """An aggregate was used outside of its contract."""


class RenderError(RaytracerError):
    """A render worker failed, so the image would be incomplete."""
