"""API route modules."""

from . import generate

__all__ = ["generate"]
