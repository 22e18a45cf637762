"""Public API layer."""

from trionorm.api.facade import TrioNorm

__all__ = ["TrioNorm"]
