"""Core utilities shared across mindbell modules."""

from .errors import MindbellValueError

__all__ = ["MindbellValueError"]
