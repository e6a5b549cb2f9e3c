"""Exceptions raised by mindbell."""


class MindbellValueError(ValueError):
    """Bad schedule input such as unparseable clock text or an unknown density."""


__all__ = ["MindbellValueError"]
