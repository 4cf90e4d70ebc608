"""Common middleware for the System Admin console."""

from .observability import StructlogContextMiddleware

__all__ = ["StructlogContextMiddleware"]
