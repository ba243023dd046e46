"""Infrastructure layer implementations."""

from src.infrastructure import storage, tabular

__all__ = ["storage", "tabular"]
