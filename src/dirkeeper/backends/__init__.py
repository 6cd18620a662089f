"""Backend implementations."""

from dirkeeper.backends._local import LocalBackend

__all__ = ["LocalBackend"]
