"""Health module."""

from .error_buffer import ErrorBuffer

__all__ = ["ErrorBuffer"]
