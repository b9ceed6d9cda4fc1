"""Scheduler module."""

from .scheduler import SyncScheduler

__all__ = ["SyncScheduler"]
