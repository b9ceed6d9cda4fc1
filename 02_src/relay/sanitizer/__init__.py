"""Sanitizer module."""

from .sanitizer import build_config_snapshot, dig, plugin_names, safe_channels

__all__ = ["build_config_snapshot", "dig", "plugin_names", "safe_channels"]
