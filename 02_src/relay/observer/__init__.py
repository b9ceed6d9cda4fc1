"""Observer module."""

from .observer import ConversationObserver

__all__ = ["ConversationObserver"]
