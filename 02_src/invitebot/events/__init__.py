"""Events module."""

from .router import EventRouter, classify_event, strip_mention

__all__ = ["EventRouter", "classify_event", "strip_mention"]
