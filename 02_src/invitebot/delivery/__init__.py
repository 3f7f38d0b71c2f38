"""Delivery module."""

from .dispatcher import FanOutDispatcher

__all__ = ["FanOutDispatcher"]
