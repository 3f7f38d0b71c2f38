"""Slack module."""

from .client import IDirectoryProvider, IMessenger, SlackAPIError, SlackClient

__all__ = ["IDirectoryProvider", "IMessenger", "SlackAPIError", "SlackClient"]
