"""Inbound event models."""

from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    """Kinds of inbound chat events the bot can react to."""

    MENTION = "mention"
    DIRECT_MESSAGE = "direct_message"
    MESSAGE = "message"


@dataclass
class InboundEvent:
    """The parts of a platform event the dialogue cares about."""

    kind: EventKind
    user_id: str
    channel_id: str
    text: str
    bot_id: str = ""  # non-empty when an automation sent the event
    subtype: str = ""
