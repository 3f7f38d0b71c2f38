"""Core data models for the invite bot."""

from .conversation import (
    VALID_TRANSITIONS,
    ConversationState,
    ConversationStep,
    InvalidTransitionError,
)
from .delivery import DeliveryOutcome
from .directory import DirectoryEntry, MatchResult
from .events import EventKind, InboundEvent
from .tracing import TraceEvent

__all__ = [
    # Directory
    "DirectoryEntry",
    "MatchResult",
    # Conversation
    "ConversationStep",
    "ConversationState",
    "InvalidTransitionError",
    "VALID_TRANSITIONS",
    # Delivery
    "DeliveryOutcome",
    # Events
    "EventKind",
    "InboundEvent",
    # Tracing
    "TraceEvent",
]
