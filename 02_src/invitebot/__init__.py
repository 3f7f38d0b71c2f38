"""Slack invite bot: recipient dialogue and fan-out delivery."""

from .app import Application, IApplication
from .config import DialogueConfig, PayloadMode, load_dialogue_config
from .conversation import (
    ConversationStateMachine,
    IConversationStore,
    InMemoryConversationStore,
)
from .delivery import FanOutDispatcher
from .events import EventRouter
from .llm import Composer, IComposer, ILLMProvider, LLMProvider
from .matching import match
from .models import (
    ConversationState,
    ConversationStep,
    DeliveryOutcome,
    DirectoryEntry,
    EventKind,
    InboundEvent,
    MatchResult,
    TraceEvent,
)
from .slack import IDirectoryProvider, IMessenger, SlackAPIError, SlackClient
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Config
    "DialogueConfig",
    "PayloadMode",
    "load_dialogue_config",
    # Models
    "DirectoryEntry",
    "MatchResult",
    "ConversationStep",
    "ConversationState",
    "DeliveryOutcome",
    "EventKind",
    "InboundEvent",
    "TraceEvent",
    # Components
    "match",
    "IConversationStore",
    "InMemoryConversationStore",
    "ConversationStateMachine",
    "FanOutDispatcher",
    "EventRouter",
    "IMessenger",
    "IDirectoryProvider",
    "SlackAPIError",
    "SlackClient",
    "ILLMProvider",
    "LLMProvider",
    "IComposer",
    "Composer",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
]
