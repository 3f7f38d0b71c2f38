"""Conversation module."""

from .machine import ConversationStateMachine
from .store import IConversationStore, InMemoryConversationStore

__all__ = ["ConversationStateMachine", "IConversationStore", "InMemoryConversationStore"]
