"""Conversation store: per-user dialogue state behind a single lock."""

import asyncio
from typing import Callable, Protocol

from ..models import ConversationState

StateMutator = Callable[[ConversationState], None]


class IConversationStore(Protocol):
    """Mapping from user id to ConversationState. Every call is atomic."""

    async def get(self, user_id: str) -> ConversationState | None:
        """Return a copy of the user's state, or None."""
        ...

    async def get_or_create(self, user_id: str) -> tuple[ConversationState, bool]:
        """Return (state copy, created). Check and create happen under one lock."""
        ...

    async def update(
        self, user_id: str, mutator: StateMutator
    ) -> ConversationState | None:
        """Apply mutator to the stored state. Returns a copy, or None if absent."""
        ...

    async def delete(self, user_id: str) -> bool:
        """Remove the user's state. Returns True if it existed."""
        ...

    async def clear(self) -> None:
        """Drop all states."""
        ...


class InMemoryConversationStore:
    """Process-local conversation store.

    States are only handed out as copies, so callers can hold them across
    I/O without the lock. Entries leak if a dialogue never completes.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._states: dict[str, ConversationState] = {}

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._states

    async def get(self, user_id: str) -> ConversationState | None:
        async with self._lock:
            state = self._states.get(user_id)
            return state.copy() if state else None

    async def get_or_create(self, user_id: str) -> tuple[ConversationState, bool]:
        async with self._lock:
            state = self._states.get(user_id)
            if state is not None:
                return state.copy(), False

            state = ConversationState(user_id=user_id)
            self._states[user_id] = state
            return state.copy(), True

    async def update(
        self, user_id: str, mutator: StateMutator
    ) -> ConversationState | None:
        async with self._lock:
            state = self._states.get(user_id)
            if state is None:
                return None

            # Mutate a copy so a failing mutator leaves the stored state intact
            candidate = state.copy()
            mutator(candidate)
            self._states[user_id] = candidate
            return candidate.copy()

    async def delete(self, user_id: str) -> bool:
        async with self._lock:
            return self._states.pop(user_id, None) is not None

    async def clear(self) -> None:
        async with self._lock:
            self._states.clear()
