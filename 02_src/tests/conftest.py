"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from invitebot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from invitebot.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def directory_entries():
    """Directory snapshot used across dialogue tests."""
    from invitebot.models import DirectoryEntry

    return [
        DirectoryEntry(id="U1", handle="chris99", display_name="Chris Lee"),
        DirectoryEntry(id="U2", handle="connor_b", display_name="Connor Brown"),
    ]


@pytest.fixture
def mock_directory(directory_entries):
    """Create mock directory provider."""
    directory = Mock()
    directory.list_active_users = AsyncMock(return_value=directory_entries)
    return directory


@pytest.fixture
def mock_messenger():
    """Create mock messenger that accepts every send."""
    messenger = Mock()
    messenger.send = AsyncMock(return_value=None)
    return messenger


@pytest.fixture
def mock_composer():
    """Create mock composer."""
    composer = Mock()
    composer.compose = AsyncMock(return_value="You're invited to play csgo!")
    return composer


@pytest.fixture
def store():
    """Create empty conversation store."""
    from invitebot.conversation import InMemoryConversationStore

    return InMemoryConversationStore()


@pytest.fixture
def dispatcher(mock_messenger, tracker):
    """Create FanOutDispatcher over the mock messenger."""
    from invitebot.delivery import FanOutDispatcher

    return FanOutDispatcher(messenger=mock_messenger, tracker=tracker)


@pytest.fixture
def state_machine(store, mock_directory, mock_messenger, dispatcher, tracker, mock_composer):
    """Create state machine for the composing game invite variant."""
    from invitebot.config import GAME_INVITE
    from invitebot.conversation import ConversationStateMachine

    return ConversationStateMachine(
        config=GAME_INVITE,
        store=store,
        directory=mock_directory,
        messenger=mock_messenger,
        dispatcher=dispatcher,
        tracker=tracker,
        composer=mock_composer,
    )


@pytest.fixture
def question_machine(store, mock_directory, mock_messenger, dispatcher, tracker):
    """Create state machine for the verbatim question variant."""
    from invitebot.config import QUESTION
    from invitebot.conversation import ConversationStateMachine

    return ConversationStateMachine(
        config=QUESTION,
        store=store,
        directory=mock_directory,
        messenger=mock_messenger,
        dispatcher=dispatcher,
        tracker=tracker,
    )

