"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .config import DEFAULT_SLACK_API_URL, DialogueConfig, PayloadMode, load_dialogue_config
from .conversation import (
    ConversationStateMachine,
    IConversationStore,
    InMemoryConversationStore,
)
from .delivery import FanOutDispatcher
from .events import EventRouter
from .llm import Composer, ILLMProvider, LLMProvider
from .logging_config import get_logger
from .slack import IDirectoryProvider, IMessenger, SlackClient
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop in-flight dialogues and the trace journal."""
        ...

    @property
    def storage(self) -> IStorage: ...

    @property
    def store(self) -> IConversationStore: ...

    @property
    def directory(self) -> IDirectoryProvider: ...

    @property
    def dispatcher(self) -> FanOutDispatcher: ...

    @property
    def event_router(self) -> EventRouter: ...


class Application:
    """Main application bootstrap.

    Slack and LLM collaborators are built from the environment unless
    passed in, which is how tests swap them for fakes.
    """

    def __init__(
        self,
        db_path: str | None = None,
        dialogue_config: DialogueConfig | None = None,
        messenger: IMessenger | None = None,
        directory: IDirectoryProvider | None = None,
        llm_provider: ILLMProvider | None = None,
    ):
        self._db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._dialogue_config = dialogue_config
        self._messenger = messenger
        self._directory = directory
        self._llm = llm_provider

        # Components (will be initialized in start())
        self._slack: SlackClient | None = None
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._store: IConversationStore | None = None
        self._dispatcher: FanOutDispatcher | None = None
        self._state_machine: ConversationStateMachine | None = None
        self._event_router: EventRouter | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Dialogue variant (fails fast on a bad BOT_VARIANT)
        if self._dialogue_config is None:
            self._dialogue_config = load_dialogue_config()
        logger.info(f"Dialogue variant: {self._dialogue_config.name}")

        # 2. Storage for the trace journal
        self._storage = Storage(self._db_path)
        await self._storage.init()
        self._tracker = Tracker(self._storage)
        logger.info("Storage initialized")

        # 3. Slack client, unless both roles were injected
        if self._messenger is None or self._directory is None:
            self._slack = SlackClient(
                token=os.getenv("SLACK_BOT_TOKEN", ""),
                base_url=os.getenv("SLACK_API_URL", DEFAULT_SLACK_API_URL),
            )
            self._messenger = self._messenger or self._slack
            self._directory = self._directory or self._slack
            logger.info("Slack client initialized")

        # 4. Composer, only for variants that generate the message
        composer = None
        if self._dialogue_config.payload_mode == PayloadMode.COMPOSED:
            if self._llm is None:
                self._llm = LLMProvider()
            composer = Composer(
                self._llm,
                prompt_template=self._dialogue_config.composer_prompt,
                max_tokens=self._dialogue_config.composer_max_tokens,
            )
            logger.info("LLM composer initialized")

        # 5. Dialogue core
        self._store = InMemoryConversationStore()
        self._dispatcher = FanOutDispatcher(self._messenger, self._tracker)
        self._state_machine = ConversationStateMachine(
            config=self._dialogue_config,
            store=self._store,
            directory=self._directory,
            messenger=self._messenger,
            dispatcher=self._dispatcher,
            tracker=self._tracker,
            composer=composer,
        )
        self._event_router = EventRouter(self._state_machine)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        # AsyncWebClient opens a session per call, nothing to close
        self._slack = None
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Drop in-flight dialogues and the trace journal."""
        if self._store is not None:
            await self._store.clear()
        if self._storage:
            await self._storage.clear()
        logger.info("Reset complete")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def store(self) -> IConversationStore:
        """Get conversation store."""
        if self._store is None:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def directory(self) -> IDirectoryProvider:
        """Get directory provider."""
        if not self._directory or not self._state_machine:
            raise RuntimeError("Application not started")
        return self._directory

    @property
    def dispatcher(self) -> FanOutDispatcher:
        """Get fan-out dispatcher."""
        if not self._dispatcher:
            raise RuntimeError("Application not started")
        return self._dispatcher

    @property
    def event_router(self) -> EventRouter:
        """Get event router."""
        if not self._event_router:
            raise RuntimeError("Application not started")
        return self._event_router
