"""Conversation state machine: recipients, then payload, then fan-out."""

from ..config import DialogueConfig, PayloadMode
from ..delivery import FanOutDispatcher
from ..llm import IComposer
from ..logging_config import get_logger
from ..matching import match, split_fragments
from ..models import ConversationState, ConversationStep, InvalidTransitionError
from ..slack import IDirectoryProvider, IMessenger
from ..tracker import ITracker
from .store import IConversationStore

logger = get_logger(__name__)

ACTOR = "state_machine"


class ConversationStateMachine:
    """Advances one user's dialogue per inbound message.

    No state  -> AWAITING_RECIPIENTS  (greeting)
    AWAITING_RECIPIENTS -> AWAITING_RECIPIENTS  (blank input, lookup failure, unmatched names)
    AWAITING_RECIPIENTS -> AWAITING_PAYLOAD  (every name matched)
    AWAITING_PAYLOAD -> AWAITING_PAYLOAD  (blank input)
    AWAITING_PAYLOAD -> deleted  (message composed and fanned out, or composer failed)

    The store lock is only taken inside store calls, never across the
    directory, composer or delivery awaits.
    """

    def __init__(
        self,
        config: DialogueConfig,
        store: IConversationStore,
        directory: IDirectoryProvider,
        messenger: IMessenger,
        dispatcher: FanOutDispatcher,
        tracker: ITracker,
        composer: IComposer | None = None,
    ):
        if config.payload_mode == PayloadMode.COMPOSED and composer is None:
            raise ValueError(f"Dialogue variant {config.name!r} requires a composer")

        self._config = config
        self._store = store
        self._directory = directory
        self._messenger = messenger
        self._dispatcher = dispatcher
        self._tracker = tracker
        self._composer = composer

    @property
    def config(self) -> DialogueConfig:
        return self._config

    async def handle(self, user_id: str, channel_id: str, text: str) -> str:
        """Advance the user's dialogue with one message and send the reply.

        Returns the reply text.
        """
        logger.info(f"Message received from {user_id}: {text[:100]}")

        state, created = await self._store.get_or_create(user_id)
        if created:
            await self._tracker.track(
                event_type="dialogue_started",
                actor=ACTOR,
                data={"user_id": user_id, "channel_id": channel_id},
            )
            reply = self._config.greeting
        elif state.step == ConversationStep.AWAITING_RECIPIENTS:
            reply = await self._collect_recipients(state, text)
        else:
            reply = await self._deliver_payload(state, text)

        await self._send_reply(channel_id, reply)
        return reply

    async def _collect_recipients(self, state: ConversationState, text: str) -> str:
        if not text.strip():
            return self._config.empty_names_prompt

        fragments = split_fragments(text)

        # Fresh snapshot every attempt; the directory may change between turns
        try:
            directory = await self._directory.list_active_users()
        except Exception as e:
            logger.error(f"Directory lookup failed for {state.user_id}: {e}", exc_info=True)
            await self._tracker.track(
                event_type="directory_failed",
                actor=ACTOR,
                data={"user_id": state.user_id, "error": str(e)},
            )
            return self._config.directory_error_reply.format(error=e)

        result = match(fragments, directory)

        if not result.is_complete:
            await self._tracker.track(
                event_type="recipients_unmatched",
                actor=ACTOR,
                data={"user_id": state.user_id, "unmatched": result.unmatched},
            )
            return self._config.unmatched_reply.format(
                unmatched=", ".join(result.unmatched),
                valid_names=", ".join(result.all_display_names),
            )

        sender_name = next(
            (entry.display_name for entry in directory if entry.id == state.user_id),
            state.user_id,
        )

        def resolve(current: ConversationState) -> None:
            current.set_recipients(result.ids, result.names)
            current.sender_name = sender_name
            current.advance_to(ConversationStep.AWAITING_PAYLOAD)

        try:
            updated = await self._store.update(state.user_id, resolve)
        except InvalidTransitionError as e:
            # A concurrent event from the same user got there first
            logger.warning(f"Recipients for {state.user_id} already resolved: {e}")
            current = await self._store.get(state.user_id)
            if current is None:
                return self._config.dialogue_reset_reply
            return self._config.payload_prompt.format(
                recipients=", ".join(current.recipient_names)
            )
        if updated is None:
            logger.warning(f"Conversation for {state.user_id} was dropped while resolving recipients")
            return self._config.dialogue_reset_reply

        await self._tracker.track(
            event_type="recipients_resolved",
            actor=ACTOR,
            data={"user_id": state.user_id, "recipient_ids": updated.recipient_ids},
        )
        return self._config.payload_prompt.format(recipients=", ".join(updated.recipient_names))

    async def _deliver_payload(self, state: ConversationState, text: str) -> str:
        if not text.strip():
            return self._config.empty_payload_prompt

        try:
            if self._config.payload_mode == PayloadMode.COMPOSED:
                try:
                    message = await self._composer.compose(
                        state.sender_name or state.user_id,
                        state.recipient_names,
                        text,
                    )
                except Exception as e:
                    logger.error(f"Composer error for {state.user_id}: {e}", exc_info=True)
                    await self._tracker.track(
                        event_type="composer_failed",
                        actor=ACTOR,
                        data={"user_id": state.user_id, "error": str(e)},
                    )
                    return self._config.composer_error_reply.format(error=e)
            else:
                message = text

            outcome = await self._dispatcher.deliver(state.recipient_ids, message)
        finally:
            # Terminal whatever happened; failed deliveries are not retried
            await self._store.delete(state.user_id)

        await self._tracker.track(
            event_type="delivery_completed",
            actor=ACTOR,
            data={
                "user_id": state.user_id,
                "attempted": outcome.attempted,
                "failed": len(outcome.errors),
            },
        )

        if outcome.ok:
            return self._config.success_reply
        return self._config.failure_reply.format(errors="; ".join(outcome.errors))

    async def _send_reply(self, channel_id: str, text: str) -> None:
        try:
            await self._messenger.send(channel_id, text)
        except Exception as e:
            logger.error(f"Failed to send reply to channel {channel_id}: {e}", exc_info=True)
