"""Event router: classifies inbound chat events and feeds the dialogue."""

from ..conversation import ConversationStateMachine
from ..logging_config import get_logger
from ..models import EventKind, InboundEvent

logger = get_logger(__name__)

MENTION_OPEN = "<@"
MENTION_CLOSE = ">"


def classify_event(event_type: str, channel_type: str | None = None) -> EventKind | None:
    """Map a Slack event type (and channel type) to an EventKind."""
    if event_type == "app_mention":
        return EventKind.MENTION
    if event_type == "message":
        if channel_type == "im":
            return EventKind.DIRECT_MESSAGE
        return EventKind.MESSAGE
    return None


def strip_mention(text: str) -> str:
    """Drop a leading <@U123> mention token.

    Text that does not start with a complete token is returned unchanged.
    """
    stripped = text.lstrip()
    if not stripped.startswith(MENTION_OPEN):
        return text
    end = stripped.find(MENTION_CLOSE)
    if end == -1:
        return text
    return stripped[end + len(MENTION_CLOSE):].strip()


class EventRouter:
    """Filters events and hands dialogue input to the state machine."""

    def __init__(self, state_machine: ConversationStateMachine):
        self._state_machine = state_machine

    def accepts(self, event: InboundEvent) -> bool:
        """Whether the event should advance a dialogue."""
        # Our own (and other bots') messages would otherwise loop forever
        if event.bot_id:
            return False
        if event.subtype:
            return False
        if not event.user_id:
            return False
        return event.kind in self._state_machine.config.accepted_kinds

    async def dispatch(self, event: InboundEvent) -> str | None:
        """
        Route one event to the state machine.

        Never raises: downstream failures are logged so the caller can
        always acknowledge the event.

        Returns:
            The reply text, or None if the event was ignored or failed.
        """
        if not self.accepts(event):
            logger.debug(
                f"Ignoring {event.kind.value} event from {event.user_id or event.bot_id}"
            )
            return None

        text = event.text
        if event.kind == EventKind.MENTION:
            text = strip_mention(text)

        try:
            return await self._state_machine.handle(event.user_id, event.channel_id, text)
        except Exception as e:
            logger.error(f"Event handling failed for {event.user_id}: {e}", exc_info=True)
            return None
