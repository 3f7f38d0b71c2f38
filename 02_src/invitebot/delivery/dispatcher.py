"""Fan-out dispatcher: one message, many recipients, all failures collected."""

import asyncio
from typing import Sequence

from ..logging_config import get_logger
from ..models import DeliveryOutcome
from ..slack import IMessenger
from ..tracker import ITracker

logger = get_logger(__name__)


class FanOutDispatcher:
    """Sends a message to every recipient concurrently."""

    def __init__(self, messenger: IMessenger, tracker: ITracker):
        self._messenger = messenger
        self._tracker = tracker

    async def deliver(
        self,
        recipient_ids: Sequence[str],
        message: str,
        blocks: list[dict] | None = None,
    ) -> DeliveryOutcome:
        """
        Deliver message to each recipient and wait for all sends.

        Failures never cancel the other sends; each one becomes an error
        description naming the recipient. Nothing is retried.

        Args:
            recipient_ids: Recipient identifiers, in any order.
            message: Plain-text message (fallback text when blocks are given).
            blocks: Optional Block Kit layout forwarded to the messenger.

        Returns:
            DeliveryOutcome with the attempt count and ordered error list.
        """
        recipients = list(recipient_ids)
        if not recipients:
            return DeliveryOutcome(attempted=0, errors=[])

        results = await asyncio.gather(
            *[self._messenger.send(rid, message, blocks) for rid in recipients],
            return_exceptions=True,
        )

        errors = []
        for rid, result in zip(recipients, results):
            if isinstance(result, Exception):
                logger.error(f"Failed to send message to user {rid}: {result}")
                errors.append(f"failed to send message to user {rid}: {result}")

        outcome = DeliveryOutcome(attempted=len(recipients), errors=errors)

        await self._tracker.track(
            event_type="fanout_completed",
            actor="dispatcher",
            data={
                "attempted": outcome.attempted,
                "failed": len(outcome.errors),
                "errors": outcome.errors,
            },
        )
        return outcome
