"""Conversation-related data models."""

from dataclasses import dataclass, field
from enum import Enum


class ConversationStep(str, Enum):
    """Steps of the recipient/payload dialogue."""

    AWAITING_RECIPIENTS = "awaiting_recipients"
    AWAITING_PAYLOAD = "awaiting_payload"


VALID_TRANSITIONS = {
    ConversationStep.AWAITING_RECIPIENTS: [ConversationStep.AWAITING_PAYLOAD],
    ConversationStep.AWAITING_PAYLOAD: [],
}


class InvalidTransitionError(Exception):
    def __init__(self, from_step: ConversationStep, to_step: ConversationStep):
        self.from_step = from_step
        self.to_step = to_step
        super().__init__(f"Invalid transition: {from_step.value} -> {to_step.value}")


@dataclass
class ConversationState:
    """In-memory state of one user's dialogue. Never persisted."""

    user_id: str
    step: ConversationStep = ConversationStep.AWAITING_RECIPIENTS
    recipient_ids: list[str] = field(default_factory=list)
    recipient_names: list[str] = field(default_factory=list)  # parallel to recipient_ids
    sender_name: str | None = None

    def set_recipients(self, ids: list[str], names: list[str]) -> None:
        """Replace the resolved recipients, keeping both lists aligned."""
        if len(ids) != len(names):
            raise ValueError(
                f"Recipient ids and names differ in length: {len(ids)} != {len(names)}"
            )
        self.recipient_ids = list(ids)
        self.recipient_names = list(names)

    def advance_to(self, step: ConversationStep) -> None:
        """Move to the next step. Raises InvalidTransitionError if not allowed."""
        if step not in VALID_TRANSITIONS.get(self.step, []):
            raise InvalidTransitionError(self.step, step)
        if step == ConversationStep.AWAITING_PAYLOAD and not self.recipient_ids:
            raise ValueError("Cannot await a payload without recipients")
        self.step = step

    def copy(self) -> "ConversationState":
        return ConversationState(
            user_id=self.user_id,
            step=self.step,
            recipient_ids=list(self.recipient_ids),
            recipient_names=list(self.recipient_names),
            sender_name=self.sender_name,
        )
