"""Project-level configuration, path helpers and dialogue variants."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from .models import EventKind

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "invitebot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_SLACK_API_URL = "https://slack.com/api"
DEFAULT_VARIANT = "game_invite"


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


class PayloadMode(str, Enum):
    """How the final dialogue input becomes the outbound message."""

    VERBATIM = "verbatim"
    COMPOSED = "composed"


@dataclass(frozen=True)
class DialogueConfig:
    """Everything that differs between deployment variants of the dialogue."""

    name: str
    accepted_kinds: frozenset[EventKind]
    payload_mode: PayloadMode
    greeting: str = (
        "Hi! Who do you want to message? "
        "Please provide a comma separated list of names."
    )
    empty_names_prompt: str = "Please provide at least one name, separated by commas."
    unmatched_reply: str = (
        "Could not match: {unmatched}.\n"
        "Valid names are: {valid_names}.\n"
        "Please send the comma separated list of names again."
    )
    directory_error_reply: str = "Error fetching users for matching: {error}"
    payload_prompt: str = "Matched recipients: {recipients}.\nWhat would you like to send?"
    empty_payload_prompt: str = "Please enter the message to send."
    dialogue_reset_reply: str = (
        "Your conversation was reset before the names were saved. "
        "Send any message to start again."
    )
    composer_prompt: str = "{sender} wants to send {recipients} the following: {payload}"
    composer_error_reply: str = "Error generating the message: {error}"
    success_reply: str = "Message sent successfully!"
    failure_reply: str = "Failed to send the message to some recipients: {errors}"
    composer_max_tokens: int = 200


GAME_INVITE = DialogueConfig(
    name="game_invite",
    accepted_kinds=frozenset({EventKind.DIRECT_MESSAGE, EventKind.MESSAGE}),
    payload_mode=PayloadMode.COMPOSED,
    payload_prompt=(
        "Matched recipients: {recipients}.\n"
        "Please enter the name of the game you'd like to play."
    ),
    composer_prompt=(
        "You are a game invitation generator. {sender} is inviting {recipients} "
        "to play {payload}. Write a short, friendly invitation message "
        "addressed to the invitees."
    ),
    empty_payload_prompt="Please enter the name of the game you'd like to play.",
    composer_error_reply="Error contacting the invitation writer: {error}",
    success_reply="Invitation sent successfully!",
    failure_reply="Failed to send invitations to some recipients: {errors}",
)

QUESTION = DialogueConfig(
    name="question",
    accepted_kinds=frozenset({EventKind.MENTION}),
    payload_mode=PayloadMode.VERBATIM,
    greeting=(
        "Hi! Who do you want to ask? "
        "Please provide a comma separated list of names."
    ),
    payload_prompt=(
        "Matched recipients: {recipients}.\n"
        "Please enter the question you'd like to ask."
    ),
    empty_payload_prompt="Please enter the question you'd like to ask.",
    success_reply="Question sent successfully!",
    failure_reply="Failed to send the question to some recipients: {errors}",
)

VARIANTS = {config.name: config for config in (GAME_INVITE, QUESTION)}


def load_dialogue_config(variant: str | None = None) -> DialogueConfig:
    """Pick the dialogue variant by name, defaulting to BOT_VARIANT."""
    if variant is None:
        variant = os.getenv("BOT_VARIANT", DEFAULT_VARIANT)

    try:
        return VARIANTS[variant]
    except KeyError:
        raise ValueError(
            f"Unknown BOT_VARIANT {variant!r}, expected one of: {', '.join(VARIANTS)}"
        ) from None
