"""Composer: turns a dialogue payload into generated message text."""

from typing import Protocol, Sequence

from ..logging_config import get_logger
from .llm_provider import ILLMProvider

logger = get_logger(__name__)


class IComposer(Protocol):
    """External text generation for outbound messages."""

    async def compose(
        self, sender_name: str, recipient_names: Sequence[str], payload: str
    ) -> str:
        """Return generated message text. Raises on provider failure."""
        ...


class Composer:
    """Builds a prompt from a template and asks the LLM to write the message."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        prompt_template: str,
        max_tokens: int = 200,
    ):
        self._llm = llm_provider
        self._prompt_template = prompt_template
        self._max_tokens = max_tokens

    def build_prompt(
        self, sender_name: str, recipient_names: Sequence[str], payload: str
    ) -> str:
        return self._prompt_template.format(
            sender=sender_name,
            recipients=", ".join(recipient_names),
            payload=payload.strip(),
        )

    async def compose(
        self, sender_name: str, recipient_names: Sequence[str], payload: str
    ) -> str:
        prompt = self.build_prompt(sender_name, recipient_names, payload)
        logger.debug(f"Composing message: {prompt[:100]}...")

        text = await self._llm.complete(
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self._max_tokens,
        )
        text = text.strip()
        if not text:
            raise RuntimeError("Composer returned an empty message")
        return text
