"""Slack Web API client: message delivery and workspace directory."""

import asyncio
from typing import Protocol

import aiohttp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from ..config import DEFAULT_SLACK_API_URL
from ..logging_config import get_logger
from ..models import DirectoryEntry

logger = get_logger(__name__)

SLACKBOT_USER_ID = "USLACKBOT"
USERS_PAGE_SIZE = 200


class SlackAPIError(Exception):
    """Slack answered with ok=false, or could not be reached."""

    def __init__(self, method: str, error: str):
        self.method = method
        self.error = error
        super().__init__(f"{method} failed: {error}")


class IMessenger(Protocol):
    """Delivers a text message to one recipient (user or channel id)."""

    async def send(
        self, recipient_id: str, text: str, blocks: list[dict] | None = None
    ) -> None:
        """Send text. Raises on failure."""
        ...


class IDirectoryProvider(Protocol):
    """Roster of addressable human accounts."""

    async def list_active_users(self) -> list[DirectoryEntry]:
        """Return active, non-automated accounts in provider order."""
        ...


class SlackClient:
    """IMessenger and IDirectoryProvider on top of slack_sdk's AsyncWebClient."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_SLACK_API_URL,
        timeout: int = 30,
        web_client: AsyncWebClient | None = None,
    ):
        if not token:
            raise ValueError("SLACK_BOT_TOKEN environment variable not set")

        self._web = web_client or AsyncWebClient(
            token=token,
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
        )

    async def send(
        self, recipient_id: str, text: str, blocks: list[dict] | None = None
    ) -> None:
        """Post a message with chat.postMessage."""
        try:
            await self._web.chat_postMessage(channel=recipient_id, text=text, blocks=blocks)
        except SlackApiError as e:
            raise SlackAPIError("chat.postMessage", e.response.get("error", str(e))) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SlackAPIError("chat.postMessage", str(e) or type(e).__name__) from e

        logger.debug(f"Message posted to {recipient_id}")

    async def list_active_users(self) -> list[DirectoryEntry]:
        """Fetch every page of users.list, dropping bots and deactivated accounts."""
        entries: list[DirectoryEntry] = []
        cursor = None

        while True:
            try:
                response = await self._web.users_list(limit=USERS_PAGE_SIZE, cursor=cursor)
            except SlackApiError as e:
                raise SlackAPIError("users.list", e.response.get("error", str(e))) from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise SlackAPIError("users.list", str(e) or type(e).__name__) from e

            for member in response.get("members") or []:
                if member.get("is_bot") or member.get("deleted"):
                    continue
                if member.get("id") == SLACKBOT_USER_ID:
                    continue
                entries.append(_to_entry(member))

            cursor = (response.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break

        logger.info(f"Fetched {len(entries)} active directory entries")
        return entries


def _to_entry(member: dict) -> DirectoryEntry:
    handle = member.get("name", "")
    profile = member.get("profile") or {}
    display_name = member.get("real_name") or profile.get("real_name") or handle
    return DirectoryEntry(id=member["id"], handle=handle, display_name=display_name)
