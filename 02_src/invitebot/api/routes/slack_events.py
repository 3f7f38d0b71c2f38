"""Slack Events API route."""

import json

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ValidationError

from ...app import IApplication
from ...events import classify_event
from ...logging_config import get_logger
from ...models import InboundEvent

logger = get_logger(__name__)


class SlackEvent(BaseModel):
    """The relevant parts of an inner Slack event."""

    type: str
    user: str = ""
    text: str = ""
    channel: str = ""
    channel_type: str | None = None
    bot_id: str | None = None
    subtype: str | None = None


class SlackEventCallback(BaseModel):
    """Envelope of a Slack Events API request."""

    type: str
    token: str | None = None
    challenge: str | None = None
    event: SlackEvent | None = None


def parse_callback(body: bytes) -> SlackEventCallback:
    """Decode a request body. Raises HTTPException(400) if malformed."""
    try:
        payload = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    try:
        return SlackEventCallback.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid event payload: {e}")


def to_inbound_event(event: SlackEvent) -> InboundEvent | None:
    """Convert a Slack event, or None for event types the bot does not handle."""
    kind = classify_event(event.type, event.channel_type)
    if kind is None:
        return None

    return InboundEvent(
        kind=kind,
        user_id=event.user,
        channel_id=event.channel,
        text=event.text,
        bot_id=event.bot_id or "",
        subtype=event.subtype or "",
    )


def create_slack_events_router(app: IApplication) -> APIRouter:
    """Create Slack events router."""
    router = APIRouter(prefix="/slack", tags=["slack"])

    @router.post("/events")
    async def handle_event(request: Request) -> dict:
        """Answer URL verification and feed events to the dialogue."""
        callback = parse_callback(await request.body())

        if callback.type == "url_verification":
            if not callback.challenge:
                raise HTTPException(status_code=400, detail="Missing Slack challenge")
            return {"challenge": callback.challenge}

        if callback.type == "event_callback" and callback.event is not None:
            inbound = to_inbound_event(callback.event)
            if inbound is not None:
                # Always acknowledge, otherwise Slack redelivers the event
                await app.event_router.dispatch(inbound)
            else:
                logger.debug(f"Unhandled Slack event type: {callback.event.type}")

        return {"ok": True}

    return router
