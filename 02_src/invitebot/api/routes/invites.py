"""Direct invitation API routes."""

import json
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ...app import IApplication
from ...logging_config import get_logger

logger = get_logger(__name__)


class InviteRequest(BaseModel):
    """Request model for sending a game invitation."""

    game_name: str
    user_ids: list[str]
    description: str = ""


class EndpointInfo(BaseModel):
    path: str
    method: str
    description: str
    example: Any = None


class UserInfo(BaseModel):
    id: str
    name: str
    real_name: str


class UsageGuide(BaseModel):
    """Response model for the usage guide."""

    description: str
    endpoints: list[EndpointInfo]
    users: list[UserInfo]


def build_invite_blocks(game_name: str, description: str) -> list[dict]:
    """Block Kit layout: header, description and Accept/Decline buttons."""
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f"Game Invitation: {game_name}"},
        },
    ]
    # Slack rejects section blocks with empty text
    if description:
        blocks.append(
            {"type": "section", "text": {"type": "mrkdwn", "text": description}}
        )
    blocks.append(
        {
            "type": "actions",
            "block_id": "game_actions",
            "elements": [
                {
                    "type": "button",
                    "action_id": "accept_game",
                    "value": "accept",
                    "style": "primary",
                    "text": {"type": "plain_text", "text": "Accept"},
                },
                {
                    "type": "button",
                    "action_id": "decline_game",
                    "value": "decline",
                    "style": "danger",
                    "text": {"type": "plain_text", "text": "Decline"},
                },
            ],
        }
    )
    return blocks


def create_invites_router(app: IApplication) -> APIRouter:
    """Create invites router."""
    router = APIRouter(tags=["invites"])

    @router.post("/invite")
    async def send_invite(request: Request) -> JSONResponse:
        """Send a game invitation to every listed user."""
        try:
            invite = InviteRequest.model_validate(json.loads(await request.body()))
        except (ValueError, ValidationError) as e:
            return JSONResponse(status_code=400, content={"error": str(e)})

        outcome = await app.dispatcher.deliver(
            invite.user_ids,
            f"Game Invitation: {invite.game_name}",
            blocks=build_invite_blocks(invite.game_name, invite.description),
        )

        if not outcome.ok:
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Failed to send some invitations",
                    "details": outcome.errors,
                },
            )

        logger.info(f"Invitation for {invite.game_name} sent to {outcome.attempted} users")
        return JSONResponse(content={"message": "Invitations sent successfully"})

    @router.get("/invite", response_model=UsageGuide)
    async def get_usage_guide() -> dict:
        """Describe the API and list the users that can be invited."""
        try:
            entries = await app.directory.list_active_users()
        except Exception as e:
            logger.error(f"Failed to fetch users for usage guide: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Failed to fetch users: {e}")

        return {
            "description": "API for sending game invitations via Slack",
            "endpoints": [
                {
                    "path": "/invite",
                    "method": "POST",
                    "description": "Send game invitations to specified users",
                    "example": {
                        "game_name": "Chess",
                        "user_ids": ["U0123456", "U6543210"],
                        "description": "Want to play a quick game of chess?",
                    },
                },
                {
                    "path": "/invite",
                    "method": "GET",
                    "description": "Get usage guide and available user IDs",
                },
            ],
            "users": [
                {"id": entry.id, "name": entry.handle, "real_name": entry.display_name}
                for entry in entries
            ],
        }

    return router
