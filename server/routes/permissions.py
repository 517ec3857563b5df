"""Permission decision, approval, and mode endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from core import NotFoundError, UnknownModeError
from core.permissions import ApprovalResponse, ToolRequest, complete_mode

from ..logging_config import log_timing
from ..state import get_approval_port, get_commands, get_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/permissions")


class DecisionResult(BaseModel):
    """Wire form of a decision."""

    block: bool = False
    reason: str | None = None


class SetModeRequest(BaseModel):
    """Body for PUT /permissions/mode."""

    mode: str


def _require_engine():
    engine = get_engine()
    if engine is None:
        raise HTTPException(status_code=500, detail="Permission engine not initialized")
    return engine


def _require_commands():
    _require_engine()
    return get_commands()


@router.post("/check")
async def check_tool_call(request: ToolRequest) -> DecisionResult:
    """
    Decide a tool call.

    Blocks until the user answers when a prompt is needed and an event
    subscriber is connected.
    """
    engine = _require_engine()
    with log_timing(logger, f"Permission check for {request.tool_name}"):
        decision = await engine.decide(request)
    result = decision.to_result()
    if result is None:
        return DecisionResult()
    return DecisionResult(**result)


@router.post("/respond")
async def respond_to_prompt(response: ApprovalResponse) -> dict:
    """
    Answer a pending approval prompt.

    Args:
        response: Request id and chosen option index (null cancels)

    Returns:
        Success confirmation
    """
    port = get_approval_port()
    if port is None:
        raise HTTPException(status_code=500, detail="Approval port not initialized")

    try:
        port.respond(response)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Approval response %s -> %s", response.request_id, response.choice)
    return {"success": True}


@router.get("/pending")
async def list_pending_prompts() -> list[dict]:
    """List approval prompts that are waiting for an answer."""
    port = get_approval_port()
    if port is None:
        return []
    return [request.model_dump() for request in port.pending()]


@router.get("/status")
async def get_status() -> dict:
    """Current mode, its description, and the session approvals."""
    commands = _require_commands()
    status = commands.status()
    return {**status.model_dump(mode="json"), "text": status.format()}


@router.put("/mode")
async def set_mode(body: SetModeRequest) -> dict:
    """
    Set the permission mode by id.

    Unknown ids are rejected and leave the mode unchanged.
    """
    commands = _require_commands()
    try:
        mode = await commands.set_mode(body.mode)
    except UnknownModeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"mode": mode.value}


@router.post("/pick")
async def pick_mode() -> dict:
    """
    Open the mode picker on the connected subscriber.

    Returns the chosen mode, or null when nobody is subscribed or the
    picker was cancelled.
    """
    commands = _require_commands()
    mode = await commands.handle()
    return {"mode": mode.value if mode else None}


@router.post("/cycle")
async def cycle_mode() -> dict:
    """Advance to the next mode, wrapping, and clear session approvals."""
    commands = _require_commands()
    mode = await commands.cycle()
    return {"mode": mode.value}


@router.get("/modes")
async def list_modes(prefix: str = Query("")) -> list[dict]:
    """Mode ids matching a prefix, for argument completion."""
    matches = complete_mode(prefix) or []
    return [info.model_dump(mode="json") for info in matches]
