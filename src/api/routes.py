"""HTTP surface for the browser client and the Voice API callbacks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from api.dependencies import get_orchestrator, get_webhook_handler
from api.schemas import BrowserCallResponse, EndCallResponse, HealthResponse, PSTNCallResponse
from bridge.errors import BridgeError
from bridge.orchestrator import BridgeOrchestrator
from bridge.webhook import WebhookHandler

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.get("/startBrowserCall", response_model=BrowserCallResponse)
async def start_browser_call(
    orchestrator: BridgeOrchestrator = Depends(get_orchestrator),
):
    LOGGER.info("Setup browser client")
    try:
        bridge = await orchestrator.start_browser_call()
    except BridgeError as exc:
        LOGGER.error("Failed to start the browser call: %s", exc.detail)
        return JSONResponse(status_code=500, content={"message": "failed to set up participant"})

    return BrowserCallResponse(token=bridge.participant.token)


@router.get("/startPSTNCall", response_model=PSTNCallResponse)
async def start_pstn_call(
    orchestrator: BridgeOrchestrator = Depends(get_orchestrator),
):
    try:
        bridge = await orchestrator.start_pstn_call()
    except BridgeError as exc:
        LOGGER.error("Failed to start PSTN call: %s", exc.detail)
        return JSONResponse(status_code=500, content={"message": "failed to set up PSTN call"})

    LOGGER.info("PSTN call %s ringing", bridge.call_id)
    return PSTNCallResponse()


@router.post("/callAnswered")
async def call_answered(
    request: Request,
    handler: WebhookHandler = Depends(get_webhook_handler),
) -> Response:
    try:
        payload = await request.json()
    except ValueError:
        LOGGER.warning("Answered callback body was not JSON")
        payload = None

    reply = await handler.handle_callback(payload)
    if not reply.is_transfer:
        # Voice API needs a 200 even when there is nothing to transfer.
        return Response(status_code=200)
    return Response(content=reply.body, media_type=reply.media_type)


@router.get("/endPSTNCall", response_model=EndCallResponse)
async def end_pstn_call(
    orchestrator: BridgeOrchestrator = Depends(get_orchestrator),
):
    LOGGER.info("Hanging up PSTN call")
    try:
        await orchestrator.end_call()
    except BridgeError as exc:
        LOGGER.error("Error hanging up PSTN call: %s", exc.detail)
        return JSONResponse(status_code=500, content={"status": "call hangup failed"})

    return EndCallResponse()


@router.get("/health", response_model=HealthResponse)
async def health(
    orchestrator: BridgeOrchestrator = Depends(get_orchestrator),
) -> HealthResponse:
    return HealthResponse(
        session_active=orchestrator.store.session_id is not None,
        pending_bridges=orchestrator.store.pending_count(),
    )
