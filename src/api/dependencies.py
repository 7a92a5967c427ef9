"""Shared FastAPI dependencies.

Separated to avoid circular imports between route modules.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from bridge.dispatcher import CallDispatcher
from bridge.identity_store import IdentityStore
from bridge.orchestrator import BridgeOrchestrator, DialPlan
from bridge.session_manager import SessionManager
from bridge.webhook import WebhookHandler
from config.settings import get_settings
from integrations.bandwidth import get_bandwidth_config
from integrations.voice_client import VoiceClient
from integrations.webrtc_client import WebRTCClient


def build_orchestrator() -> BridgeOrchestrator:
    settings = get_settings()
    cfg = get_bandwidth_config()

    sessions = SessionManager(WebRTCClient(cfg))
    answer_url = None
    if settings.base_callback_url:
        answer_url = f"{settings.base_callback_url.rstrip('/')}/callAnswered"

    return BridgeOrchestrator(
        store=IdentityStore(sessions),
        sessions=sessions,
        dispatcher=CallDispatcher(
            VoiceClient(cfg),
            application_id=settings.bw_voice_application_id,
            ring_timeout_seconds=settings.call_timeout_seconds,
        ),
        dial_plan=DialPlan(
            from_number=settings.bw_number,
            to_number=settings.user_number,
            answer_url=answer_url,
        ),
        session_tag=settings.session_tag,
        transfer_sip_uri=settings.transfer_sip_uri,
    )


@lru_cache(maxsize=1)
def _orchestrator_factory() -> BridgeOrchestrator:
    return build_orchestrator()


def get_orchestrator() -> BridgeOrchestrator:
    return _orchestrator_factory()


def get_webhook_handler(orchestrator: BridgeOrchestrator = Depends(get_orchestrator)) -> WebhookHandler:
    return WebhookHandler(orchestrator)
