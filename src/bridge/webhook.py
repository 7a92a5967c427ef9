"""Voice API answer callback handling.

The provider needs a 200-class reply for every callback, otherwise it treats
the call as faulted and may retry. Nothing raised here reaches the transport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from bridge.orchestrator import BridgeOrchestrator

LOGGER = logging.getLogger(__name__)

BXML_MEDIA_TYPE = "application/xml"


@dataclass(frozen=True)
class WebhookReply:
    body: str | None = None
    media_type: str | None = None

    @property
    def is_transfer(self) -> bool:
        return self.body is not None


ACKNOWLEDGE = WebhookReply()


class WebhookHandler:
    def __init__(self, orchestrator: BridgeOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def on_call_answered(self, call_id: str | None, to_number: str | None = None) -> WebhookReply:
        LOGGER.info("Received answered callback for call %s to %s", call_id, to_number)
        if not call_id:
            LOGGER.warning("Answered callback carried no callId")
            return ACKNOWLEDGE

        try:
            bxml = await self._orchestrator.on_call_answered(call_id)
        except Exception:
            LOGGER.exception("Failed to build transfer for call %s", call_id)
            return ACKNOWLEDGE

        if bxml is None:
            return ACKNOWLEDGE
        LOGGER.info("Transferred call %s", call_id)
        return WebhookReply(body=bxml, media_type=BXML_MEDIA_TYPE)

    async def handle_callback(self, payload: Any) -> WebhookReply:
        """Dispatch a raw callback body, acknowledging anything that is not an answer."""

        if not isinstance(payload, dict):
            LOGGER.warning("Ignoring malformed callback body of type %s", type(payload).__name__)
            return ACKNOWLEDGE

        event_type = str(payload.get("eventType") or "answer")
        if event_type != "answer":
            LOGGER.info("Ignoring %s callback for call %s", event_type, payload.get("callId"))
            return ACKNOWLEDGE

        call_id = payload.get("callId")
        to_number = payload.get("to")
        return await self.on_call_answered(
            str(call_id) if call_id else None,
            str(to_number) if to_number else None,
        )
