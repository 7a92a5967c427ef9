"""Outbound PSTN calls, independent of any media session."""

from __future__ import annotations

import logging

from bridge.models import CallHandle, CallPhase
from bridge.providers import VoiceProvider

LOGGER = logging.getLogger(__name__)

DEFAULT_RING_TIMEOUT_SECONDS = 30


class CallDispatcher:
    def __init__(
        self,
        provider: VoiceProvider,
        *,
        application_id: str | None,
        ring_timeout_seconds: int = DEFAULT_RING_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._application_id = application_id
        self._ring_timeout_seconds = ring_timeout_seconds

    async def dial(self, from_number: str, to_number: str, answer_url: str) -> CallHandle:
        """Request an outbound call and return as soon as the provider accepts it.

        The answer is signalled later through ``answer_url``.
        """

        body = {
            "from": from_number,
            "to": to_number,
            "applicationId": self._application_id,
            "answerUrl": answer_url,
            "answerMethod": "POST",
            "callTimeout": self._ring_timeout_seconds,
        }
        result = await self._provider.create_call(body)
        handle = CallHandle(call_id=str(result["callId"]), phase=CallPhase.DIALING)
        LOGGER.info("Dialing %s from %s (call %s)", to_number, from_number, handle.call_id)
        return handle

    async def end(self, call_id: str) -> None:
        await self._provider.modify_call(call_id, {"state": "completed"})
        LOGGER.info("Hung up call %s", call_id)
