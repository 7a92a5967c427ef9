"""Bandwidth Voice API: outbound calls."""

from __future__ import annotations

from typing import Any

import httpx

from bridge.errors import ProviderError
from integrations.bandwidth import BandwidthConfig, BandwidthHttpClient


class VoiceClient(BandwidthHttpClient):
    def __init__(self, cfg: BandwidthConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(cfg, cfg.voice_api_url, transport=transport)

    async def create_call(self, body: dict[str, Any]) -> dict[str, Any]:
        # See https://dev.bandwidth.com/apis/voice/#operation/createCall
        result = await self._request("POST", "calls", operation="createCall", json=body)
        if not result.get("callId"):
            raise ProviderError("response carried no callId", operation="createCall")
        return result

    async def modify_call(self, call_id: str, body: dict[str, Any]) -> None:
        await self._request("POST", f"calls/{call_id}", operation="modifyCall", json=body)
