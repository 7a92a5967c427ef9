"""Bandwidth WebRTC API: sessions and participants."""

from __future__ import annotations

from typing import Any

import httpx

from bridge.errors import ProviderError
from integrations.bandwidth import BandwidthConfig, BandwidthHttpClient


class WebRTCClient(BandwidthHttpClient):
    def __init__(self, cfg: BandwidthConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(cfg, cfg.webrtc_api_url, transport=transport)

    async def create_session(self, tag: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if tag:
            body["tag"] = tag
        result = await self._request("POST", "sessions", operation="createSession", json=body)
        if not result.get("id"):
            raise ProviderError("response carried no session id", operation="createSession")
        return result

    async def create_participant(
        self,
        tag: str,
        publish_permissions: list[str],
        device_api_version: str,
    ) -> dict[str, Any]:
        body = {
            "tag": tag,
            "publishPermissions": publish_permissions,
            "deviceApiVersion": device_api_version,
        }
        result = await self._request("POST", "participants", operation="createParticipant", json=body)
        participant = result.get("participant") or {}
        if not participant.get("id") or not result.get("token"):
            raise ProviderError("response carried no participant id or token", operation="createParticipant")
        return result

    async def add_participant_to_session(self, session_id: str, participant_id: str) -> None:
        await self._request(
            "PUT",
            f"sessions/{session_id}/participants/{participant_id}",
            operation="addParticipantToSession",
            json={"sessionId": session_id},
        )
