"""Contracts the bridge core expects from the external providers."""

from __future__ import annotations

from typing import Any, Protocol


class MediaSessionProvider(Protocol):
    """Media-session (WebRTC) provider, see ``integrations.webrtc_client``."""

    async def create_session(self, tag: str | None = None) -> dict[str, Any]:  # pragma: no cover - protocol stub
        ...

    async def create_participant(
        self,
        tag: str,
        publish_permissions: list[str],
        device_api_version: str,
    ) -> dict[str, Any]:  # pragma: no cover - protocol stub
        ...

    async def add_participant_to_session(
        self, session_id: str, participant_id: str
    ) -> None:  # pragma: no cover - protocol stub
        ...


class VoiceProvider(Protocol):
    """Voice provider, see ``integrations.voice_client``."""

    async def create_call(self, body: dict[str, Any]) -> dict[str, Any]:  # pragma: no cover - protocol stub
        ...

    async def modify_call(self, call_id: str, body: dict[str, Any]) -> None:  # pragma: no cover - protocol stub
        ...
