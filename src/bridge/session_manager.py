"""Media session creation and participant admission."""

from __future__ import annotations

import logging

from bridge.models import AUDIO_ONLY, DEVICE_API_VERSION, MediaSession, Participant
from bridge.providers import MediaSessionProvider

LOGGER = logging.getLogger(__name__)


class SessionManager:
    """Thin layer over the media-session provider.

    Provider failures surface as ``ProviderError`` from the client and are
    never retried here.
    """

    def __init__(self, provider: MediaSessionProvider) -> None:
        self._provider = provider

    async def create_session(self, tag: str | None = None) -> MediaSession:
        LOGGER.info("No session found, creating one (tag=%s)", tag)
        result = await self._provider.create_session(tag)
        session = MediaSession(id=str(result["id"]), tag=tag)
        LOGGER.info("Created session %s", session.id)
        return session

    async def create_participant(self, tag: str) -> Participant:
        # Tags end up in billing records; callers must not put PII here.
        result = await self._provider.create_participant(
            tag,
            list(AUDIO_ONLY),
            DEVICE_API_VERSION,
        )
        participant = Participant(
            id=str(result["participant"]["id"]),
            token=str(result["token"]),
            tag=tag,
        )
        LOGGER.info("Created participant %s (tag=%s)", participant.id, tag)
        return participant

    async def admit_participant(self, participant_id: str, session_id: str) -> None:
        await self._provider.add_participant_to_session(session_id, participant_id)
        LOGGER.info("Added participant %s to session %s", participant_id, session_id)
