from __future__ import annotations

import asyncio
import logging

from bridge.errors import NotFoundError
from bridge.models import Bridge, BridgePhase
from bridge.session_manager import SessionManager

LOGGER = logging.getLogger(__name__)


class IdentityStore:
    """Active media session plus the bridges waiting on an answer.

    Note: This is a single-process store holding one session at a time. For
    multi-worker deployments, replace with Redis or another shared store.
    """

    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager
        self._lock = asyncio.Lock()
        self._session_id: str | None = None
        self._pending: dict[str, Bridge] = {}
        self._current: Bridge | None = None

    @property
    def session_id(self) -> str | None:
        return self._session_id

    async def get_or_create_session(self, tag: str | None = None) -> str:
        async with self._lock:
            if self._session_id is None:
                session = await self._session_manager.create_session(tag)
                self._session_id = session.id
                LOGGER.info("Saved session %s", session.id)
            return self._session_id

    async def reset_session(self) -> None:
        async with self._lock:
            if self._pending:
                LOGGER.warning(
                    "Dropping %d pending bridge(s) with session %s",
                    len(self._pending),
                    self._session_id,
                )
            self._session_id = None
            self._pending.clear()

    async def bind_pending_bridge(self, call_id: str, bridge: Bridge) -> None:
        if bridge.phase is not BridgePhase.DIALING or bridge.call_id != call_id:
            raise ValueError(f"Bridge {bridge.tag} is not dialing call {call_id}")
        async with self._lock:
            if call_id in self._pending:
                LOGGER.warning("Overwriting pending bridge for call %s", call_id)
            self._pending[call_id] = bridge
            self._current = bridge

    async def take_pending_bridge(self, call_id: str) -> Bridge:
        async with self._lock:
            bridge = self._pending.pop(call_id, None)
        if bridge is None:
            raise NotFoundError(f"No pending bridge for call {call_id}")
        return bridge

    async def discard_pending_bridge(self, call_id: str) -> bool:
        async with self._lock:
            return self._pending.pop(call_id, None) is not None

    def current_call(self) -> Bridge | None:
        """The most recently dialed bridge, whatever its phase."""

        return self._current

    def pending_count(self) -> int:
        return len(self._pending)
