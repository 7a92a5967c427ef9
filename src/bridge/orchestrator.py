"""Bridge state machine.

Two independent tasks drive a PSTN bridge: the request that dials out and the
answer webhook that later asks for the transfer. They are correlated only by
call id through the :class:`IdentityStore`.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from bridge.dispatcher import CallDispatcher
from bridge.errors import BridgeError, ConfigurationError, NotFoundError
from bridge.identity_store import IdentityStore
from bridge.models import Bridge, BridgePhase
from bridge.session_manager import SessionManager
from bridge.transfer import DEFAULT_SIP_URI, generate_transfer_bxml

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DialPlan:
    from_number: str | None
    to_number: str | None
    answer_url: str | None


class BridgeOrchestrator:
    def __init__(
        self,
        *,
        store: IdentityStore,
        sessions: SessionManager,
        dispatcher: CallDispatcher,
        dial_plan: DialPlan,
        session_tag: str | None = None,
        transfer_sip_uri: str = DEFAULT_SIP_URI,
    ) -> None:
        self.store = store
        self._sessions = sessions
        self._dispatcher = dispatcher
        self._dial_plan = dial_plan
        self._session_tag = session_tag
        self._transfer_sip_uri = transfer_sip_uri

    async def start_browser_call(self) -> Bridge:
        """Admit a browser participant; the client joins with its own token."""

        return await self._admit(_new_tag())

    async def start_pstn_call(self) -> Bridge:
        plan = self._require_dial_plan()
        bridge = await self._admit(_new_tag())
        try:
            call = await self._dispatcher.dial(plan.from_number, plan.to_number, plan.answer_url)
        except BridgeError:
            bridge.advance(BridgePhase.FAILED)
            raise
        bridge.dialing(call)
        await self.store.bind_pending_bridge(call.call_id, bridge)
        return bridge

    async def on_call_answered(self, call_id: str) -> str | None:
        """Return the transfer BXML for ``call_id``, or None if nothing is waiting on it."""

        try:
            bridge = await self.store.take_pending_bridge(call_id)
        except NotFoundError:
            LOGGER.warning("No participant found for call %s", call_id)
            return None

        bridge.advance(BridgePhase.ANSWERED)
        LOGGER.info("Transferring call %s to session %s", call_id, bridge.session_id)
        bxml = generate_transfer_bxml(bridge.participant.token, call_id, self._transfer_sip_uri)
        bridge.advance(BridgePhase.TRANSFERRED)
        return bxml

    async def end_call(self) -> Bridge:
        """Hang up the most recently dialed call, whatever phase it is in."""

        bridge = self.store.current_call()
        if bridge is None or bridge.call_id is None:
            raise NotFoundError("No PSTN call has been dialed")

        call_id = bridge.call_id
        await self._dispatcher.end(call_id)
        if await self.store.discard_pending_bridge(call_id):
            LOGGER.info("Call %s ended before it was answered", call_id)
        if not bridge.phase.is_terminal:
            bridge.advance(BridgePhase.ENDED)
        return bridge

    async def _admit(self, tag: str) -> Bridge:
        bridge = Bridge(tag=tag)
        try:
            bridge.session_ready(await self.store.get_or_create_session(self._session_tag))
            participant = await self._sessions.create_participant(tag)
            await self._sessions.admit_participant(participant.id, bridge.session_id)
        except BridgeError:
            # A participant created but not admitted is left to the provider.
            bridge.advance(BridgePhase.FAILED)
            raise
        bridge.participant_admitted(participant)
        return bridge

    def _require_dial_plan(self) -> DialPlan:
        plan = self._dial_plan
        if not plan.from_number or not plan.to_number or not plan.answer_url:
            raise ConfigurationError("BW_NUMBER, USER_NUMBER and BASE_CALLBACK_URL are required to dial")
        return plan


def _new_tag() -> str:
    return str(uuid.uuid1())
