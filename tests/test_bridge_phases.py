from __future__ import annotations

import pytest

from bridge.errors import InvalidTransitionError
from bridge.models import Bridge, BridgePhase, CallHandle, CallPhase, Participant


def _admitted() -> Bridge:
    bridge = Bridge(tag="tag-1")
    bridge.session_ready("session-1")
    bridge.participant_admitted(Participant(id="p-1", token="secret-token", tag="tag-1"))
    return bridge


def test_pstn_path_walks_every_phase():
    bridge = _admitted()
    call = CallHandle(call_id="C123")

    bridge.dialing(call)
    bridge.advance(BridgePhase.ANSWERED)
    bridge.advance(BridgePhase.TRANSFERRED)
    bridge.advance(BridgePhase.ENDED)

    assert bridge.phase is BridgePhase.ENDED
    assert call.phase is CallPhase.ENDED


def test_transfer_before_dial_is_rejected():
    bridge = _admitted()

    with pytest.raises(InvalidTransitionError):
        bridge.advance(BridgePhase.ANSWERED)
    with pytest.raises(InvalidTransitionError):
        bridge.advance(BridgePhase.TRANSFERRED)


def test_participant_cannot_be_admitted_without_session():
    bridge = Bridge(tag="tag-1")

    with pytest.raises(InvalidTransitionError):
        bridge.participant_admitted(Participant(id="p-1", token="t", tag="tag-1"))


def test_end_is_allowed_from_dialing():
    bridge = _admitted()
    bridge.dialing(CallHandle(call_id="C123"))

    bridge.advance(BridgePhase.ENDED)

    assert bridge.call.phase is CallPhase.ENDED


def test_terminal_phases_accept_nothing():
    bridge = _admitted()
    bridge.advance(BridgePhase.FAILED)

    with pytest.raises(InvalidTransitionError):
        bridge.advance(BridgePhase.ENDED)


def test_token_is_not_in_repr():
    participant = Participant(id="p-1", token="secret-token", tag="tag-1")

    assert "secret-token" not in repr(participant)
    assert participant.publish_permissions == ("AUDIO",)
