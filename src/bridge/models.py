"""Bridge state and the records passed between components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from bridge.errors import InvalidTransitionError

AUDIO_ONLY: tuple[str, ...] = ("AUDIO",)
DEVICE_API_VERSION = "V3"


class CallPhase(str, Enum):
    DIALING = "dialing"
    ANSWERED = "answered"
    TRANSFERRED = "transferred"
    ENDED = "ended"
    FAILED = "failed"


class BridgePhase(str, Enum):
    IDLE = "idle"
    SESSION_READY = "session_ready"
    PARTICIPANT_ADMITTED = "participant_admitted"
    DIALING = "dialing"
    ANSWERED = "answered"
    TRANSFERRED = "transferred"
    ENDED = "ended"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (BridgePhase.ENDED, BridgePhase.FAILED)


_CALL_PHASES = frozenset(phase.value for phase in CallPhase)

_TRANSITIONS: dict[BridgePhase, frozenset[BridgePhase]] = {
    BridgePhase.IDLE: frozenset({BridgePhase.SESSION_READY}),
    BridgePhase.SESSION_READY: frozenset({BridgePhase.PARTICIPANT_ADMITTED}),
    BridgePhase.PARTICIPANT_ADMITTED: frozenset({BridgePhase.DIALING}),
    BridgePhase.DIALING: frozenset({BridgePhase.ANSWERED}),
    BridgePhase.ANSWERED: frozenset({BridgePhase.TRANSFERRED}),
    BridgePhase.TRANSFERRED: frozenset(),
    BridgePhase.ENDED: frozenset(),
    BridgePhase.FAILED: frozenset(),
}


@dataclass(frozen=True, slots=True)
class MediaSession:
    id: str
    tag: str | None = None


@dataclass(frozen=True, slots=True)
class Participant:
    """A participant minted by the media-session provider.

    ``token`` is the bearer credential the media client joins with. It is kept
    out of ``repr`` so it never ends up in log lines.
    """

    id: str
    token: str = field(repr=False)
    tag: str
    publish_permissions: tuple[str, ...] = AUDIO_ONLY
    device_api_version: str = DEVICE_API_VERSION


@dataclass(slots=True)
class CallHandle:
    call_id: str
    phase: CallPhase = CallPhase.DIALING


@dataclass(slots=True)
class Bridge:
    """One bridge attempt, from session setup to hang-up.

    Phases only move along the transition table; ``ENDED`` and ``FAILED`` are
    reachable from any non-terminal phase.
    """

    tag: str
    phase: BridgePhase = BridgePhase.IDLE
    session_id: str | None = None
    participant: Participant | None = None
    call: CallHandle | None = None

    @property
    def call_id(self) -> str | None:
        return self.call.call_id if self.call else None

    def advance(self, phase: BridgePhase) -> None:
        if not self._can_move_to(phase):
            raise InvalidTransitionError(
                f"Cannot move bridge {self.tag} from {self.phase.value} to {phase.value}"
            )
        self.phase = phase
        if self.call is not None and phase.value in _CALL_PHASES:
            self.call.phase = CallPhase(phase.value)

    def _can_move_to(self, phase: BridgePhase) -> bool:
        if phase in (BridgePhase.ENDED, BridgePhase.FAILED):
            return not self.phase.is_terminal
        return phase in _TRANSITIONS[self.phase]

    def session_ready(self, session_id: str) -> None:
        self.advance(BridgePhase.SESSION_READY)
        self.session_id = session_id

    def participant_admitted(self, participant: Participant) -> None:
        self.advance(BridgePhase.PARTICIPANT_ADMITTED)
        self.participant = participant

    def dialing(self, call: CallHandle) -> None:
        self.advance(BridgePhase.DIALING)
        self.call = call
        call.phase = CallPhase.DIALING
