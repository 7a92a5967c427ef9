from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from bridge.dispatcher import CallDispatcher  # noqa: E402
from bridge.errors import ProviderError  # noqa: E402
from bridge.identity_store import IdentityStore  # noqa: E402
from bridge.orchestrator import BridgeOrchestrator, DialPlan  # noqa: E402
from bridge.session_manager import SessionManager  # noqa: E402


class FakeWebRTCProvider:
    def __init__(self) -> None:
        self.sessions_created: list[str | None] = []
        self.participants_created: list[dict] = []
        self.admissions: list[tuple[str, str]] = []
        self.fail_on: set[str] = set()

    async def create_session(self, tag: str | None = None) -> dict:
        if "create_session" in self.fail_on:
            raise ProviderError("session quota exceeded", operation="createSession")
        self.sessions_created.append(tag)
        return {"id": f"session-{len(self.sessions_created)}", "tag": tag}

    async def create_participant(self, tag: str, publish_permissions: list[str], device_api_version: str) -> dict:
        if "create_participant" in self.fail_on:
            raise ProviderError("invalid participant", operation="createParticipant")
        number = len(self.participants_created) + 1
        self.participants_created.append(
            {
                "tag": tag,
                "publishPermissions": publish_permissions,
                "deviceApiVersion": device_api_version,
            }
        )
        return {"participant": {"id": f"participant-{number}"}, "token": f"token-{number}"}

    async def add_participant_to_session(self, session_id: str, participant_id: str) -> None:
        if "add_participant_to_session" in self.fail_on:
            raise ProviderError("session not found", operation="addParticipantToSession")
        self.admissions.append((session_id, participant_id))


class FakeVoiceProvider:
    def __init__(self, call_ids: list[str] | None = None) -> None:
        self.call_ids = list(call_ids or [])
        self.calls_created: list[dict] = []
        self.issued: list[str] = []
        self.completed: list[str] = []
        self.fail_dial = False

    async def create_call(self, body: dict) -> dict:
        if self.fail_dial:
            raise ProviderError("invalid to number", operation="createCall")
        self.calls_created.append(body)
        call_id = self.call_ids.pop(0) if self.call_ids else f"c-{len(self.calls_created):04x}"
        self.issued.append(call_id)
        return {"callId": call_id}

    async def modify_call(self, call_id: str, body: dict) -> None:
        if call_id in self.completed:
            raise ProviderError("call is already completed", operation="modifyCall", provider_status=409)
        if call_id not in self.issued:
            raise ProviderError("call not found", operation="modifyCall", provider_status=404)
        assert body == {"state": "completed"}
        self.completed.append(call_id)


@pytest.fixture()
def webrtc() -> FakeWebRTCProvider:
    return FakeWebRTCProvider()


@pytest.fixture()
def voice() -> FakeVoiceProvider:
    return FakeVoiceProvider(call_ids=["C123"])


@pytest.fixture()
def dial_plan() -> DialPlan:
    return DialPlan(
        from_number="+15005550006",
        to_number="+15551234567",
        answer_url="https://example.com/callAnswered",
    )


@pytest.fixture()
def orchestrator(webrtc, voice, dial_plan) -> BridgeOrchestrator:
    sessions = SessionManager(webrtc)
    return BridgeOrchestrator(
        store=IdentityStore(sessions),
        sessions=sessions,
        dispatcher=CallDispatcher(voice, application_id="app-1"),
        dial_plan=dial_plan,
        session_tag="session-test",
    )


@pytest.fixture(scope="session")
def app(tmp_path_factory: pytest.TempPathFactory):
    tmp_dir = tmp_path_factory.mktemp("runtime")

    # Must be set before importing modules that read settings.
    os.environ["BW_ACCOUNT_ID"] = "9900000"
    os.environ["BW_USERNAME"] = "api-user"
    os.environ["BW_PASSWORD"] = "api-password"
    os.environ["BW_VOICE_APPLICATION_ID"] = "app-1"
    os.environ["BASE_CALLBACK_URL"] = "https://example.com"
    os.environ["BW_NUMBER"] = "+15005550006"
    os.environ["USER_NUMBER"] = "+15551234567"
    os.environ["STATIC_DIR"] = str(tmp_dir / "public")

    import importlib

    for module_name in [
        "config.settings",
        "integrations.bandwidth",
        "integrations.webrtc_client",
        "integrations.voice_client",
        "api.dependencies",
        "api.routes",
        "main",
    ]:
        sys.modules.pop(module_name, None)

    main = importlib.import_module("main")
    return main.app


@pytest.fixture()
def client(app, orchestrator):
    import api.dependencies as deps

    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
