"""Application-wide configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    static_dir: Path = Field(
        default=Path("public"),
        description="Directory holding the browser client. Served at / when it exists.",
    )

    # Bandwidth account
    bw_account_id: str | None = Field(default=None)
    bw_username: str | None = Field(default=None)
    bw_password: str | None = Field(default=None)
    bw_voice_application_id: str | None = Field(default=None)
    bw_number: str | None = Field(default=None, description="Caller id for outbound calls, E.164.")
    user_number: str | None = Field(default=None, description="Number dialed by /startPSTNCall, E.164.")
    base_callback_url: str | None = Field(
        default=None,
        description="Public base URL the Voice API calls back on (e.g. https://<ngrok>.ngrok-free.app).",
    )

    # Provider endpoints
    bandwidth_webrtc_api_url: str = Field(default="https://api.webrtc.bandwidth.com/v1")
    bandwidth_voice_api_url: str = Field(default="https://voice.bandwidth.com/api/v2")
    transfer_sip_uri: str = Field(default="sip:sipx.webrtc.bandwidth.com:5060")
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Bridge behaviour
    session_tag: str = Field(default="session-test", description="Audit tag for created media sessions.")
    call_timeout_seconds: int = Field(default=30, ge=1, le=300)

    @field_validator("bandwidth_webrtc_api_url", "bandwidth_voice_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
