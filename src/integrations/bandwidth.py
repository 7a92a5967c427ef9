from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from bridge.errors import ConfigurationError, ProviderError
from config.settings import get_settings

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BandwidthConfig:
    account_id: str
    username: str
    password: str
    webrtc_api_url: str
    voice_api_url: str
    timeout_seconds: float


def get_bandwidth_config() -> BandwidthConfig:
    settings = get_settings()
    missing = [
        name
        for name, value in (
            ("BW_ACCOUNT_ID", settings.bw_account_id),
            ("BW_USERNAME", settings.bw_username),
            ("BW_PASSWORD", settings.bw_password),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Please set the {', '.join(missing)} environment variable(s) before running this app"
        )

    return BandwidthConfig(
        account_id=settings.bw_account_id,
        username=settings.bw_username,
        password=settings.bw_password,
        webrtc_api_url=settings.bandwidth_webrtc_api_url,
        voice_api_url=settings.bandwidth_voice_api_url,
        timeout_seconds=settings.http_timeout_seconds,
    )


class BandwidthHttpClient:
    """Shared plumbing for the Bandwidth REST APIs.

    A fresh ``httpx.AsyncClient`` is opened per request. Every transport or
    HTTP status failure is re-raised as :class:`ProviderError` carrying the
    provider's own message.
    """

    def __init__(
        self,
        cfg: BandwidthConfig,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._cfg = cfg
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def account_id(self) -> str:
        return self._cfg.account_id

    def _account_url(self, path: str) -> str:
        return f"{self._base_url}/accounts/{self._cfg.account_id}/{path.lstrip('/')}"

    async def _request(self, method: str, path: str, *, operation: str, json: dict | None = None) -> dict:
        url = self._account_url(path)
        try:
            async with httpx.AsyncClient(
                auth=(self._cfg.username, self._cfg.password),
                timeout=self._cfg.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = provider_message(exc.response)
            LOGGER.error("%s rejected by Bandwidth (%s): %s", operation, exc.response.status_code, message)
            raise ProviderError(
                message,
                operation=operation,
                provider_status=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            LOGGER.error("%s could not reach Bandwidth: %s", operation, exc)
            raise ProviderError(str(exc) or type(exc).__name__, operation=operation) from exc

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError("response was not valid JSON", operation=operation) from exc


def provider_message(response: httpx.Response) -> str:
    """Pull the human readable error out of a Bandwidth error body."""

    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase

    if isinstance(body, dict):
        for key in ("description", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase
