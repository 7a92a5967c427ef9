"""Domain-specific exceptions for bridge operations.

These exceptions are safe to import from API layers without pulling in the
provider clients.
"""

from __future__ import annotations


class BridgeError(Exception):
    status_code: int = 500
    default_detail: str = "Bridge error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail


class ProviderError(BridgeError):
    """An external provider call failed."""

    default_detail = "Provider request failed."

    def __init__(
        self,
        detail: str | None = None,
        *,
        operation: str | None = None,
        provider_status: int | None = None,
    ) -> None:
        if operation and detail:
            detail = f"{operation} failed: {detail}"
        elif operation:
            detail = f"{operation} failed"
        super().__init__(detail)
        self.operation = operation
        self.provider_status = provider_status


class NotFoundError(BridgeError):
    status_code = 404
    default_detail = "No matching bridge."


class InvalidTransitionError(BridgeError):
    status_code = 409
    default_detail = "Illegal bridge transition."


class ConfigurationError(BridgeError):
    default_detail = "Required configuration is missing."
