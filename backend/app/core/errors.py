"""Error taxonomy for the prompt router.

Every error carries the HTTP status it is surfaced with and a human-readable
message. Nothing here is retried; callers either handle a specific subclass
or let the exception handler in ``app.main`` turn it into ``{"error": ...}``.
"""

from __future__ import annotations

from typing import Any


class CoachRouterError(Exception):
    status_code: int = 500
    message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(CoachRouterError):
    """Required caller input is missing or malformed."""

    status_code = 400
    message = "Missing parameters."


class ConfigNotFoundError(CoachRouterError):
    status_code = 404
    message = "Coaching context not found."

    def __init__(self, coaching_id: str) -> None:
        self.coaching_id = coaching_id
        super().__init__(f"Coaching context '{coaching_id}' not found.")


class CredentialError(CoachRouterError):
    """The provider rejected the credential while listing models."""

    status_code = 401

    def __init__(self, provider: str, status: int, body: str) -> None:
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} rejected the API key ({status}): {body}")


class ProviderUnavailableError(CoachRouterError):
    status_code = 502

    def __init__(self, provider: str, status: int | None, body: str) -> None:
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} error: {status} - {body}")


class ProviderError(CoachRouterError):
    """Generic upstream failure of a chat completion call."""

    status_code = 502

    def __init__(self, provider: str, status: int | None, body: str) -> None:
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} request failed: {status} - {body}")


class EmptyReplyError(CoachRouterError):
    """The provider answered but produced no usable text.

    Raised to the caller only after the fallback reply has been stored.
    """

    status_code = 500
    message = "The AI did not return a text response."

    def __init__(self, provider: str, message: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class StoreError(CoachRouterError):
    status_code = 500
    message = "Internal server error."


class UndoIncompleteError(CoachRouterError):
    status_code = 404
    message = "Not enough messages found to delete a pair."

    def __init__(self, deleted: int) -> None:
        self.deleted = deleted
        super().__init__()

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "deleted": self.deleted}
