"""
Error kinds shared by storage, accounts, content and the API layer.

Handlers branch on ``ForsajError.kind`` rather than on message text. Each
error carries an English ``detail`` for logs/clients and a separate
Azerbaijani ``message`` that the admin UI shows in its toast notifications.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    UPSTREAM_FAILURE = "upstream_failure"
    VALIDATION_FAILURE = "validation_failure"


HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILURE: 400,
    ErrorKind.IO_FAILURE: 500,
    ErrorKind.UPSTREAM_FAILURE: 502,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "Məlumat tapılmadı",
    ErrorKind.VALIDATION_FAILURE: "Yanlış məlumat göndərildi",
    ErrorKind.IO_FAILURE: "Məlumatı yadda saxlamaq mümkün olmadı",
    ErrorKind.UPSTREAM_FAILURE: "Xarici xidmətlə əlaqə alınmadı",
}


class ForsajError(Exception):
    """Base error with a kind, an English detail and a localized message."""

    def __init__(self, kind: ErrorKind, detail: str, message: str | None = None) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.message = message or DEFAULT_MESSAGES[kind]

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def to_payload(self) -> dict[str, str]:
        return {"error": self.kind.value, "detail": self.detail, "message": self.message}


class NotFoundError(ForsajError):
    def __init__(self, detail: str, message: str | None = None) -> None:
        super().__init__(ErrorKind.NOT_FOUND, detail, message)


class IOFailureError(ForsajError):
    def __init__(self, detail: str, message: str | None = None) -> None:
        super().__init__(ErrorKind.IO_FAILURE, detail, message)


class UpstreamFailureError(ForsajError):
    def __init__(self, detail: str, message: str | None = None) -> None:
        super().__init__(ErrorKind.UPSTREAM_FAILURE, detail, message)


class ValidationFailureError(ForsajError):
    def __init__(self, detail: str, message: str | None = None) -> None:
        super().__init__(ErrorKind.VALIDATION_FAILURE, detail, message)
