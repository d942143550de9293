"""Error taxonomy shared by the server and the retrying client."""
from __future__ import annotations


class ExamGateError(Exception):
    """Base class for errors rendered as ``{ok: false, error, code}``."""

    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def public_message(self) -> str:
        """Message safe to show to the caller."""
        return self.message


class ConfigurationError(ExamGateError):
    """A required secret or credential is not configured."""

    status_code = 500
    code = "configuration_error"
    default_message = "Server configuration error"

    @property
    def public_message(self) -> str:
        # Never reveal which setting is missing
        return self.default_message


class InvalidRequest(ExamGateError):
    status_code = 400
    code = "invalid_request"
    default_message = "Invalid request"


class Unauthorized(ExamGateError):
    """Valid code, but the role may not perform the action."""

    status_code = 403
    code = "unauthorized"
    default_message = "Unauthorized"


class PayloadTooLarge(ExamGateError):
    status_code = 413
    code = "payload_too_large"
    default_message = "Test content is too large to save"


class MalformedDocument(ExamGateError):
    """The stored document could not be read back as a test definition."""

    status_code = 500
    code = "malformed_document"
    default_message = "Stored test content is unreadable"


class StoreUnavailable(ExamGateError):
    status_code = 503
    code = "store_unavailable"
    default_message = "Content store unavailable"


class DeliveryFailed(ExamGateError):
    status_code = 502
    code = "delivery_failed"
    default_message = "Failed to send email"


class RemoteError(ExamGateError):
    """Application error reported by the server with an unrecognized code."""

    code = "remote_error"
    default_message = "Unknown error from server"


# Client-side transport errors. These are retried by the harness.


class GatewayError(ExamGateError):
    """The transport could not complete the call."""

    status_code = 503
    code = "gateway_error"
    default_message = "Gateway call failed"


class MalformedResponse(GatewayError):
    """A response that had to parse did not."""

    code = "malformed_response"
    default_message = "Invalid response body format"


class Unreachable(ExamGateError):
    """All attempts against the gateway were exhausted."""

    status_code = 503
    code = "unreachable"
    default_message = "Server unreachable, please try again later"

    def __init__(self, message: str | None = None, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


_REMOTE_ERRORS: dict[str, type[ExamGateError]] = {
    cls.code: cls
    for cls in (
        ConfigurationError,
        InvalidRequest,
        Unauthorized,
        PayloadTooLarge,
        MalformedDocument,
        StoreUnavailable,
        DeliveryFailed,
    )
}


def error_from_payload(payload: dict[str, object]) -> ExamGateError:
    """Rebuild a domain error from an ``{ok: false}`` response body."""
    message = payload.get("error")
    if not isinstance(message, str) or not message:
        message = None
    code = payload.get("code")
    error_cls = _REMOTE_ERRORS.get(code, RemoteError) if isinstance(code, str) else RemoteError
    return error_cls(message)
