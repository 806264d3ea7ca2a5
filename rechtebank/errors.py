"""Error taxonomy for photo normalisation and delivery."""

from __future__ import annotations

from enum import Enum

from rechtebank.config.settings import MAX_PHOTO_BYTES

_MIB = 1024 * 1024


class ErrorKind(str, Enum):
    """Structural classification used by the retry predicate and the UI."""

    VALIDATION = "validation"
    NETWORK = "network"
    TIMEOUT = "timeout"
    SERVER = "server"
    DECODE = "decode"
    ENCODE = "encode"
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"


class JudgeError(RuntimeError):
    """Base class for every failure surfaced to the caller."""

    kind: ErrorKind = ErrorKind.SERVER

    @property
    def retryable(self) -> bool:
        return False


class PhotoValidationError(JudgeError):
    """Raised before any processing when the photo exceeds the size limit."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str | None = None,
        size: int | None = None,
        limit: int = MAX_PHOTO_BYTES,
    ) -> None:
        self.size = size
        self.limit = limit
        super().__init__(message or f"photo too large, {limit / _MIB:g} MiB maximum.")


class JudgeNetworkError(JudgeError):
    """Raised when the transport could not complete the request."""

    kind = ErrorKind.NETWORK

    @property
    def retryable(self) -> bool:
        return True


class JudgeTimeoutError(JudgeError):
    """Raised when a single attempt outlives its deadline. Never retried."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "judge deliberated too long, please retry.") -> None:
        super().__init__(message)


class JudgeServerError(JudgeError):
    """Raised when the server answers with a non-success status."""

    kind = ErrorKind.SERVER

    def __init__(self, status_code: int, body: str, message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Server error ({status_code}): {body}")


class InvalidVerdictIdError(JudgeServerError):
    """The server rejected the verdict identifier (HTTP 400)."""

    kind = ErrorKind.INVALID_ID

    def __init__(self, status_code: int = 400, body: str = "") -> None:
        super().__init__(status_code, body, message="Invalid verdict id.")


class VerdictNotFoundError(JudgeServerError):
    """The requested verdict does not exist (HTTP 404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, status_code: int = 404, body: str = "") -> None:
        super().__init__(status_code, body, message="Verdict not found.")


class ImageDecodeError(JudgeError):
    """The source photo could not be decoded or drawn."""

    kind = ErrorKind.DECODE


class ImageEncodeError(JudgeError):
    """The encoder produced no output for the normalised photo."""

    kind = ErrorKind.ENCODE
