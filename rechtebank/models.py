"""Data carried through one submission cycle."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from rechtebank.errors import JudgeError

JPEG_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/pjpeg"})


class CaptureMethod(str, Enum):
    """How the photo reached the client."""

    CAMERA = "camera"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class PhotoBytes:
    """Raw photo content plus its declared MIME type."""

    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_jpeg(self) -> bool:
        return self.mime_type.lower() in JPEG_MIME_TYPES

    @classmethod
    def from_path(cls, path: Path | str) -> "PhotoBytes":
        """Read a photo from disk, guessing the MIME type from its extension."""

        source = Path(path).expanduser()
        mime_type, _ = mimetypes.guess_type(source.name)
        return cls(data=source.read_bytes(), mime_type=mime_type or "application/octet-stream")


@dataclass(frozen=True, slots=True)
class UploadMetadata:
    """Caller-provided context sent alongside the photo, untouched."""

    user_agent: str
    captured_at: datetime
    capture_method: CaptureMethod = CaptureMethod.CAMERA

    @classmethod
    def now(cls, user_agent: str, capture_method: CaptureMethod = CaptureMethod.CAMERA) -> "UploadMetadata":
        return cls(
            user_agent=user_agent,
            captured_at=datetime.now(timezone.utc),
            capture_method=capture_method,
        )

    def as_form_fields(self) -> dict[str, str]:
        """Return the multipart text fields expected by the judge endpoint."""

        return {
            "userAgent": self.user_agent,
            "timestamp": self.captured_at.isoformat(),
            "captureMethod": CaptureMethod(self.capture_method).value,
        }


@dataclass(slots=True)
class AttemptState:
    """Retry bookkeeping owned by a single upload call."""

    attempt: int = 1
    last_error: JudgeError | None = None


class VerdictDetails(BaseModel):
    """Structured components of the judge's ruling."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    crime: str
    sentence: str
    reasoning: str
    observation: str
    verdict_type: str = Field(alias="verdictType")


class Verdict(BaseModel):
    """Verdict returned by the judge endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    admissible: bool
    score: int
    verdict: VerdictDetails
    request_id: str = Field(alias="requestId")
    timestamp: str


class VerdictWithImage(BaseModel):
    """Stored verdict together with the judged photo as a data URL."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    verdict: Verdict
    image: str = ""

    def image_bytes(self) -> bytes | None:
        """Decode the embedded ``data:image/jpeg;base64,...`` URL."""

        if not self.image.startswith("data:") or "," not in self.image:
            return None
        _, encoded = self.image.split(",", 1)
        try:
            return base64.b64decode(encoded, validate=True)
        except (ValueError, binascii.Error):
            return None


class ShareVerdictResponse(BaseModel):
    """Identifier of a shareable verdict."""

    id: str


@dataclass(frozen=True, slots=True)
class VerdictResult:
    """Terminal value of one submission: a verdict or a classified error."""

    verdict: Verdict | None = None
    error: JudgeError | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.verdict is not None

    @property
    def message(self) -> str:
        if self.error is not None:
            return str(self.error)
        return ""
