"""One-photo-per-cycle submission flow used by the UI layer."""

from __future__ import annotations

import asyncio
import logging

from rechtebank.api.judge_client import JudgeClient
from rechtebank.errors import JudgeError
from rechtebank.imgproc.rotation import (
    VALID_ANGLES,
    ScreenOrientationSource,
    initial_rotation_from,
    rotate_left,
    rotate_right,
)
from rechtebank.models import PhotoBytes, UploadMetadata, VerdictResult

logger = logging.getLogger(__name__)


class SubmissionService:
    """Tracks the user's rotation choice and turns uploads into results."""

    def __init__(
        self,
        client: JudgeClient,
        screen: ScreenOrientationSource | None = None,
    ) -> None:
        self._client = client
        self._screen = screen
        self._lock = asyncio.Lock()
        self.rotation = initial_rotation_from(screen)

    @property
    def busy(self) -> bool:
        """Return ``True`` while a submission is in flight."""

        return self._lock.locked()

    def rotate_left(self) -> int:
        self.rotation = rotate_left(self.rotation)
        return self.rotation

    def rotate_right(self) -> int:
        self.rotation = rotate_right(self.rotation)
        return self.rotation

    def reset(self) -> None:
        """Start a new cycle, re-seeding rotation from the screen."""

        self.rotation = initial_rotation_from(self._screen)

    async def submit(
        self,
        photo: PhotoBytes,
        metadata: UploadMetadata,
        rotation: int | None = None,
    ) -> VerdictResult:
        """Deliver ``photo`` and wrap the outcome in a :class:`VerdictResult`.

        ``rotation`` defaults to the tracked rotation. Delivery failures come back
        as results; an angle that is not a quarter turn raises ``ValueError``
        before anything is sent.
        """

        angle = self.rotation if rotation is None else rotation
        if angle % 360 not in VALID_ANGLES:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {angle}.")
        async with self._lock:
            try:
                verdict = await self._client.upload_photo(photo, metadata, angle)
            except JudgeError as exc:
                logger.warning("Submission failed (%s): %s", exc.kind.value, exc)
                return VerdictResult(error=exc)
        return VerdictResult(verdict=verdict)
