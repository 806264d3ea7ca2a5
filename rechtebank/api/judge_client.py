"""Async client for the furniture judge API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping

import httpx
from pydantic import ValidationError

from rechtebank.config.settings import Settings, get_settings
from rechtebank.errors import (
    InvalidVerdictIdError,
    JudgeNetworkError,
    JudgeServerError,
    JudgeTimeoutError,
    PhotoValidationError,
    VerdictNotFoundError,
)
from rechtebank.imgproc.normalize import ImageNormalizer
from rechtebank.models import (
    AttemptState,
    PhotoBytes,
    ShareVerdictResponse,
    UploadMetadata,
    Verdict,
    VerdictWithImage,
)

logger = logging.getLogger(__name__)

JUDGE_PATH = "/v1/judge"
VERDICT_PATH = "/v1/verdict"
HEALTH_PATH = "/health"
PHOTO_FIELD = "photo"
PHOTO_FILENAME = "furniture.jpg"

Sleep = Callable[[float], Awaitable[None]]


class JudgeClient:
    """Validates, normalises and delivers one photo per call to the judge."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        normalizer: ImageNormalizer | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        settings = settings or get_settings()
        self._settings = settings
        self._normalizer = normalizer or ImageNormalizer(quality=settings.jpeg_quality)
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=settings.api_base_url.rstrip("/"),
            timeout=settings.request_timeout,
            headers={"User-Agent": settings.user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> "JudgeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def upload_photo(
        self,
        photo: PhotoBytes,
        metadata: UploadMetadata,
        rotation: int = 0,
    ) -> Verdict:
        """Upload a photo for judgment and return the decoded verdict.

        Oversized photos are rejected before any processing. Network
        failures are retried with linear backoff; timeouts, server errors
        and image errors end the submission immediately.
        """

        self._validate_size(photo.size)
        payload = await self._prepare_photo(photo, rotation)
        self._validate_size(len(payload))

        files = [(PHOTO_FIELD, (PHOTO_FILENAME, payload, "image/jpeg"))]
        response = await self._upload_with_retry(files, metadata.as_form_fields())
        return self._parse(Verdict, response)

    async def get_verdict(self, verdict_id: str) -> VerdictWithImage:
        """Fetch a shared verdict together with its photo."""

        if not verdict_id:
            raise InvalidVerdictIdError(body="verdict id cannot be empty")

        response = await self._request("GET", f"{VERDICT_PATH}/{verdict_id}")
        self._raise_for_status(response, lookup=True)
        return self._parse(VerdictWithImage, response)

    async def share_verdict(self, verdict: Verdict) -> str:
        """Ask the server for a shareable identifier of ``verdict``."""

        response = await self._request(
            "POST",
            f"{VERDICT_PATH}/share",
            json={"timestamp": verdict.timestamp, "requestId": verdict.request_id},
        )
        self._raise_for_status(response, lookup=True)
        return self._parse(ShareVerdictResponse, response).id

    async def ping(self) -> bool:
        """Return ``True`` when the health endpoint answers with success."""

        response = await self._request("GET", HEALTH_PATH)
        return response.is_success

    def _validate_size(self, size: int) -> None:
        if size > self._settings.max_photo_bytes:
            logger.info("Rejecting photo of %d bytes (limit %d).", size, self._settings.max_photo_bytes)
            raise PhotoValidationError(size=size, limit=self._settings.max_photo_bytes)

    async def _prepare_photo(self, photo: PhotoBytes, rotation: int) -> bytes:
        angle = rotation % 360
        if angle:
            logger.debug("Rotating photo by %d degrees before upload.", angle)
            return await asyncio.to_thread(self._normalizer.normalize, photo.data, angle)
        if not photo.is_jpeg:
            logger.debug("Converting %s photo to JPEG.", photo.mime_type)
            return await asyncio.to_thread(self._normalizer.to_jpeg, photo.data)
        return photo.data

    async def _upload_with_retry(
        self,
        files: list[tuple[str, tuple[str, bytes, str]]],
        data: Mapping[str, str],
    ) -> httpx.Response:
        state = AttemptState()
        max_attempts = max(1, self._settings.max_attempts)

        while True:
            try:
                response = await self._request("POST", JUDGE_PATH, data=data, files=files)
            except JudgeNetworkError as exc:
                state.last_error = exc
                if state.attempt >= max_attempts:
                    logger.error("Judge upload failed after %d attempts: %s", state.attempt, exc)
                    raise
                delay = self._settings.retry_delay * state.attempt
                logger.warning(
                    "Judge upload failed (%s); retry %d/%d in %.1fs",
                    exc,
                    state.attempt + 1,
                    max_attempts,
                    delay,
                )
                await self._sleep(delay)
                state.attempt += 1
                continue

            self._raise_for_status(response)
            logger.info("Judge accepted photo on attempt %d.", state.attempt)
            return response

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        """Issue one request under its own deadline and classify transport failures."""

        try:
            return await asyncio.wait_for(
                self._client.request(method, endpoint, **kwargs),
                timeout=self._settings.request_timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("%s %s exceeded %.0fs deadline.", method, endpoint, self._settings.request_timeout)
            raise JudgeTimeoutError() from exc
        except httpx.TransportError as exc:
            raise JudgeNetworkError(f"Could not reach the judge: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, lookup: bool = False) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            body = exc.response.text
            if lookup and status == 400:
                raise InvalidVerdictIdError(status, body) from exc
            if lookup and status == 404:
                raise VerdictNotFoundError(status, body) from exc
            raise JudgeServerError(status, body) from exc

    @staticmethod
    def _parse(model: type[Any], response: httpx.Response) -> Any:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Unreadable response from %s: %s", response.request.url, response.text)
            raise JudgeServerError(
                response.status_code,
                response.text,
                message="Server returned an unreadable response.",
            ) from exc
