"""Runpod serverless queue client for WAN video generation.

Processing flow:
    1. Prepare the optional start image (URL passthrough or data URI).
    2. Shape the request into the provider `input` schema and pick the
       text-to-video or image-to-video endpoint.
    3. Submit the job (`POST <endpoint>`).
    4. Poll `GET <endpoint without /run>/status/<id>` at a fixed interval until
       `COMPLETED` / `FAILED` or the attempt budget runs out.
    5. Build the result from the artifact reference the completed job recorded
       (`output.video_url`, else `output.result`).

Error handling strategy:
    - Non-2xx on submit or poll -> `TransportError`.
    - `FAILED` -> `RemoteFailure` carrying the provider message.
    - Missing job id / artifact reference -> `ProtocolViolation`.
    - Budget exhausted -> `GenerationTimeoutError`.
    - Nothing is retried; the caller decides whether to resubmit.

Concurrency:
    One job per `generate` call. Every HTTP call and every sleep is an await
    point; job handle and attempt counter are local to the call, so one client
    instance can serve sequential calls without shared state.

Security considerations:
    The API key is sent as a bearer token and never logged. Submission error
    messages include the provider response body.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx

from agent_media.video.errors import (
    GenerationTimeoutError,
    ProtocolViolation,
    RemoteFailure,
    TransportError,
)
from agent_media.video.inputs import prepare_image_input
from agent_media.video.models import GenerationRequest, GenerationResult, JobStatus, RemoteJob
from agent_media.video.shaping import VideoEndpoint, build_input_payload, select_endpoint

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 60
DEFAULT_POLL_INTERVAL_SECONDS = 5.0
DEFAULT_TIMEOUT_SECONDS = 30.0
VIDEO_CONTENT_TYPE = "video/mp4"
GENERIC_FAILURE_MESSAGE = "Video generation failed"

Sleep = Callable[[float], Awaitable[None]]


def status_url(endpoint: str, job_id: str) -> str:
    """Derive the job status URL from a run endpoint."""
    base = endpoint.rstrip("/")
    if base.endswith("/run"):
        base = base[: -len("/run")]
    return f"{base}/status/{job_id}"


class RunpodVideoClient:
    """Submit-and-poll client for Runpod WAN text/image-to-video endpoints.

    Args:
        api_key: Runpod API key, passed through as a bearer token.
        http_client: Optional shared `httpx.AsyncClient`. When omitted the
            client creates its own and closes it in `aclose`.
        max_attempts: Status requests issued before giving up.
        poll_interval: Seconds slept between non-terminal status responses.
        sleep: Awaitable sleep function; tests inject a no-op.
    """

    def __init__(
        self,
        api_key: str,
        http_client: Optional[httpx.AsyncClient] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.api_key = api_key
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT_SECONDS)

    async def __aenter__(self) -> "RunpodVideoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one request end to end and return the artifact location."""
        endpoint = select_endpoint(request)

        image = None
        if endpoint is VideoEndpoint.IMAGE_TO_VIDEO:
            image = prepare_image_input(request.input_image, request.input_is_url)

        payload = build_input_payload(request, image=image)
        job = await self.submit(endpoint.url, payload)
        await self.poll(endpoint.url, job)
        return self.extract_result(job)

    async def submit(self, endpoint: str, payload: dict) -> RemoteJob:
        """Create a remote job.

        Raises:
            TransportError: Non-2xx response.
            ProtocolViolation: Response body without a job id.
        """
        logger.info(
            "Submitting video job to %s (duration=%s, size=%s, image=%s)",
            endpoint,
            payload.get("duration"),
            payload.get("size"),
            "image" in payload,
        )
        response = await self._http.post(endpoint, json={"input": payload}, headers=self._headers())

        if not response.is_success:
            raise TransportError(
                f"Failed to submit video generation job: {response.reason_phrase} - {response.text}",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise ProtocolViolation("Submission response was not valid JSON") from exc

        job = RemoteJob.from_submission(body)
        logger.info("Video job %s accepted (submit status %s)", job.id, body.get("status"))
        return job

    async def poll(self, endpoint: str, job: RemoteJob) -> dict:
        """Poll until the job reaches a terminal state.

        Returns:
            The full status payload of the `COMPLETED` response.

        Raises:
            TransportError: Non-2xx status response.
            RemoteFailure: Provider reported `FAILED`.
            GenerationTimeoutError: `max_attempts` responses without a terminal state.
        """
        url = status_url(endpoint, job.id)

        for attempt in range(1, self.max_attempts + 1):
            response = await self._http.get(url, headers=self._headers())

            if not response.is_success:
                raise TransportError(
                    f"Failed to check job status: {response.reason_phrase}",
                    status_code=response.status_code,
                    reason=response.reason_phrase,
                )

            try:
                payload = response.json()
            except ValueError as exc:
                raise ProtocolViolation("Status response was not valid JSON") from exc
            if not isinstance(payload, dict):
                raise ProtocolViolation("Status response was not a JSON object")

            status = job.apply_status(payload)
            logger.debug("Job %s attempt %d/%d: %s", job.id, attempt, self.max_attempts, status.value)

            if status is JobStatus.COMPLETED:
                logger.info("Video job %s completed after %d status check(s)", job.id, attempt)
                return payload

            if status is JobStatus.FAILED:
                message = job.error or GENERIC_FAILURE_MESSAGE
                logger.warning("Video job %s failed: %s", job.id, message)
                raise RemoteFailure(message)

            if attempt < self.max_attempts:
                await self._sleep(self.poll_interval)

        raise GenerationTimeoutError(
            f"Video generation timed out after {self.max_attempts} status checks",
            attempts=self.max_attempts,
        )

    @staticmethod
    def extract_result(job: RemoteJob) -> GenerationResult:
        """Build the result from a `COMPLETED` job's artifact reference.

        Raises:
            ProtocolViolation: Job is not completed, or neither
                `output.video_url` nor `output.result` was set.
        """
        if job.status is not JobStatus.COMPLETED:
            raise ProtocolViolation(f"Job {job.id} is {job.status.value}, not COMPLETED")

        if not job.output_url:
            raise ProtocolViolation("No video URL returned from Runpod API")

        return GenerationResult(url=job.output_url, content_type=VIDEO_CONTENT_TYPE)
