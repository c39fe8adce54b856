"""Data contracts for the video generation pipeline.

Architectural role:
    Defines the request handed in by the CLI, the remote job tracked by the
    client while polling, and the result handed back out.

State model:
    `RemoteJob.status` only moves forward. Once `COMPLETED` or `FAILED` is
    recorded the job is frozen; further status payloads are rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from agent_media.video.errors import ProtocolViolation


class JobStatus(str, Enum):
    """Queue states reported by the provider status endpoint."""

    IN_QUEUE = "IN_QUEUE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


@dataclass(frozen=True)
class GenerationRequest:
    """Provider-agnostic video generation request.

    Attributes:
        prompt: Text prompt forwarded to the model.
        input_image: Local path or remote URL of a start frame. Selects the
            image-to-video endpoint when set.
        input_is_url: Whether `input_image` is a remote URL (passed through) or
            a local path (read and inlined as a data URI).
        duration: Requested length in seconds; snapped to provider tiers.
        resolution: `"720p"` or `"1080p"`; unknown values fall back to 720p.
        generate_audio: Whether the provider should synthesize audio.
    """

    prompt: str
    input_image: Optional[str] = None
    input_is_url: bool = False
    duration: float = 5
    resolution: str = "720p"
    generate_audio: bool = False


@dataclass(frozen=True)
class GenerationResult:
    url: str
    content_type: str = "video/mp4"

    def to_dict(self) -> dict:
        return {"url": self.url, "contentType": self.content_type}


@dataclass
class RemoteJob:
    """Job handle created from a successful submission response.

    Only `apply_status` mutates a job, and only with payloads that belong to it.
    The submission's own `status` field is not recorded: every job starts at
    `IN_QUEUE` and the status endpoint alone decides the outcome.
    """

    id: str
    status: JobStatus = JobStatus.IN_QUEUE
    output_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_submission(cls, payload: Any) -> "RemoteJob":
        """Build a job from the submission body.

        Raises:
            ProtocolViolation: Body is not an object or carries no job id.
        """
        if not isinstance(payload, dict) or not payload.get("id"):
            raise ProtocolViolation("Submission response did not include a job id")

        return cls(id=str(payload["id"]))

    def apply_status(self, payload: dict) -> JobStatus:
        """Record one status payload and return the resulting state.

        Unknown status strings leave the job in its current non-terminal state.
        The artifact reference is read from `output.video_url`, else
        `output.result`.

        Raises:
            ProtocolViolation: Job is already terminal, or the payload names a
                different job id.
        """
        if self.status.is_terminal:
            raise ProtocolViolation(
                f"Job {self.id} is already {self.status.value}; refusing further updates"
            )

        payload_id = payload.get("id")
        if payload_id is not None and str(payload_id) != self.id:
            raise ProtocolViolation(
                f"Status response for job {payload_id} does not match job {self.id}"
            )

        status = parse_status(payload.get("status"))
        if status is not None:
            self.status = status

        output = payload.get("output")
        if isinstance(output, dict):
            self.output_url = output.get("video_url") or output.get("result") or None

        if self.status is JobStatus.FAILED:
            self.error = payload.get("error") or None

        return self.status


def parse_status(value: Any) -> Optional[JobStatus]:
    """Map a provider status string to `JobStatus`; `None` when unrecognized.

    Matching is exact: `"completed"` is not `COMPLETED`.
    """
    if not isinstance(value, str):
        return None
    try:
        return JobStatus(value)
    except ValueError:
        return None
