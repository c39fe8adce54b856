"""Video generation adapter package.

Scope:
    Translates a generic `GenerationRequest` into a provider job, submits it,
    polls the provider queue until a terminal state, and hands back the
    artifact location.

Non-goals:
    - No local media processing (transcoding, trimming, muxing).
    - No persistence of job state across process restarts.
    - No concurrent tracking of multiple jobs.
"""

from agent_media.video.errors import (
    GenerationTimeoutError,
    ProtocolViolation,
    RemoteFailure,
    TransportError,
    VideoGenerationError,
)
from agent_media.video.models import (
    GenerationRequest,
    GenerationResult,
    JobStatus,
    RemoteJob,
)

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "GenerationTimeoutError",
    "JobStatus",
    "ProtocolViolation",
    "RemoteFailure",
    "RemoteJob",
    "TransportError",
    "VideoGenerationError",
]
