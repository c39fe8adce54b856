"""Failure taxonomy for remote video generation.

Error handling strategy:
    - Every failure raised by the job client derives from `VideoGenerationError`,
      itself a `RuntimeError`, so callers can catch the family in one place.
    - Local file read failures during input normalization are NOT wrapped; the
      built-in `OSError` family reaches the caller unmodified.
    - Nothing here is retried. The caller decides whether to resubmit.
"""


class VideoGenerationError(RuntimeError):
    """Base class for remote job failures."""


class TransportError(VideoGenerationError):
    """Non-success HTTP status on submit or poll.

    Attributes:
        status_code: HTTP status returned by the provider.
        reason: Status text (reason phrase).
        body: Response body text. Populated for submission failures only.
    """

    def __init__(self, message: str, status_code: int, reason: str, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class RemoteFailure(VideoGenerationError):
    """Provider reported the job as `FAILED`."""


class ProtocolViolation(VideoGenerationError):
    """Success response missing a field the protocol requires."""


class GenerationTimeoutError(VideoGenerationError):
    """Attempt budget exhausted while the job was still non-terminal."""

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts
