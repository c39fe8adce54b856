"""Mapping from `GenerationRequest` to the Runpod WAN input schema.

Remote schema constraints:
    - `duration` accepts only the tiers 5, 10 and 15 seconds.
    - `size` is `"<width>*<height>"`; only 720p and 1080p are offered.
    - Text-to-video and image-to-video are separate endpoints; there is no
      mode flag in the payload. The `image` field exists only for the latter.

Unrecognized resolutions fall back to 720p rather than failing.
"""

from enum import Enum
from typing import Optional

from agent_media.config.provider_config import VIDEO_PROVIDERS
from agent_media.video.models import GenerationRequest

_RUNPOD = VIDEO_PROVIDERS["runpod"]

RESOLUTION_SIZES = {
    "720p": "1280*720",
    "1080p": "1920*1080",
}
DEFAULT_SIZE = RESOLUTION_SIZES["720p"]


class VideoEndpoint(Enum):
    """Runpod run endpoints, selected by presence of an input image."""

    TEXT_TO_VIDEO = _RUNPOD["text_to_video_url"]
    IMAGE_TO_VIDEO = _RUNPOD["image_to_video_url"]

    @property
    def url(self) -> str:
        return self.value


def snap_duration(duration: float) -> int:
    """Snap a requested duration (seconds) to the nearest supported tier."""
    if duration <= 7:
        return 5
    if duration <= 12:
        return 10
    return 15


def map_resolution(resolution: Optional[str]) -> str:
    return RESOLUTION_SIZES.get(resolution or "", DEFAULT_SIZE)


def select_endpoint(request: GenerationRequest) -> VideoEndpoint:
    if request.input_image:
        return VideoEndpoint.IMAGE_TO_VIDEO
    return VideoEndpoint.TEXT_TO_VIDEO


def build_input_payload(request: GenerationRequest, image: Optional[str] = None) -> dict:
    """Build the `input` object for a submission.

    Args:
        request: Generation request.
        image: Prepared image value (URL or data URI). Only attached when the
            request targets the image-to-video endpoint.
    """
    payload = {
        "prompt": request.prompt,
        "duration": snap_duration(request.duration),
        "size": map_resolution(request.resolution),
        "enable_audio": bool(request.generate_audio),
    }

    if select_endpoint(request) is VideoEndpoint.IMAGE_TO_VIDEO and image is not None:
        payload["image"] = image

    return payload
