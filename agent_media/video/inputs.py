"""Image-input preparation for image-to-video requests.

Processing flow:
    - Remote URL: returned unchanged. No fetch, no reachability check.
    - Local path: read fully, base64-encode, wrap as a `data:` URI.

MIME selection:
    By extension only (case-insensitive): `.png` -> `image/png`,
    `.webp` -> `image/webp`, anything else -> `image/jpeg`.

Error handling strategy:
    File read errors (`FileNotFoundError`, `PermissionError`, ...) propagate
    unmodified and are not retried.
"""

import base64
import os

_MIME_BY_EXTENSION = {
    ".png": "image/png",
    ".webp": "image/webp",
}
DEFAULT_IMAGE_MIME = "image/jpeg"


def guess_image_mime(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    return _MIME_BY_EXTENSION.get(ext, DEFAULT_IMAGE_MIME)


def prepare_image_input(image: str, is_url: bool) -> str:
    """Return a value usable as the provider `image` field.

    Args:
        image: Local filesystem path or remote URL.
        is_url: Whether `image` is a remote URL.

    Returns:
        The URL unchanged, or `data:<mime>;base64,<payload>` for local files.
    """
    if is_url:
        return image

    with open(image, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")

    return f"data:{guess_image_mime(image)};base64,{encoded}"


def is_remote_url(value: str) -> bool:
    """Whether a CLI input reference should be treated as a remote URL."""
    return value.startswith("http://") or value.startswith("https://")
