"""Video service dispatcher used by the CLI adapter.

Role in pipeline:
    - Receives a `GenerationRequest` plus explicit provider/credential values.
    - Selects the provider client (only `runpod` has one today).
    - Returns the client's `GenerationResult` unchanged.

Error handling strategy:
    - Exceptions from provider clients are intentionally propagated.
    - Unknown/unsupported provider -> `ValueError`.
"""

from typing import Optional

import httpx

from agent_media.config.provider_config import DEFAULT_VIDEO_PROVIDER, get_video_provider
from agent_media.video.models import GenerationRequest, GenerationResult
from agent_media.video.runpod_client import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    RunpodVideoClient,
)


async def generate_video(
    request: GenerationRequest,
    api_key: str,
    provider: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> GenerationResult:
    """Generate a video via the configured provider adapter.

    Args:
        request: Generation request.
        api_key: Provider credential, already resolved by the caller.
        provider: Provider name; defaults to `runpod`.
        http_client: Optional shared HTTP client.
        max_attempts: Poll budget.
        poll_interval: Seconds between status checks.
    """
    name = (provider or DEFAULT_VIDEO_PROVIDER).strip().lower()
    get_video_provider(name)

    async with RunpodVideoClient(
        api_key,
        http_client=http_client,
        max_attempts=max_attempts,
        poll_interval=poll_interval,
    ) as client:
        return await client.generate(request)
