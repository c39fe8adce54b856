"""Provider/runtime configuration for the video layer.

Architectural role:
    Centralizes provider endpoint maps and credential lookup for
    `agent_media.video.service` and the CLI adapter.

Credential flow:
    - `settings.get_config` loads provider env vars into `api_keys`; the CLI
      hands that value to `resolve_api_key`, which falls back to the key file
      via `load_key`.
    - Keys are passed through untouched as bearer tokens; nothing here
      validates their format.

Determinism:
    Deterministic for a fixed process environment and key files. Endpoint maps
    are static; environment is read lazily at lookup time.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_VIDEO_PROVIDER = "runpod"

# Only providers with an `implemented` flag have a client in `agent_media.video`.
VIDEO_PROVIDERS = {

    "runpod": {
        "text_to_video_url": "https://api.runpod.ai/v2/wan-2-6-t2v/run",
        "image_to_video_url": "https://api.runpod.ai/v2/wan-2-6-i2v/run",
        "env_var": "RUNPOD_API_KEY",
        "key_file": "config/runpod.key",
        "implemented": True,
    },

    "fal": {
        "env_var": "FAL_API_KEY",
        "key_file": "config/fal.key",
        "implemented": False,
    },

    "replicate": {
        "env_var": "REPLICATE_API_TOKEN",
        "key_file": "config/replicate.key",
        "implemented": False,
    },

}


def load_key(path, environ: Optional[Mapping[str, str]] = None):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/runpod.key` -> `RUNPOD_API_KEY`).
        2. Raw file contents at `path`.

    Edge cases:
        - `None` path returns `None`.
        - Missing file returns `None`.
    """
    if not path:
        return None
    env = os.environ if environ is None else environ
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = env.get(key_name)
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None


def get_video_provider(name: str) -> dict:
    """Return the registry entry for an implemented video provider.

    Raises:
        ValueError: Unknown provider, or a provider without a video client.
    """
    provider_config = VIDEO_PROVIDERS.get((name or "").strip().lower())
    if not provider_config:
        raise ValueError(f"Unknown video provider: {name}")
    if not provider_config.get("implemented"):
        raise ValueError(f"Video generation is not supported for provider: {name}")
    return provider_config


def resolve_api_key(name: str, configured: Optional[str] = None) -> str:
    """Resolve the credential for a provider.

    `configured` is the key already loaded into `AgentMediaConfig.api_keys`
    (the provider env var). When it is empty the provider key file is read
    through `load_key`.

    Raises:
        ValueError: Unknown provider.
        RuntimeError: No key available.
    """
    provider_config = VIDEO_PROVIDERS.get((name or "").strip().lower())
    if not provider_config:
        raise ValueError(f"Unknown video provider: {name}")

    api_key = configured or load_key(provider_config.get("key_file"))
    if not api_key:
        raise RuntimeError(
            f"{provider_config['env_var']} is not set and key file "
            f"{provider_config.get('key_file')} is missing or empty"
        )
    return api_key
