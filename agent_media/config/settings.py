"""Output-location and credential settings for the CLI.

Architectural role:
    Resolves where generated files go and which API keys are available, then
    hands explicit values to the video layer. Nothing in `agent_media.video`
    reads the environment directly.

Relevant environment variables:
    - `AGENT_MEDIA_DIR`: base output directory (default: current directory)
    - `FAL_API_KEY`, `REPLICATE_API_TOKEN`, `RUNPOD_API_KEY`

Filename policy:
    - Custom name: used as-is with its extension replaced.
    - Derived from input: `<input basename>_<action>_<uuid>.<ext>`.
    - Otherwise: `<action>_<uuid>.<ext>`.
"""

import os
import random
import string
import time
import uuid
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

DEFAULT_OUTPUT_DIR = "."

MEDIA_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".webp", ".gif",
    ".mp4", ".webm", ".mp3", ".wav", ".json",
}


@dataclass(frozen=True)
class AgentMediaConfig:
    """Resolved configuration.

    Attributes:
        output_dir: Absolute base output directory.
        api_keys: Provider name -> key (missing keys are `None`).
    """

    output_dir: str
    api_keys: dict = field(default_factory=dict)


@dataclass(frozen=True)
class MergedConfig:
    output_dir: str
    provider: Optional[str] = None
    output_name: Optional[str] = None


def get_config(environ: Optional[Mapping[str, str]] = None) -> AgentMediaConfig:
    """Build configuration from environment variables and defaults."""
    env = os.environ if environ is None else environ
    output_dir = env.get("AGENT_MEDIA_DIR") or os.getcwd()

    return AgentMediaConfig(
        output_dir=os.path.abspath(output_dir),
        api_keys={
            "fal": env.get("FAL_API_KEY"),
            "replicate": env.get("REPLICATE_API_TOKEN"),
            "runpod": env.get("RUNPOD_API_KEY"),
        },
    )


def ensure_output_dir(output_dir: str) -> None:
    os.makedirs(output_dir, exist_ok=True)


def generate_output_filename(extension: str, prefix: str = "output") -> str:
    """Legacy unique filename: `<prefix>_<ms timestamp>_<6 base36 chars>.<ext>`."""
    timestamp = int(time.time() * 1000)
    alphabet = string.digits + string.ascii_lowercase
    suffix = "".join(random.choice(alphabet) for _ in range(6))
    return f"{prefix}_{timestamp}_{suffix}.{extension}"


def _strip_extension(name: str) -> str:
    return os.path.splitext(name)[0] if not name.startswith(".") else name


def extract_basename(source: str) -> str:
    """Return the filename without extension from a local path or HTTP(S) URL."""
    if source.startswith("http://") or source.startswith("https://"):
        filename = urlparse(source).path.split("/")[-1] or "file"
        return _strip_extension(filename)

    return _strip_extension(os.path.basename(source))


def resolve_output_filename(
    extension: str,
    action_prefix: str,
    custom_name: Optional[str] = None,
    input_source: Optional[str] = None,
) -> str:
    """Pick the output filename for one generation.

    Args:
        extension: Extension without the leading dot.
        action_prefix: Action label such as `"video"`.
        custom_name: Caller-supplied name; its extension is replaced.
        input_source: Input path/URL used to derive a name when no custom
            name is given.
    """
    if custom_name:
        return f"{_strip_extension(custom_name)}.{extension}"

    unique = uuid.uuid4().hex

    if input_source:
        return f"{extract_basename(input_source)}_{action_prefix}_{unique}.{extension}"

    return f"{action_prefix}_{unique}.{extension}"


def get_output_path(output_dir: str, filename: str) -> str:
    return os.path.join(output_dir, filename)


def is_filename(path: str) -> bool:
    """Whether `path` ends in a known media extension."""
    return os.path.splitext(path)[1].lower() in MEDIA_EXTENSIONS


def merge_config(
    config: AgentMediaConfig,
    out: Optional[str] = None,
    provider: Optional[str] = None,
) -> MergedConfig:
    """Merge CLI options over environment configuration.

    `out` is treated as a file path when it carries a media extension, and as
    a directory otherwise. CLI values always win over the environment.
    """
    if out:
        resolved = os.path.abspath(out)
        if is_filename(out):
            return MergedConfig(
                output_dir=os.path.dirname(resolved),
                provider=provider,
                output_name=os.path.basename(resolved),
            )
        return MergedConfig(output_dir=resolved, provider=provider)

    return MergedConfig(output_dir=config.output_dir, provider=provider)
