"""
Command-line adapter for agent-media.

Architectural role:
- Parses arguments and resolves configuration (output dir, filename, API key).
- Builds a `GenerationRequest` and runs the async video pipeline.
- Downloads the finished artifact and reports the outcome as JSON.

Request lifecycle (`agent-media video ...`):
1. Parse argv.
2. Load env configuration and merge `--out` / `--provider` over it.
3. Resolve credential and output path.
4. Run `agent_media.video.service.generate_video` under `asyncio.run`.
5. Download the artifact and print a JSON summary to stdout.

Error handling strategy:
- This is the only layer that catches. Any failure is printed as a JSON
  object on stderr and the process exits with status 1.
- Tracebacks are logged at debug level (`--verbose`).

Side effects:
- Creates the output directory when missing.
- Writes the downloaded artifact to disk.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import asyncio
import json
import logging
import sys

from agent_media import __version__
from agent_media.config.provider_config import (
    DEFAULT_VIDEO_PROVIDER,
    VIDEO_PROVIDERS,
    get_video_provider,
    resolve_api_key,
)
from agent_media.config.settings import (
    ensure_output_dir,
    get_config,
    get_output_path,
    merge_config,
    resolve_output_filename,
)
from agent_media.video.download import download_artifact
from agent_media.video.inputs import is_remote_url
from agent_media.video.models import GenerationRequest
from agent_media.video.runpod_client import DEFAULT_MAX_ATTEMPTS, DEFAULT_POLL_INTERVAL_SECONDS
from agent_media.video.service import generate_video

logger = logging.getLogger(__name__)


# =========================================================
# ARGUMENTS
# =========================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-media",
        description="Generate media through remote generation providers",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    video = subparsers.add_parser("video", help="Generate a video from a prompt and optional start image")
    video.add_argument("prompt", help="Text prompt")
    video.add_argument("--image", default=None, help="Start image: local path or http(s) URL")
    video.add_argument("--duration", type=float, default=5, help="Length in seconds (snapped to 5/10/15)")
    video.add_argument("--resolution", default="720p", help="720p | 1080p")
    video.add_argument("--audio", action="store_true", help="Ask the provider to generate audio")
    video.add_argument("--out", default=None, help="Output directory or file path")
    video.add_argument("--name", default=None, help="Output filename (extension is replaced with .mp4)")
    video.add_argument(
        "--provider",
        default=None,
        choices=sorted(VIDEO_PROVIDERS),
        help=f"Provider (default: {DEFAULT_VIDEO_PROVIDER})",
    )
    video.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS, help="Status checks before timing out")
    video.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        help="Seconds between status checks",
    )

    return parser


# =========================================================
# COMMANDS
# =========================================================

def run_video(args) -> dict:
    """Execute the `video` command and return the JSON summary."""
    config = get_config()
    merged = merge_config(config, out=args.out, provider=args.provider)
    provider = merged.provider or DEFAULT_VIDEO_PROVIDER

    get_video_provider(provider)
    api_key = resolve_api_key(provider, config.api_keys.get(provider))

    ensure_output_dir(merged.output_dir)
    filename = resolve_output_filename(
        "mp4",
        "video",
        custom_name=args.name or merged.output_name,
        input_source=args.image,
    )
    output_path = get_output_path(merged.output_dir, filename)

    request = GenerationRequest(
        prompt=args.prompt,
        input_image=args.image,
        input_is_url=bool(args.image) and is_remote_url(args.image),
        duration=args.duration,
        resolution=args.resolution,
        generate_audio=args.audio,
    )

    result = asyncio.run(
        generate_video(
            request,
            api_key=api_key,
            provider=provider,
            max_attempts=args.max_attempts,
            poll_interval=args.poll_interval,
        )
    )

    path = download_artifact(result.url, output_path)

    return {
        "success": True,
        "provider": provider,
        "path": path,
        **result.to_dict(),
    }


COMMANDS = {
    "video": run_video,
}


# =========================================================
# MAIN
# =========================================================

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        summary = COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print(json.dumps({"success": False, "error": "Operation cancelled by user."}), file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(json.dumps({"success": False, "error": str(e)}), file=sys.stderr)
        return 1

    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
