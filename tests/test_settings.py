import os
import re

from agent_media.config.settings import (
    AgentMediaConfig,
    ensure_output_dir,
    extract_basename,
    generate_output_filename,
    get_config,
    get_output_path,
    merge_config,
    resolve_output_filename,
)


def test_get_config_reads_environment(tmp_path):
    config = get_config({
        "AGENT_MEDIA_DIR": str(tmp_path / "out"),
        "RUNPOD_API_KEY": "rp",
        "FAL_API_KEY": "fal",
    })

    assert config.output_dir == os.path.abspath(str(tmp_path / "out"))
    assert config.api_keys == {"fal": "fal", "replicate": None, "runpod": "rp"}


def test_get_config_defaults_to_cwd():
    assert get_config({}).output_dir == os.path.abspath(os.getcwd())


def test_ensure_output_dir_creates_nested(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_output_dir(str(target))
    ensure_output_dir(str(target))

    assert target.is_dir()


def test_generate_output_filename_shape():
    name = generate_output_filename("mp4", prefix="clip")

    assert re.fullmatch(r"clip_\d+_[0-9a-z]{6}\.mp4", name)


def test_extract_basename():
    assert extract_basename("https://cdn.example.com/media/cat.final.png?x=1") == "cat.final"
    assert extract_basename("https://cdn.example.com/") == "file"
    assert extract_basename("/tmp/photos/dog.jpg") == "dog"
    assert extract_basename("dog") == "dog"


def test_resolve_output_filename_custom_name_wins():
    assert resolve_output_filename("mp4", "video", custom_name="clip.mov", input_source="dog.png") == "clip.mp4"
    assert resolve_output_filename("mp4", "video", custom_name="clip") == "clip.mp4"


def test_resolve_output_filename_from_input():
    name = resolve_output_filename("mp4", "video", input_source="/tmp/dog.png")

    assert re.fullmatch(r"dog_video_[0-9a-f]{32}\.mp4", name)


def test_resolve_output_filename_default():
    assert re.fullmatch(r"video_[0-9a-f]{32}\.mp4", resolve_output_filename("mp4", "video"))


def test_get_output_path():
    assert get_output_path("/out", "a.mp4") == os.path.join("/out", "a.mp4")


def test_merge_config_out_as_file(tmp_path):
    config = AgentMediaConfig(output_dir=str(tmp_path))
    out = str(tmp_path / "clips" / "final.mp4")

    merged = merge_config(config, out=out, provider="runpod")

    assert merged.output_dir == str(tmp_path / "clips")
    assert merged.output_name == "final.mp4"
    assert merged.provider == "runpod"


def test_merge_config_out_as_directory(tmp_path):
    config = AgentMediaConfig(output_dir="/elsewhere")

    merged = merge_config(config, out=str(tmp_path / "renders"))

    assert merged.output_dir == str(tmp_path / "renders")
    assert merged.output_name is None


def test_merge_config_without_out_uses_config():
    merged = merge_config(AgentMediaConfig(output_dir="/base"))

    assert merged.output_dir == "/base"
    assert merged.provider is None
