import base64

import pytest

from agent_media.video.inputs import guess_image_mime, is_remote_url, prepare_image_input


def test_local_png_is_inlined_as_data_uri(tmp_path):
    image = tmp_path / "photo.png"
    image.write_bytes(b"\x89PNG\r\n\x1a\nabc")

    value = prepare_image_input(str(image), is_url=False)

    expected = base64.b64encode(b"\x89PNG\r\n\x1a\nabc").decode()
    assert value == f"data:image/png;base64,{expected}"


@pytest.mark.parametrize(
    "name, mime",
    [("a.png", "image/png"), ("a.PNG", "image/png"), ("a.webp", "image/webp"),
     ("a.jpg", "image/jpeg"), ("a.gif", "image/jpeg"), ("noext", "image/jpeg")],
)
def test_mime_by_extension(name, mime):
    assert guess_image_mime(name) == mime


def test_remote_url_passthrough_is_unchanged():
    url = "https://example.com/some%20image.PNG?x=1&y=2"

    assert prepare_image_input(url, is_url=True) == url


def test_url_flag_skips_filesystem(tmp_path):
    missing = str(tmp_path / "not-there.png")

    assert prepare_image_input(missing, is_url=True) == missing


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        prepare_image_input(str(tmp_path / "missing.jpg"), is_url=False)


def test_is_remote_url():
    assert is_remote_url("https://x/y.png")
    assert is_remote_url("http://x/y.png")
    assert not is_remote_url("./y.png")
    assert not is_remote_url("file:///tmp/y.png")
