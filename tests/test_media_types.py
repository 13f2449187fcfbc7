import pytest

from mediahub.drive.media_types import (
    default_mime_type,
    guess_kind_from_url,
    is_supported_mime_type,
    kind_from_filename,
    kind_from_mime_type,
)


@pytest.mark.parametrize("name,kind", [
    ("photo.JPG", "image"),
    ("/img/banner.webp", "image"),
    ("clip.mp4", "video"),
    ("/media/intro.mov?v=2", "video"),
    ("archive.zip", None),
    ("no_extension", None),
    ("/dir.with.dots/file", None),
    ("", None),
])
def test_kind_from_filename(name, kind):
    assert kind_from_filename(name) == kind


def test_kind_from_mime_type():
    assert kind_from_mime_type("image/png") == "image"
    assert kind_from_mime_type("VIDEO/MP4") == "video"
    assert kind_from_mime_type("application/pdf") is None


def test_supported_mime_types():
    assert is_supported_mime_type("image/HEIC")
    assert is_supported_mime_type("video/quicktime")
    assert not is_supported_mime_type("application/pdf")


def test_guess_kind_from_url():
    assert guess_kind_from_url("https://drive.google.com/file/d/X/view?name=holiday.MP4") == "video"
    assert guess_kind_from_url("https://drive.google.com/file/d/X/view") == "image"


def test_default_mime_type():
    assert default_mime_type("image") == "image/jpeg"
    assert default_mime_type("video") == "video/mp4"
