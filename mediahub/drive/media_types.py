from __future__ import annotations

from typing import Literal

MediaKind = Literal["image", "video"]

SUPPORTED_MIME_TYPES = frozenset({
    # images
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp",
    "image/svg+xml", "image/bmp", "image/tiff", "image/heic", "image/heif",
    "image/avif", "image/ico", "image/x-icon",
    # videos
    "video/mp4", "video/webm", "video/ogg", "video/avi", "video/mov",
    "video/wmv", "video/flv", "video/mkv", "video/m4v", "video/3gp",
    "video/quicktime", "video/x-msvideo", "video/x-ms-wmv",
})

IMAGE_EXTENSIONS = frozenset({
    "jpg", "jpeg", "png", "gif", "webp", "bmp", "tiff", "tif", "svg",
    "heic", "heif", "avif", "ico", "jfif", "pjpeg", "pjp",
})

VIDEO_EXTENSIONS = frozenset({
    "mp4", "webm", "ogg", "ogv", "avi", "mov", "wmv", "flv", "mkv",
    "m4v", "3gp", "qt", "asf", "rm", "rmvb",
})

_DEFAULT_MIME: dict[str, str] = {"image": "image/jpeg", "video": "video/mp4"}

# Substrings in a Drive link that hint at a video when no type was given.
_VIDEO_URL_HINTS = ("video", "mp4", "mov")


def is_supported_mime_type(mime_type: str) -> bool:
    return (mime_type or "").lower() in SUPPORTED_MIME_TYPES


def kind_from_mime_type(mime_type: str) -> MediaKind | None:
    mt = (mime_type or "").lower()
    if mt.startswith("image/"):
        return "image"
    if mt.startswith("video/"):
        return "video"
    return None


def kind_from_filename(filename: str) -> MediaKind | None:
    # Query strings and fragments are not part of the extension.
    base = (filename or "").split("?", 1)[0].split("#", 1)[0]
    if "." not in base.rsplit("/", 1)[-1]:
        return None
    ext = base.rsplit(".", 1)[-1].lower()
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in VIDEO_EXTENSIONS:
        return "video"
    return None


def guess_kind_from_url(url: str) -> MediaKind:
    u = (url or "").lower()
    if any(hint in u for hint in _VIDEO_URL_HINTS):
        return "video"
    return "image"


def default_mime_type(kind: MediaKind) -> str:
    return _DEFAULT_MIME[kind]
