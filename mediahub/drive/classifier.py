from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class SourceType(str, Enum):
    LOCAL = "local"
    GOOGLE_DRIVE_FILE = "google_drive_file"
    GOOGLE_DRIVE_FOLDER = "google_drive_folder"


_ID = r"([a-zA-Z0-9_-]+)"

# Order matters: file shapes are checked before folder shapes, first match wins.
DRIVE_PATTERNS: tuple[tuple[re.Pattern[str], SourceType], ...] = (
    (re.compile(r"drive\.google\.com/file/d/" + _ID), SourceType.GOOGLE_DRIVE_FILE),
    (re.compile(r"drive\.google\.com/folders/" + _ID), SourceType.GOOGLE_DRIVE_FOLDER),
    (re.compile(r"drive\.google\.com/drive/folders/" + _ID), SourceType.GOOGLE_DRIVE_FOLDER),
    (re.compile(r"drive\.google\.com/uc\?(?:[^#]*&)?id=" + _ID), SourceType.GOOGLE_DRIVE_FILE),
)

# Share-link shapes the server accepts before it probes Drive.
_SHARE_LINK = re.compile(r"^https://drive\.google\.com/(file/d/|folders/|drive/folders/|open\?id=)")
_FOLDER_PATH = re.compile(r"/(folders/|drive/folders/)")

# Broader id extraction used server side (also handles ?id= and /d/{id}).
_ID_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"/file/d/" + _ID),
    re.compile(r"/folders/" + _ID),
    re.compile(r"/drive/folders/" + _ID),
    re.compile(r"[?&]id=" + _ID),
    re.compile(r"/d/" + _ID),
)


@dataclass(frozen=True)
class MediaReference:
    """
    Parsed form of a media source string.

    `object_id` is set for Drive sources only. `source_url` is the string the
    reference was built from; for local sources it is the literal asset path.
    """
    source_type: SourceType
    object_id: str | None
    source_url: str

    def __post_init__(self) -> None:
        if (self.object_id is not None) != self.is_drive:
            raise ValueError("object_id must be set exactly for Drive sources")

    @property
    def is_drive(self) -> bool:
        return self.source_type is not SourceType.LOCAL

    @property
    def is_folder(self) -> bool:
        return self.source_type is SourceType.GOOGLE_DRIVE_FOLDER

    @classmethod
    def local(cls, path: str) -> "MediaReference":
        return cls(source_type=SourceType.LOCAL, object_id=None, source_url=path)


def classify(url: str | None) -> MediaReference:
    # Anything unrecognised is a local path; this never raises.
    text = url if isinstance(url, str) else ""
    for pattern, source_type in DRIVE_PATTERNS:
        m = pattern.search(text)
        if m:
            return MediaReference(source_type=source_type, object_id=m.group(1), source_url=text)
    return MediaReference.local(text)


def is_drive_link(url: str) -> bool:
    return bool(_SHARE_LINK.match(url or ""))


def is_folder_link(url: str) -> bool:
    return bool(_FOLDER_PATH.search(url or ""))


def extract_object_id(url: str) -> str | None:
    for pattern in _ID_PATTERNS:
        m = pattern.search(url or "")
        if m:
            return m.group(1)
    return None
