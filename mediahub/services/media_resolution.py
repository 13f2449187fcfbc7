from __future__ import annotations

import logging

from mediahub.drive.candidates import folder_url, primary_media_url
from mediahub.drive.media_types import MediaKind, default_mime_type, guess_kind_from_url
from mediahub.schemas.gdrive import MediaFileOut, MediaUrlOut


log = logging.getLogger(__name__)

FOLDER_LISTING_MESSAGE = (
    "Folder content listing is not supported. For best results, please copy individual file links."
)
FOLDER_LISTING_INSTRUCTION = (
    "Open the folder, right-click each file, choose Get link and paste those links individually"
)


def pick_media_kind(*, requested: str | None, url: str | None) -> MediaKind:
    if requested in ("image", "video"):
        return requested  # type: ignore[return-value]
    if url:
        return guess_kind_from_url(url)
    return "image"


def _display_name(kind: MediaKind, suffix: str) -> str:
    return f"{'Video' if kind == 'video' else 'Image'} {suffix}"


def resolve_single(*, object_id: str, url: str | None, requested_type: str | None) -> MediaUrlOut:
    kind = pick_media_kind(requested=requested_type, url=url)
    media_url = primary_media_url(object_id, kind)
    log.info("resolved drive file %s as %s -> %s", object_id, kind, media_url)

    f = MediaFileOut(
        id=object_id,
        name=_display_name(kind, object_id),
        url=media_url,
        type=kind,
        mime_type=default_mime_type(kind),
    )
    return MediaUrlOut(type="single", files=[f], count=1)


def resolve_folder(*, object_id: str) -> MediaUrlOut:
    # Listing the files of a shared folder is not available; always answer
    # with guidance instead of a partial or scraped listing.
    log.info("drive folder %s requested; listing unsupported", object_id)
    return MediaUrlOut(
        type="folder",
        files=[],
        count=0,
        is_folder=True,
        message=FOLDER_LISTING_MESSAGE,
        instruction=FOLDER_LISTING_INSTRUCTION,
        folder_url=folder_url(object_id),
    )
