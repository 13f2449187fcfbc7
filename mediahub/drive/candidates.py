from __future__ import annotations

from mediahub.drive.classifier import MediaReference
from mediahub.drive.media_types import MediaKind

DRIVE_BASE = "https://drive.google.com"
DOCS_BASE = "https://docs.google.com"
CONTENT_HOST = "https://lh3.googleusercontent.com"


def image_candidates(object_id: str, original_url: str) -> list[str]:
    # The content host serves bitmaps without the auth redirect, so it leads.
    return [
        f"{CONTENT_HOST}/d/{object_id}=s2000",
        f"{CONTENT_HOST}/d/{object_id}=w2000-h2000",
        original_url,
        f"{DRIVE_BASE}/uc?export=view&id={object_id}",
        f"{DRIVE_BASE}/uc?id={object_id}&export=download",
        f"{DRIVE_BASE}/thumbnail?id={object_id}&sz=w2000",
        f"{DOCS_BASE}/uc?export=view&id={object_id}",
    ]


def video_candidates(object_id: str, original_url: str) -> list[str]:
    return [
        original_url,
        f"{DRIVE_BASE}/file/d/{object_id}/preview",
        f"{DRIVE_BASE}/file/d/{object_id}/view",
        f"{DOCS_BASE}/file/d/{object_id}/preview",
    ]


def resolve_candidates(reference: MediaReference, media_kind: MediaKind) -> list[str]:
    """
    Ordered display URLs for a reference, most reliable first.

    Local sources resolve to their own path. The list is never empty and
    contains no duplicates (an original URL equal to a generated variant
    keeps its first position).
    """
    if not reference.is_drive or reference.object_id is None:
        return [reference.source_url]

    if media_kind == "video":
        urls = video_candidates(reference.object_id, reference.source_url)
    else:
        urls = image_candidates(reference.object_id, reference.source_url)

    out: list[str] = []
    for u in urls:
        if u and u not in out:
            out.append(u)
    return out


def primary_media_url(object_id: str, media_kind: MediaKind) -> str:
    if media_kind == "video":
        return f"{DRIVE_BASE}/file/d/{object_id}/preview"
    return f"{DRIVE_BASE}/uc?export=view&id={object_id}"


def folder_url(object_id: str) -> str:
    return f"{DRIVE_BASE}/drive/folders/{object_id}"


def thumbnail_probe_url(object_id: str, *, size: str = "w200") -> str:
    return f"{DRIVE_BASE}/thumbnail?id={object_id}&sz={size}"
