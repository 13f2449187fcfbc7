from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from mediahub.drive.candidates import resolve_candidates
from mediahub.drive.classifier import MediaReference, classify
from mediahub.drive.media_types import MediaKind, default_mime_type, kind_from_filename, kind_from_mime_type
from mediahub.services.http_client import MediaHttpClient
from mediahub.viewer.collection import MediaCollection, MediaFile
from mediahub.viewer.preload import PreloadCache


log = logging.getLogger(__name__)

MEDIA_URL_PATH = "/v1/gdrive/media-url"

RequestedType = Literal["image", "video", "auto"]


@dataclass
class LoadOutcome:
    collection: MediaCollection | None = None
    error: str | None = None
    message: str | None = None
    debug: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.collection is not None


def _file_kind(item: dict[str, Any]) -> MediaKind:
    t = item.get("type")
    if t in ("image", "video"):
        return t
    return kind_from_mime_type(item.get("mimeType") or "") or "image"


def local_collection(src: str, *, name: str = "", media_type: RequestedType = "auto") -> MediaCollection:
    if media_type in ("image", "video"):
        kind: MediaKind = media_type  # type: ignore[assignment]
    else:
        kind = kind_from_filename(src) or "image"

    ref = MediaReference.local(src)
    item = MediaFile(
        id="local",
        display_url_candidates=tuple(resolve_candidates(ref, kind)),
        media_kind=kind,
        name=name,
        mime_type=default_mime_type(kind),
    )
    return MediaCollection("single", [item])


class MediaLoader:
    """
    Turns a media source string into a MediaCollection ready for display.

    Drive sources are resolved through the service's media-url endpoint;
    failures come back as LoadOutcome.error, never as exceptions.
    """

    def __init__(self, http: MediaHttpClient, *, preload: PreloadCache | None = None, path: str = MEDIA_URL_PATH):
        self._http = http
        self._preload = preload
        self._path = path

    async def load(self, src: str, *, name: str = "", media_type: RequestedType = "auto") -> LoadOutcome:
        ref = classify(src)
        if not ref.is_drive:
            return LoadOutcome(collection=local_collection(src, name=name, media_type=media_type))

        body: dict[str, Any] = {"url": src, "fileId": ref.object_id}
        if media_type != "auto":
            body["mediaType"] = media_type

        result = await self._http.post_json(url=self._path, json_body=body)
        if not result.ok:
            message = result.detail.get("detail") or result.detail.get("message") or result.error_message
            log.warning("media-url failed for %s: %s", ref.object_id, message)
            return LoadOutcome(error=str(message or "Failed to fetch Google Drive media"), debug=result.detail)

        data = result.detail
        kind = "folder" if data.get("type") == "folder" else "single"

        items: list[MediaFile] = []
        for raw in data.get("files") or []:
            if not isinstance(raw, dict) or not raw.get("url"):
                continue
            media_kind = _file_kind(raw)
            candidates = resolve_candidates(classify(raw["url"]), media_kind)
            items.append(MediaFile(
                id=str(raw.get("id") or len(items)),
                display_url_candidates=tuple(candidates),
                media_kind=media_kind,
                name=raw.get("name") or "",
                mime_type=raw.get("mimeType"),
            ))

        collection = MediaCollection(kind, items)
        if self._preload is not None:
            for item in items:
                if item.media_kind == "image":
                    self._preload.preload(item.display_url_candidates[0])

        return LoadOutcome(collection=collection, message=data.get("message"), debug=data)
