from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from mediahub.drive.media_types import MediaKind
from mediahub.viewer.fallback import FallbackTracker, RenderState


CollectionKind = Literal["single", "folder"]


@dataclass(frozen=True)
class MediaFile:
    id: str
    display_url_candidates: tuple[str, ...]
    media_kind: MediaKind
    name: str = ""
    mime_type: str | None = None

    def __post_init__(self) -> None:
        if not self.display_url_candidates:
            raise ValueError(f"media file {self.id!r} has no display url candidates")


class MediaCollection:
    """
    A single file or a folder gallery, with a bounds-checked cursor.

    Navigation never wraps and never raises; moving to another item resets
    the render state for that item to its first candidate.
    """

    def __init__(self, kind: CollectionKind, items: Sequence[MediaFile]):
        self.kind = kind
        self.items: tuple[MediaFile, ...] = tuple(items)
        self.current_index = 0
        self.tracker: FallbackTracker | None = (
            FallbackTracker(self.items[0].display_url_candidates) if self.items else None
        )

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def current(self) -> MediaFile | None:
        return self.items[self.current_index] if self.items else None

    @property
    def state(self) -> RenderState | None:
        return self.tracker.state if self.tracker else None

    @property
    def current_url(self) -> str | None:
        return self.tracker.current_url if self.tracker else None

    @property
    def has_next(self) -> bool:
        return self.current_index < len(self.items) - 1

    @property
    def has_prev(self) -> bool:
        return bool(self.items) and self.current_index > 0

    def jump(self, index: int) -> bool:
        if not self.items or not 0 <= index < len(self.items):
            return False
        if index != self.current_index:
            self.current_index = index
            self.tracker.reset(self.items[index].display_url_candidates)
        return True

    def next(self) -> bool:
        return self.has_next and self.jump(self.current_index + 1)

    def prev(self) -> bool:
        return self.has_prev and self.jump(self.current_index - 1)

    # Render events for the current item
    def on_load(self) -> RenderState | None:
        return self.tracker.on_load() if self.tracker else None

    def on_error(self, detail: str | None = None) -> RenderState | None:
        return self.tracker.on_error(detail) if self.tracker else None
