from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, Union


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    candidate_index: int


@dataclass(frozen=True)
class Loaded:
    candidate_index: int


@dataclass(frozen=True)
class Failed:
    attempted: int
    diagnostics: tuple[str, ...] = field(default_factory=tuple)


RenderState = Union[Loading, Loaded, Failed]


class FallbackTracker:
    """
    Per-file render state: try each candidate URL in order until one loads.

    Loading(i) --load--> Loaded(i)
    Loading(i) --error--> Loading(i+1), or Failed once candidates run out.
    Loaded and Failed are terminal until reset().
    """

    def __init__(self, candidates: Sequence[str]):
        self._candidates: tuple[str, ...] = ()
        self._diagnostics: list[str] = []
        self.state: RenderState = Loading(0)
        self.reset(candidates)

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    @property
    def current_url(self) -> str | None:
        if isinstance(self.state, (Loading, Loaded)):
            return self._candidates[self.state.candidate_index]
        return None

    @property
    def is_terminal(self) -> bool:
        return not isinstance(self.state, Loading)

    def reset(self, candidates: Sequence[str] | None = None) -> RenderState:
        if candidates is not None:
            if not candidates:
                raise ValueError("at least one candidate URL is required")
            self._candidates = tuple(candidates)
        self._diagnostics = []
        self.state = Loading(0)
        return self.state

    def on_load(self) -> RenderState:
        if isinstance(self.state, Loading):
            self.state = Loaded(self.state.candidate_index)
        return self.state

    def on_error(self, detail: str | None = None) -> RenderState:
        if not isinstance(self.state, Loading):
            return self.state

        i = self.state.candidate_index
        self._diagnostics.append(f"{self._candidates[i]}: {detail or 'load failed'}")

        if i + 1 < len(self._candidates):
            self.state = Loading(i + 1)
        else:
            log.warning("all %d candidate urls failed", len(self._candidates))
            self.state = Failed(attempted=len(self._candidates), diagnostics=tuple(self._diagnostics))
        return self.state
