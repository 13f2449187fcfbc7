from __future__ import annotations

import asyncio
import logging

from mediahub.services.http_client import HttpResult, MediaHttpClient


log = logging.getLogger(__name__)


class PreloadCache:
    """
    URL -> preload task, so repeated requests for the same media share one fetch.

    Create one per application and hand it to whatever needs it. Nothing is
    persisted; clear() drops every entry, including failed ones.
    """

    def __init__(self, http: MediaHttpClient):
        self._http = http
        self._entries: dict[str, asyncio.Task[HttpResult]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: str) -> bool:
        return url in self._entries

    def preload(self, url: str) -> asyncio.Task[HttpResult]:
        task = self._entries.get(url)
        if task is None:
            log.debug("preloading %s", url)
            task = asyncio.get_running_loop().create_task(self._http.get(url=url))
            self._entries[url] = task
        return task

    async def is_loadable(self, url: str) -> bool:
        result = await self.preload(url)
        return result.ok

    def forget(self, url: str) -> None:
        task = self._entries.pop(url, None)
        if task is not None and not task.done():
            task.cancel()

    def clear(self) -> None:
        for url in list(self._entries):
            self.forget(url)
