from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

from mediahub.drive.candidates import folder_url, thumbnail_probe_url, DRIVE_BASE
from mediahub.services.http_client import HttpResult, MediaHttpClient


log = logging.getLogger(__name__)

# Folder ids are longer than file ids; only those get the folder page probe.
FOLDER_ID_MIN_LEN = 21

# A redirect ending on the sign-in host means the object is not public.
_SIGN_IN_HOSTS = {"accounts.google.com"}


@dataclass(frozen=True)
class AccessCheck:
    object_id: str
    accessible: bool
    is_folder: bool
    probe: str | None = None


def _landed_on_sign_in(result: HttpResult) -> bool:
    if not result.final_url:
        return False
    return (urlparse(result.final_url).hostname or "") in _SIGN_IN_HOSTS


def _reachable(result: HttpResult, *, allow_redirect_status: bool) -> bool:
    if result.status_code is None or _landed_on_sign_in(result):
        return False
    if result.ok:
        return True
    return allow_redirect_status and result.status_code == 302


class DriveAccessChecker:
    """
    Server-side public-visibility check for a Drive object.

    Probes, in order: the export-view link, the thumbnail service and, for
    folder-length ids, the folder page. The first reachable probe wins.
    """

    def __init__(self, http: MediaHttpClient, *, user_agent: str):
        self._http = http
        self._headers = {"User-Agent": user_agent}

    async def _probe(self, name: str, url: str, *, allow_redirect_status: bool) -> bool:
        result = await self._http.head(url=url, headers=self._headers)
        if result.status_code is None:
            log.warning("drive probe %s failed: %s %s", name, result.error_code, result.error_message)
            return False
        log.debug("drive probe %s -> %s", name, result.status_code)
        return _reachable(result, allow_redirect_status=allow_redirect_status)

    async def is_public(self, object_id: str) -> str | None:
        """Return the name of the first successful probe, or None."""
        if await self._probe("export_view", f"{DRIVE_BASE}/uc?export=view&id={object_id}", allow_redirect_status=True):
            return "export_view"

        if await self._probe("thumbnail", thumbnail_probe_url(object_id), allow_redirect_status=False):
            return "thumbnail"

        if len(object_id) >= FOLDER_ID_MIN_LEN:
            if await self._probe("folder_page", folder_url(object_id), allow_redirect_status=True):
                return "folder_page"

        return None

    async def check(self, object_id: str, *, is_folder: bool) -> AccessCheck:
        probe = await self.is_public(object_id)
        if probe is None:
            log.info("drive object %s appears private or unreachable", object_id)
        return AccessCheck(object_id=object_id, accessible=probe is not None, is_folder=is_folder, probe=probe)
