from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from mediahub.core.config import settings
from mediahub.drive.classifier import extract_object_id, is_drive_link, is_folder_link
from mediahub.schemas.gdrive import CheckAccessOut, CheckAccessRequest, MediaUrlOut, MediaUrlRequest
from mediahub.services.drive_access import DriveAccessChecker
from mediahub.services.http_client import MediaHttpClient
from mediahub.services.media_resolution import resolve_folder, resolve_single
from mediahub.services.rate_limit import rate_limit_or_429


log = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(rate_limit_or_429)])

# Create once (reuse connection pool)
_http = MediaHttpClient(timeout_seconds=settings.drive_probe_timeout_seconds)
_checker = DriveAccessChecker(_http, user_agent=settings.drive_user_agent)


def get_access_checker() -> DriveAccessChecker:
    return _checker


async def close_http() -> None:
    await _http.aclose()


@router.post("/gdrive/check-access", response_model=CheckAccessOut)
async def check_access(
    payload: CheckAccessRequest,
    checker: DriveAccessChecker = Depends(get_access_checker),
):
    url = (payload.url or "").strip()
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")

    if not is_drive_link(url):
        return JSONResponse(status_code=400, content={"accessible": False, "message": "Invalid Google Drive URL format"})

    object_id = extract_object_id(url)
    if not object_id:
        return JSONResponse(status_code=400, content={"accessible": False, "message": "Could not extract file ID from URL"})

    result = await checker.check(object_id, is_folder=is_folder_link(url))
    log.info("check-access %s accessible=%s folder=%s probe=%s", object_id, result.accessible, result.is_folder, result.probe)

    return CheckAccessOut(accessible=result.accessible, is_folder=result.is_folder, file_id=object_id)


@router.post("/gdrive/media-url", response_model=MediaUrlOut, response_model_exclude_none=True)
async def media_url(payload: MediaUrlRequest) -> MediaUrlOut:
    url = (payload.url or "").strip() or None
    object_id = (payload.file_id or "").strip() or None

    if not object_id and not url:
        raise HTTPException(status_code=400, detail="File ID or URL is required")

    if not object_id and url:
        object_id = extract_object_id(url)
    if not object_id:
        raise HTTPException(status_code=400, detail="Could not extract file ID")

    if url and is_folder_link(url):
        return resolve_folder(object_id=object_id)

    requested = payload.media_type if payload.media_type != "auto" else None
    return resolve_single(object_id=object_id, url=url, requested_type=requested)
