from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from mediahub.core.config import settings
from mediahub.drive.classifier import MediaReference, classify, is_drive_link
from mediahub.services.http_client import MediaHttpClient


log = logging.getLogger(__name__)

CHECK_ACCESS_PATH = "/v1/gdrive/check-access"


class FailureKind(str, Enum):
    INVALID_LINK = "invalid_link"
    PRIVATE_OBJECT = "private_object"
    UNSUPPORTED_FOLDER_LISTING = "unsupported_folder_listing"
    TRANSPORT_FAILURE = "transport_failure"


# User-facing wording; callers key off FailureKind, not these strings.
MESSAGES: dict[FailureKind, tuple[str, str]] = {
    FailureKind.INVALID_LINK: (
        "Invalid Google Drive URL format",
        "Please use a valid Google Drive share link (file or folder)",
    ),
    FailureKind.PRIVATE_OBJECT: (
        "File is private and cannot be accessed by the server",
        'Make sure the file is shared publicly with "Anyone with the link" permission',
    ),
    FailureKind.UNSUPPORTED_FOLDER_LISTING: (
        "Folder content listing is not available with current setup",
        "Please copy individual file share links instead of the folder link",
    ),
    FailureKind.TRANSPORT_FAILURE: (
        "Unable to verify file accessibility",
        "Please check your internet connection and try again",
    ),
}

FOLDER_WARNING = "Folder detected - individual file links recommended for better compatibility"


@dataclass(frozen=True)
class AccessibilityResult:
    accessible: bool
    is_folder: bool = False
    error_message: str | None = None
    suggestion_message: str | None = None
    warning_message: str | None = None
    failure: FailureKind | None = None

    @property
    def retryable(self) -> bool:
        return self.failure is FailureKind.TRANSPORT_FAILURE

    @classmethod
    def ok(cls, *, is_folder: bool) -> "AccessibilityResult":
        return cls(accessible=True, is_folder=is_folder, warning_message=FOLDER_WARNING if is_folder else None)

    @classmethod
    def failed(cls, failure: FailureKind, *, is_folder: bool = False) -> "AccessibilityResult":
        error, suggestion = MESSAGES[failure]
        return cls(
            accessible=False,
            is_folder=is_folder,
            error_message=error,
            suggestion_message=suggestion,
            failure=failure,
        )


class Validator(Protocol):
    async def validate(self, reference: MediaReference) -> AccessibilityResult:
        ...


class AccessibilityValidator:
    """
    Asks the service whether a Drive reference is publicly viewable.

    Local references are accessible by definition and never leave the
    process. Every failure is returned as a result, nothing is raised.
    """

    def __init__(self, http: MediaHttpClient, *, timeout_seconds: float | None = None, path: str = CHECK_ACCESS_PATH):
        self._http = http
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.validation_timeout_seconds
        self._path = path

    async def validate(self, reference: MediaReference) -> AccessibilityResult:
        if not reference.is_drive:
            return AccessibilityResult(accessible=True)

        if not is_drive_link(reference.source_url):
            return AccessibilityResult.failed(FailureKind.INVALID_LINK)

        try:
            result = await asyncio.wait_for(
                self._http.post_json(url=self._path, json_body={"url": reference.source_url}),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            log.warning("check-access timed out after %.1fs", self._timeout)
            return AccessibilityResult.failed(FailureKind.TRANSPORT_FAILURE, is_folder=reference.is_folder)

        body = result.detail
        if not result.ok or not isinstance(body.get("accessible"), bool):
            log.warning("check-access failed: %s %s", result.error_code, result.error_message)
            return AccessibilityResult.failed(FailureKind.TRANSPORT_FAILURE, is_folder=reference.is_folder)

        is_folder = bool(body.get("isFolder", reference.is_folder))
        if body["accessible"]:
            return AccessibilityResult.ok(is_folder=is_folder)
        if is_folder:
            return AccessibilityResult.failed(FailureKind.UNSUPPORTED_FOLDER_LISTING, is_folder=True)
        return AccessibilityResult.failed(FailureKind.PRIVATE_OBJECT)


@dataclass(frozen=True)
class ValidationState:
    value: str = ""
    validating: bool = False
    result: AccessibilityResult | None = None

    @property
    def media_type_selectable(self) -> bool:
        return bool(self.result and self.result.accessible and not self.result.is_folder)

    @property
    def folder_warning(self) -> str | None:
        if self.result and self.result.accessible and self.result.is_folder:
            return self.result.warning_message
        return None


class DebouncedValidation:
    """
    Drives an AccessibilityValidator from interactive input.

    Validation starts once the input has been quiet for `quiet_period`
    seconds. A result is applied only if no newer input arrived while it
    was in flight; stale results are dropped.
    """

    def __init__(
        self,
        validator: Validator,
        *,
        quiet_period: float | None = None,
        on_change: Callable[[ValidationState], None] | None = None,
    ):
        self._validator = validator
        self._quiet = quiet_period if quiet_period is not None else settings.validation_debounce_ms / 1000
        self._on_change = on_change
        self._generation = 0
        self._timer: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self.state = ValidationState()

    def _set(self, state: ValidationState) -> None:
        self.state = state
        if self._on_change is not None:
            self._on_change(state)

    def set_input(self, value: str) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if not value or not value.strip():
            self._set(ValidationState(value=value or ""))
            return

        self._set(ValidationState(value=value, validating=True, result=self.state.result))
        task = asyncio.get_running_loop().create_task(self._run(value, self._generation))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, value: str, generation: int) -> None:
        await asyncio.sleep(self._quiet)

        # Past the quiet period: from here on the request is never cancelled,
        # only its result may be discarded.
        if self._timer is asyncio.current_task():
            self._timer = None

        reference = classify(value)
        try:
            result = await self._validator.validate(reference)
        except Exception:
            log.exception("validation of %r raised", value)
            result = AccessibilityResult.failed(FailureKind.TRANSPORT_FAILURE, is_folder=reference.is_folder)

        if generation != self._generation:
            log.debug("discarding stale validation for %r", value)
            return
        self._set(ValidationState(value=value, validating=False, result=result))

    async def wait(self) -> None:
        """Wait for every scheduled or in-flight validation to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
