from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Literal

import httpx


HttpMethod = Literal["GET", "HEAD", "POST"]


@dataclass(frozen=True)
class HttpResult:
    ok: bool
    status_code: int | None
    detail: dict[str, Any]

    error_code: str | None = None
    error_message: str | None = None
    retryable: bool = False

    elapsed_ms: int | None = None
    final_url: str | None = None


def _is_json_response(resp: httpx.Response) -> bool:
    ct = (resp.headers.get("content-type") or "").lower()
    return "application/json" in ct or ct.endswith("+json")


def _cap_text(s: str, *, max_chars: int) -> str:
    if len(s) <= max_chars:
        return s
    return s[:max_chars] + f"...(truncated, {len(s)} chars)"


def _elapsed_ms(resp: httpx.Response) -> int | None:
    # .elapsed is only available once the response has been closed
    try:
        return int(resp.elapsed.total_seconds() * 1000)
    except RuntimeError:
        return None


class MediaHttpClient:
    """
    Shared HTTP client wrapper for Drive probes and service calls.

    - Uses one AsyncClient instance (connection pooling).
    - Does NOT retry; callers decide whether a failure is worth another try.
    - Returns structured result with retryable classification, never raises
      for transport problems.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 20.0,
        max_response_body_chars: int = 20_000,
        default_headers: Mapping[str, str] | None = None,
        base_url: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout = httpx.Timeout(timeout_seconds)
        self._max_body = max_response_body_chars
        self._default_headers = dict(default_headers or {})
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            base_url=base_url,
            transport=transport,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "MediaHttpClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def request_json(
        self,
        *,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> HttpResult:
        # Merge headers (caller wins)
        h = dict(self._default_headers)
        if headers:
            h.update(dict(headers))

        try:
            resp = await self._client.request(
                method=method,
                url=url,
                headers=h,
                params=params,
                json=json_body,
            )
        except httpx.TimeoutException as e:
            return HttpResult(
                ok=False,
                status_code=None,
                detail={"error": "timeout"},
                error_code="TIMEOUT",
                error_message=str(e) or "timeout",
                retryable=True,
            )
        except httpx.RequestError as e:
            # DNS errors, connection refused, TLS, etc.
            return HttpResult(
                ok=False,
                status_code=None,
                detail={"error": "request_error"},
                error_code="REQUEST_ERROR",
                error_message=str(e) or e.__class__.__name__,
                retryable=True,
            )

        detail: dict[str, Any]
        malformed = False
        if _is_json_response(resp):
            try:
                parsed = resp.json()
                detail = parsed if isinstance(parsed, dict) else {"data": parsed}
            except ValueError:
                detail = {"raw": _cap_text(resp.text, max_chars=self._max_body)}
                malformed = True
        else:
            detail = {
                "raw": _cap_text(resp.text, max_chars=self._max_body),
                "content_type": resp.headers.get("content-type"),
            }

        final_url = str(resp.url)
        elapsed_ms = _elapsed_ms(resp)

        if 200 <= resp.status_code < 300 and not malformed:
            return HttpResult(
                ok=True,
                status_code=resp.status_code,
                detail=detail,
                retryable=False,
                elapsed_ms=elapsed_ms,
                final_url=final_url,
            )

        if malformed:
            return HttpResult(
                ok=False,
                status_code=resp.status_code,
                detail=detail,
                error_code="MALFORMED_RESPONSE",
                error_message="Response body is not valid JSON",
                retryable=True,
                elapsed_ms=elapsed_ms,
                final_url=final_url,
            )

        retryable = resp.status_code in (408, 429, 500, 502, 503, 504)

        return HttpResult(
            ok=False,
            status_code=resp.status_code,
            detail=detail,
            error_code=f"HTTP_{resp.status_code}",
            error_message=f"HTTP {resp.status_code}",
            retryable=retryable,
            elapsed_ms=elapsed_ms,
            final_url=final_url,
        )

    # helpers
    async def post_json(self, *, url: str, headers: Mapping[str, str] | None = None, json_body: dict[str, Any] | None = None) -> HttpResult:
        return await self.request_json(method="POST", url=url, headers=headers, json_body=json_body)

    async def head(self, *, url: str, headers: Mapping[str, str] | None = None) -> HttpResult:
        return await self.request_json(method="HEAD", url=url, headers=headers)

    async def get(self, *, url: str, headers: Mapping[str, str] | None = None) -> HttpResult:
        return await self.request_json(method="GET", url=url, headers=headers)
