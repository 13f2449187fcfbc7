from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import httpx

from mediahub.core.config import settings
from mediahub.drive.candidates import resolve_candidates
from mediahub.drive.classifier import classify
from mediahub.services.http_client import MediaHttpClient
from mediahub.viewer.validation import AccessibilityValidator, FailureKind


DEFAULT_BASE_URL = settings.public_base_url

DEFAULT_TIMEOUT_SECONDS = settings.validation_timeout_seconds


async def run(args: argparse.Namespace, *, transport: httpx.AsyncBaseTransport | None = None) -> tuple[int, dict[str, Any]]:
    ref = classify(args.url)
    out: dict[str, Any] = {
        "source_type": ref.source_type.value,
        "object_id": ref.object_id,
        "candidates": resolve_candidates(ref, args.type),
    }

    if args.offline or not ref.is_drive:
        return 0, out

    async with MediaHttpClient(base_url=args.base_url.rstrip("/"), timeout_seconds=args.timeout, transport=transport) as http:
        validator = AccessibilityValidator(http, timeout_seconds=args.timeout)
        result = await validator.validate(ref)

    out["accessible"] = result.accessible
    out["is_folder"] = result.is_folder
    for key in ("error_message", "suggestion_message", "warning_message"):
        value = getattr(result, key)
        if value:
            out[key] = value

    if result.accessible:
        return 0, out
    if result.failure in (FailureKind.TRANSPORT_FAILURE, FailureKind.INVALID_LINK):
        return 2, out
    return 1, out


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Classify a media link, list its display candidates and check Drive access.")
    p.add_argument("url", help="Google Drive share link or local asset path")
    p.add_argument("--type", choices=["image", "video"], default="image", help="media kind used for candidate ordering")
    p.add_argument("--base-url", default=DEFAULT_BASE_URL, help="running mediahub service")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECONDS)
    p.add_argument("--offline", action="store_true", help="skip the accessibility check")
    return p


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    code, out = asyncio.run(run(args))
    print(json.dumps(out, indent=2, ensure_ascii=False))
    if code == 2:
        print(out.get("error_message", "check failed"), file=sys.stderr)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
