"""Command line entrypoint: submit one photo and print the verdict."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import sys
from typing import Sequence

from rechtebank.api.judge_client import JudgeClient
from rechtebank.config.settings import get_settings
from rechtebank.imgproc.rotation import VALID_ANGLES, rotate_left, rotate_right
from rechtebank.models import CaptureMethod, PhotoBytes, UploadMetadata, VerdictResult
from rechtebank.monitoring.logging import configure_logging
from rechtebank.services.submission import SubmissionService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rechtebank-submit", description=__doc__)
    parser.add_argument("path", help="Photo to submit.")
    parser.add_argument("--rotate", type=int, choices=VALID_ANGLES, default=0, help="Initial rotation.")
    parser.add_argument("--left", type=int, default=0, metavar="N", help="Quarter turns counter-clockwise.")
    parser.add_argument("--right", type=int, default=0, metavar="N", help="Quarter turns clockwise.")
    parser.add_argument(
        "--capture-method",
        choices=[method.value for method in CaptureMethod],
        default=CaptureMethod.FILE.value,
    )
    parser.add_argument("--base-url", help="Judge API base URL.")
    parser.add_argument("--log-level", help="Override LOG_LEVEL.")
    return parser


def resolve_rotation(start: int, left: int, right: int) -> int:
    angle = start
    for _ in range(left):
        angle = rotate_left(angle)
    for _ in range(right):
        angle = rotate_right(angle)
    return angle


async def _submit(args: argparse.Namespace) -> VerdictResult:
    settings = get_settings()
    if args.base_url:
        settings = dataclasses.replace(settings, api_base_url=args.base_url)

    photo = PhotoBytes.from_path(args.path)
    metadata = UploadMetadata.now(settings.user_agent, CaptureMethod(args.capture_method))
    async with JudgeClient(settings) as client:
        service = SubmissionService(client)
        rotation = resolve_rotation(args.rotate, args.left, args.right)
        return await service.submit(photo, metadata, rotation)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        result = asyncio.run(_submit(args))
    except OSError as exc:
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    if not result.success:
        print(result.message, file=sys.stderr)
        return 1
    print(result.verdict.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
