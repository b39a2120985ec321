#!/usr/bin/env python
"""Command-line entry point: shrink a file and optionally resize the result."""
from __future__ import annotations

import argparse
import logging
import sys

from way2enjoy.config import get_settings
from way2enjoy.exceptions import Way2enjoyError
from way2enjoy.models import ApiError, StoreTarget
from way2enjoy.services import Way2enjoyClient, get_client

_STORE_FIELDS = ("aws_access_key_id", "aws_secret_access_key", "region", "path")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compress a file with the Way2enjoy API")
    parser.add_argument("input", help="File to upload")
    parser.add_argument("--output", help="Where to save the shrunk file")
    parser.add_argument("--resize", choices=("cover", "fit", "scale"))
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--resized-output", help="Where to save the resized file")
    parser.add_argument("--api-key", help="Overrides WAY2ENJOY_API_KEY")
    parser.add_argument("-v", "--verbose", action="store_true")

    store = parser.add_argument_group(
        "S3 storage", "Have the service store the final file on S3 (all four required)"
    )
    store.add_argument("--store-access-key-id", dest="aws_access_key_id")
    store.add_argument("--store-secret-access-key", dest="aws_secret_access_key")
    store.add_argument("--store-region", dest="region")
    store.add_argument("--store-path", dest="path", help="bucket/key to write to")
    return parser


def _store_target(parser: argparse.ArgumentParser, args: argparse.Namespace) -> StoreTarget | None:
    given = {name: getattr(args, name) for name in _STORE_FIELDS if getattr(args, name)}
    if not given:
        return None
    if len(given) != len(_STORE_FIELDS):
        parser.error("--store-access-key-id, --store-secret-access-key, --store-region "
                     "and --store-path must be given together")
    return StoreTarget(**given)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.resize and (args.width is not None or args.height is not None):
        parser.error("--width/--height require --resize")
    store = _store_target(parser, args)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.api_key:
            settings = get_settings()
            client = Way2enjoyClient(
                args.api_key,
                api_url=settings.api_url,
                timeout=settings.timeout,
                chunk_size=settings.chunk_size,
            )
        else:
            client = get_client()

        try:
            return _run(client, args, store)
        finally:
            if args.api_key:
                client.close()
    except Way2enjoyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _run(client: Way2enjoyClient, args: argparse.Namespace, store: StoreTarget | None) -> int:
    # Only the final file is stored: the resized one when --resize is given.
    result = client.shrink(args.input, args.output, None if args.resize else store)
    print(result.model_dump_json(indent=2, exclude_none=True))
    if result.is_error:
        return 1

    if args.resize:
        transform = getattr(client, args.resize)
        outcome = transform(result, args.width, args.height, args.resized_output, store)
        print(f"{args.resize}: {outcome.status.code} {outcome.status.description or ''}".rstrip())
        if isinstance(outcome, ApiError):
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
