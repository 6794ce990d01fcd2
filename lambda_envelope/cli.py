#!/usr/bin/env python3
"""Encode responses into transport envelopes and decode invocation results."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from lambda_envelope.config import EnvelopeConfig, get_config
from lambda_envelope.core.exceptions import EnvelopeError
from lambda_envelope.core.logging_config import setup_logging
from lambda_envelope.services.builder import ResponseBuilder
from lambda_envelope.services.resolver import ResponseResolver


def _read_document(path: str | None) -> Any:
    if path and path != "-":
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"input is not valid JSON: {exc}") from exc


def _cmd_encode(args: argparse.Namespace, config: EnvelopeConfig) -> int:
    document = _read_document(args.file)
    if not isinstance(document, dict):
        raise ValueError("response document must be a JSON object")

    bucket = args.bucket or config.RESPONSE_BUCKET
    builder = ResponseBuilder.from_config(config.model_copy(update={"RESPONSE_BUCKET": bucket}))
    if args.threshold is not None:
        builder.threshold = args.threshold

    envelope = asyncio.run(builder.build(document))
    print(envelope.to_json())
    return 0


def _cmd_decode(args: argparse.Namespace, config: EnvelopeConfig) -> int:
    document = _read_document(args.file)
    if not isinstance(document, dict):
        raise ValueError("invocation result must be a JSON object")

    resolver = ResponseResolver.from_config(config)
    response = asyncio.run(resolver.from_raw_result(document))
    print(response.to_json())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lambda-envelope",
        description="Size-tiered envelopes for Lambda invocation results",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="Build a transport envelope for a response")
    encode.add_argument("file", nargs="?", help="Response JSON file (default: stdin)")
    encode.add_argument("--bucket", help="Bucket for the s3 tier (default: RESPONSE_BUCKET)")
    encode.add_argument("--threshold", type=int, help="Size threshold in bytes")
    encode.set_defaults(func=_cmd_encode)

    decode = subparsers.add_parser(
        "decode", help="Resolve a raw invocation result into the canonical response"
    )
    decode.add_argument(
        "file", nargs="?", help="Invocation result JSON file with Payload/FunctionError"
    )
    decode.set_defaults(func=_cmd_decode)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = get_config()
    setup_logging(config.LOG_CONFIG_PATH, config.LOG_LEVEL)

    try:
        return int(args.func(args, config))
    except (EnvelopeError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
