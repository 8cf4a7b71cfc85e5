#!/usr/bin/env python3
"""Command-line interface for xmltok."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from . import ParseError, stream
from .tokens import Node, NodeKind

DEFAULT_CHUNK_SIZE = 8192


def _get_version() -> str:
    try:
        return version("xmltok")
    except PackageNotFoundError:  # pragma: no cover
        return "dev"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xmltok",
        description="Tokenize XML-like markup and print one event per line.",
        epilog=(
            "Examples:\n"
            "  xmltok feed.xml\n"
            "  curl -s https://example.com/feed.xml | xmltok -\n"
            "  xmltok feed.xml --include tagopen --include tagclose\n"
            "\n"
            "If you don't have the 'xmltok' command available, use:\n"
            "  python -m xmltok ...\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="File to tokenize, or '-' to read from stdin",
    )
    parser.add_argument(
        "--include",
        action="append",
        choices=sorted(NodeKind.ALL),
        help="Only print events of this kind (repeatable; default: all kinds)",
    )
    parser.add_argument(
        "--always-tag-close",
        action="store_true",
        help="Print a tagclose event after every self-closing tag",
    )
    parser.add_argument(
        "--no-empty-text",
        action="store_true",
        help="Skip text events that are empty or whitespace only",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Characters read per chunk (default: {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log tokenizer suspensions to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"xmltok {_get_version()}",
    )

    args = parser.parse_args(argv)

    if not args.path:
        parser.print_help(sys.stderr)
        raise SystemExit(1)
    if args.chunk_size < 1:
        parser.error("--chunk-size must be a positive integer")

    return args


def _read_chunks(handle: TextIO, chunk_size: int) -> Iterator[str]:
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            return
        yield chunk


def _format_event(event: Node) -> str:
    kind, *fields = event.as_tuple()
    return "\t".join([kind, *(repr(field) for field in fields)])


def _write_events(chunks: Iterator[str], args: argparse.Namespace) -> None:
    events = stream(
        chunks,
        include=args.include,
        always_tag_close=args.always_tag_close,
        no_empty_text=args.no_empty_text,
    )
    for event in events:
        sys.stdout.write(_format_event(event))
        sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.path == "-":
            # Line endings are part of the text events, keep them verbatim.
            sys.stdin.reconfigure(newline="")
            _write_events(_read_chunks(sys.stdin, args.chunk_size), args)
        else:
            with open(args.path, encoding="utf-8", newline="") as handle:
                _write_events(_read_chunks(handle, args.chunk_size), args)
    except ParseError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2) from e
    except UnicodeDecodeError as e:
        print(f"{args.path}: input is not valid UTF-8 ({e.reason})", file=sys.stderr)
        raise SystemExit(2) from e


if __name__ == "__main__":
    main()
