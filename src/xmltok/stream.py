from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, AsyncIterable, Generator, Iterable
from typing import Any

from .tokenizer import Tokenizer, TokenizerOpts
from .tokens import Node

logger = logging.getLogger(__name__)

Source = str | Iterable[str]
AsyncSource = str | Iterable[str] | AsyncIterable[str]


def _resolve_opts(opts: TokenizerOpts | None, options: dict[str, Any]) -> TokenizerOpts:
    if opts is not None:
        if options:
            raise TypeError("pass either opts or keyword options, not both")
        return opts
    return TokenizerOpts(**options)


def stream(source: Source, opts: TokenizerOpts | None = None, **options: Any) -> Generator[Node, None, None]:
    """
    Stream node events from markup delivered as an iterable of text chunks.

    A single string is treated as one chunk. Events are produced only as
    they are requested; if the caller stops early the remaining chunks are
    never read and no end-of-input check is made.
    """
    tokenizer = Tokenizer(_resolve_opts(opts, options))
    if isinstance(source, str):
        source = (source,)

    for chunk in source:
        yield from tokenizer.feed(chunk)

    logger.debug("input exhausted after %d chars", tokenizer.consumed)
    yield from tokenizer.close()


async def astream(
    source: AsyncSource,
    opts: TokenizerOpts | None = None,
    **options: Any,
) -> AsyncGenerator[Node, None]:
    """
    Asynchronous counterpart of :func:`stream`.

    Accepts an async iterable of chunks (a socket reader, an HTTP body, ...),
    a plain iterable or a single string.
    """
    tokenizer = Tokenizer(_resolve_opts(opts, options))
    if isinstance(source, str):
        source = (source,)

    if isinstance(source, AsyncIterable):
        async for chunk in source:
            for event in tokenizer.feed(chunk):
                yield event
    else:
        for chunk in source:
            for event in tokenizer.feed(chunk):
                yield event

    logger.debug("input exhausted after %d chars", tokenizer.consumed)
    for event in tokenizer.close():
        yield event


def tokenize(text: str, **options: Any) -> list[Node]:
    """Tokenize a complete document and return all of its events."""
    return list(stream(text, **options))
