import logging
import re

from .buffer import PendingBuffer, TagStack
from .errors import ParseError
from .tokens import CData, Comment, NodeKind, ProcessingInstruction, TagClose, TagOpen, Text

logger = logging.getLogger(__name__)

_WHITESPACE_PATTERN = re.compile(r"\s")
_CDATA_OPENER = "CDATA["


class TokenizerOpts:
    __slots__ = ("always_tag_close", "include", "no_empty_text")

    def __init__(self, include=None, always_tag_close=False, no_empty_text=False):
        if include is None:
            include = NodeKind.ALL
        elif isinstance(include, str):
            # A bare kind, not an iterable of characters.
            include = (include,)
        include = frozenset(include)
        unknown = include - NodeKind.ALL
        if unknown:
            raise ValueError(f"Unknown node kind(s) in include: {', '.join(sorted(unknown))}")
        self.include = include
        self.always_tag_close = bool(always_tag_close)
        self.no_empty_text = bool(no_empty_text)

    def wants(self, kind):
        return kind in self.include

    def __repr__(self):
        return (
            f"TokenizerOpts(include={sorted(self.include)!r}, "
            f"always_tag_close={self.always_tag_close!r}, no_empty_text={self.no_empty_text!r})"
        )


class Tokenizer:
    """Incremental tokenizer for XML-like markup.

    One instance tokenizes one document. Feed it the document's chunks in
    order with ``feed()`` and call ``close()`` once the input is exhausted;
    both return a generator yielding node events as they are requested,
    which must be exhausted before the next call.

    A token split across chunks is kept in a single pending slot and
    rescanned once the next chunk arrives, so the events produced do not
    depend on where the chunk boundaries fall.
    """

    __slots__ = ("_closed", "_consumed", "_scanning", "opts", "pending", "tag_stack")

    def __init__(self, opts=None):
        self.opts = opts or TokenizerOpts()
        self.pending = PendingBuffer()
        self.tag_stack = TagStack()
        # Characters received so far, across all chunks.
        self._consumed = 0
        self._closed = False
        self._scanning = False

    @property
    def consumed(self):
        """Number of characters fed so far."""
        return self._consumed

    def feed(self, chunk):
        if self._closed:
            raise ValueError("feed() called after close()")
        self._check_idle("feed")
        if not isinstance(chunk, str):
            raise TypeError(f"chunks must be str, not {type(chunk).__name__}")

        prefix = self.pending.unwait()
        base = self._consumed - len(prefix)
        self._consumed += len(chunk)
        buffer = prefix + chunk if prefix else chunk

        self._scanning = True
        return self._scan(buffer, base)

    def _scan(self, buffer, base):
        yield from self._scan_buffer(buffer, base)
        self._scanning = False

    def _scan_buffer(self, buffer, base):
        opts = self.opts
        pending = self.pending
        tag_stack = self.tag_stack
        length = len(buffer)
        pos = 0

        while pos < length:
            if buffer[pos] != "<":
                next_tag = buffer.find("<", pos)
                if next_tag == -1:
                    # The text run may continue in the next chunk.
                    pending.wait(NodeKind.TEXT, buffer[pos:])
                    return
                event = self._text_event(buffer[pos:next_tag])
                if event is not None:
                    yield event
                pos = next_tag

            # Invariant: buffer[pos] is the "<" opening a markup construct
            start = pos
            pos += 1
            next_char = buffer[pos] if pos < length else None

            if next_char == "!":
                pos += 1
                if pos >= length:
                    pending.wait(NodeKind.MARKUP_DECLARATION, buffer[start:])
                    return
                decl_char = buffer[pos]

                if decl_char == "[" and _CDATA_OPENER.startswith(buffer[pos + 1 : pos + 7]):
                    pos += 7
                    cdata_close = buffer.find("]]>", pos)
                    if cdata_close == -1:
                        pending.wait(NodeKind.CDATA, buffer[start:])
                        return
                    if opts.wants(NodeKind.CDATA):
                        yield CData(buffer[pos:cdata_close])
                    pos = cdata_close + 3
                    continue

                if decl_char == "-" and (pos + 1 >= length or buffer[pos + 1] == "-"):
                    pos += 2
                    comment_close = buffer.find("--", pos)
                    # "--" as the last two available characters: the ">" may be in the next chunk
                    if comment_close == -1 or comment_close + 2 >= length:
                        pending.wait(NodeKind.COMMENT, buffer[start:])
                        return
                    if buffer[comment_close + 2] != ">":
                        raise ParseError("unexpected-double-hyphen-in-comment", offset=base + comment_close)
                    if opts.wants(NodeKind.COMMENT):
                        yield Comment(buffer[pos:comment_close])
                    pos = comment_close + 3
                    continue

                # DOCTYPE and other declarations are not supported.
                raise ParseError("unrecognized-markup-declaration", offset=base + start)

            if next_char == "?":
                pos += 1
                pi_close = buffer.find("?>", pos)
                if pi_close == -1:
                    pending.wait(NodeKind.PROCESSING_INSTRUCTION, buffer[start:])
                    return
                if opts.wants(NodeKind.PROCESSING_INSTRUCTION):
                    yield ProcessingInstruction(buffer[pos:pi_close])
                pos = pi_close + 2
                continue

            tag_close = buffer.find(">", pos)
            if tag_close == -1:
                pending.wait(NodeKind.TAG_OPEN, buffer[start:])
                return

            if next_char == "/":
                name = buffer[pos + 1 : tag_close]
                expected = tag_stack.pop()
                if expected != name:
                    tag_stack.clear()
                    if expected is None:
                        raise ParseError("unexpected-closing-tag", offset=base + start, tag_name=name)
                    raise ParseError("mismatched-closing-tag", offset=base + start, tag_name=expected)
                if opts.wants(NodeKind.TAG_CLOSE):
                    yield TagClose(name)
                pos = tag_close + 1
                continue

            self_closing = buffer[tag_close - 1] == "/"
            name_end = tag_close - 1 if self_closing else tag_close

            whitespace = _WHITESPACE_PATTERN.search(buffer, pos, tag_close)
            if whitespace is None:
                name = buffer[pos:name_end]
                attrs = ""
            elif whitespace.start() == pos:
                raise ParseError("tag-name-starts-with-whitespace", offset=base + start)
            else:
                name = buffer[pos : whitespace.start()]
                attrs = buffer[whitespace.start() : name_end].strip()

            if not self_closing:
                tag_stack.push(name)
            if opts.wants(NodeKind.TAG_OPEN):
                yield TagOpen(name, attrs, self_closing)
            if self_closing and opts.always_tag_close and opts.wants(NodeKind.TAG_CLOSE):
                yield TagClose(name)
            pos = tag_close + 1

    def close(self):
        """Flush the pending token and check that every tag was closed."""
        self._check_idle("close")
        if self._closed:
            return iter(())
        self._closed = True

        kind = self.pending.kind
        offset = self._consumed - len(self.pending.data)
        data = self.pending.unwait()
        if kind is not None:
            logger.debug("end of input with pending %s token at offset %d", kind, offset)
        return self._finish(kind, data, offset)

    def _finish(self, kind, data, offset):
        if kind == NodeKind.TEXT:
            # Trailing text needs no closing delimiter.
            event = self._text_event(data)
            if event is not None:
                yield event
        elif kind == NodeKind.CDATA:
            raise ParseError("eof-in-cdata", offset=offset)
        elif kind == NodeKind.COMMENT:
            raise ParseError("eof-in-comment", offset=offset)
        elif kind == NodeKind.PROCESSING_INSTRUCTION:
            raise ParseError("eof-in-processing-instruction", offset=offset)
        elif kind in (NodeKind.TAG_OPEN, NodeKind.MARKUP_DECLARATION):
            # Unclosed opening and closing tags are not told apart
            raise ParseError("eof-in-tag", offset=offset)

        if not self.tag_stack.is_empty():
            raise ParseError("unclosed-tags", offset=self._consumed, tag_names=self.tag_stack.names())

    # ---------------------
    # Helper methods
    # ---------------------

    def _check_idle(self, caller):
        if self._scanning:
            raise ValueError(f"{caller}() called before the events of the previous chunk were consumed")

    def _text_event(self, text):
        opts = self.opts
        if not opts.wants(NodeKind.TEXT):
            return None
        if opts.no_empty_text and (not text or text.isspace()):
            return None
        return Text(text)
