from __future__ import annotations

import itertools
import unittest

from xmltok import ParseError, TagClose, TagOpen, Text, TokenizerOpts, stream, tokenize
from xmltok.tokens import NodeKind

from .test_tokenizer import DOCUMENT, DOCUMENT_EVENTS


class TestTokenizerOpts(unittest.TestCase):
    def test_defaults(self) -> None:
        opts = TokenizerOpts()
        assert opts.include == NodeKind.ALL
        assert opts.always_tag_close is False
        assert opts.no_empty_text is False

    def test_bare_kind_is_wrapped(self) -> None:
        assert TokenizerOpts(include="text").include == frozenset({"text"})

    def test_list_of_kinds(self) -> None:
        opts = TokenizerOpts(include=["tagopen", "tagclose"])
        assert opts.include == frozenset({NodeKind.TAG_OPEN, NodeKind.TAG_CLOSE})
        assert opts.wants(NodeKind.TAG_OPEN)
        assert not opts.wants(NodeKind.TEXT)

    def test_unknown_kind_is_rejected(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            TokenizerOpts(include=["text", "doctype"])
        assert "doctype" in str(ctx.exception)

    def test_pending_only_kind_is_not_includable(self) -> None:
        with self.assertRaises(ValueError):
            TokenizerOpts(include=NodeKind.MARKUP_DECLARATION)

    def test_flags_are_coerced(self) -> None:
        opts = TokenizerOpts(always_tag_close=1, no_empty_text="yes")
        assert opts.always_tag_close is True
        assert opts.no_empty_text is True

    def test_repr(self) -> None:
        assert repr(TokenizerOpts(include="text")) == (
            "TokenizerOpts(include=['text'], always_tag_close=False, no_empty_text=False)"
        )


class TestInclude(unittest.TestCase):
    def test_include_is_a_projection(self) -> None:
        kinds = sorted(NodeKind.ALL)
        for size in range(len(kinds) + 1):
            for subset in itertools.combinations(kinds, size):
                expected = [event for event in DOCUMENT_EVENTS if event.kind in subset]
                with self.subTest(include=subset):
                    assert tokenize(DOCUMENT, include=subset) == expected

    def test_excluded_kinds_still_validate_nesting(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            tokenize("<a><b></a>", include="text")
        assert ctx.exception.code == "mismatched-closing-tag"

    def test_trailing_text_respects_include(self) -> None:
        assert tokenize("<a/>tail", include="tagopen") == [TagOpen("a", "", True)]


class TestAlwaysTagClose(unittest.TestCase):
    def test_synthetic_close_after_self_closing_tag(self) -> None:
        assert tokenize("<b/>", always_tag_close=True) == [TagOpen("b", "", True), TagClose("b")]

    def test_synthetic_close_uses_tag_name(self) -> None:
        assert tokenize('<b x="1" />', always_tag_close=True) == [TagOpen("b", 'x="1"', True), TagClose("b")]

    def test_no_synthetic_close_by_default(self) -> None:
        assert tokenize("<b/>") == [TagOpen("b", "", True)]

    def test_no_synthetic_close_when_tagclose_excluded(self) -> None:
        assert tokenize("<b/>", always_tag_close=True, include="tagopen") == [TagOpen("b", "", True)]

    def test_synthetic_close_without_tagopen(self) -> None:
        assert tokenize("<a><b/></a>", always_tag_close=True, include="tagclose") == [
            TagClose("b"),
            TagClose("a"),
        ]

    def test_every_self_closing_tag_is_followed_by_its_close(self) -> None:
        events = tokenize(DOCUMENT, always_tag_close=True)
        for index, event in enumerate(events):
            if isinstance(event, TagOpen) and event.self_closing:
                assert events[index + 1] == TagClose(event.name)

    def test_synthetic_close_is_chunk_boundary_invariant(self) -> None:
        document = "<a><b  c='d'/></a>"
        expected = tokenize(document, always_tag_close=True)
        for index in range(len(document) + 1):
            chunks = [document[:index], document[index:]]
            assert list(stream(chunks, always_tag_close=True)) == expected


class TestNoEmptyText(unittest.TestCase):
    def test_whitespace_text_is_dropped(self) -> None:
        events = tokenize(DOCUMENT, no_empty_text=True)
        texts = [event for event in events if isinstance(event, Text)]
        assert texts == [Text("Hello &amp; bye"), Text("\ntrailing")]

    def test_no_text_event_is_blank(self) -> None:
        for event in tokenize(DOCUMENT, no_empty_text=True):
            if isinstance(event, Text):
                assert event.data.strip()

    def test_trailing_whitespace_is_dropped(self) -> None:
        assert list(stream(["<a/>", "  \n "], no_empty_text=True)) == [TagOpen("a", "", True)]

    def test_whitespace_kept_by_default(self) -> None:
        assert tokenize("<a> </a>") == [TagOpen("a"), Text(" "), TagClose("a")]
