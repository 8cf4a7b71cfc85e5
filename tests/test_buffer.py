from __future__ import annotations

import unittest

from xmltok.buffer import PendingBuffer, TagStack
from xmltok.tokens import NodeKind


class TestPendingBuffer(unittest.TestCase):
    def test_unwait_without_pending_token(self) -> None:
        buffer = PendingBuffer()
        assert not buffer.is_waiting()
        assert buffer.unwait() == ""

    def test_wait_then_unwait(self) -> None:
        buffer = PendingBuffer()
        buffer.wait(NodeKind.COMMENT, "<!-- a")
        assert buffer.is_waiting()
        assert buffer.kind == NodeKind.COMMENT
        assert buffer.data == "<!-- a"
        assert buffer.unwait() == "<!-- a"
        assert not buffer.is_waiting()
        assert buffer.kind is None
        assert buffer.unwait() == ""

    def test_wait_overwrites(self) -> None:
        buffer = PendingBuffer()
        buffer.wait(NodeKind.TEXT, "abc")
        buffer.wait(NodeKind.TAG_OPEN, "<a")
        assert buffer.kind == NodeKind.TAG_OPEN
        assert buffer.unwait() == "<a"


class TestTagStack(unittest.TestCase):
    def test_push_pop_order(self) -> None:
        stack = TagStack()
        stack.push("a")
        stack.push("b")
        assert stack.names() == ["a", "b"]
        assert stack.pop() == "b"
        assert stack.pop() == "a"
        assert stack.is_empty()

    def test_pop_empty_returns_none(self) -> None:
        stack = TagStack()
        assert stack.pop() is None
        assert stack.is_empty()

    def test_clear(self) -> None:
        stack = TagStack()
        stack.push("a")
        stack.clear()
        assert stack.is_empty()

    def test_names_are_a_copy(self) -> None:
        stack = TagStack()
        stack.push("a")
        names = stack.names()
        names.append("z")
        assert stack.names() == ["a"]
