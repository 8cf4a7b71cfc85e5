from __future__ import annotations

import random
import unittest

import fuzz


class TestRandomChunkings(unittest.TestCase):
    def setUp(self) -> None:
        random.seed(1234)

    def test_random_chunks_reassemble(self) -> None:
        for _ in range(50):
            document = fuzz.generate_fuzzed_markup()
            assert "".join(fuzz.random_chunks(document)) == document

    def test_outcome_does_not_depend_on_chunking(self) -> None:
        for _ in range(200):
            document = fuzz.generate_fuzzed_markup()
            expected = fuzz.outcome(document)
            for _ in range(3):
                chunks = fuzz.random_chunks(document)
                assert fuzz.outcome(chunks) == expected, chunks

    def test_outcome_with_options_does_not_depend_on_chunking(self) -> None:
        for _ in range(100):
            document = fuzz.generate_fuzzed_markup()
            expected = fuzz.outcome(document, always_tag_close=True, no_empty_text=True)
            chunks = list(document)
            assert fuzz.outcome(chunks, always_tag_close=True, no_empty_text=True) == expected
