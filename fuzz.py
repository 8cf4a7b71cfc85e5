#!/usr/bin/env python3
"""
Random chunk-boundary fuzzer for xmltok.

Generates well-formed and malformed markup, tokenizes each document once as
a single chunk and several times split at random positions, and reports any
document whose outcome (events, or error code and offset) depends on the
chunking.
"""

import argparse
import random
import string
import sys
import time
import traceback

from xmltok import ParseError, stream

TAGS = ["a", "b", "item", "root", "x:y", "data-set", "p", "entry", "title", "link"]

ATTRIBUTES = ["id", "class", "href", "xmlns", "xml:lang", "data-x", "value", "type"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\f", ""]
    return "".join(random.choices(ws, k=random.randint(0, 4)))


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    value = random_string(0, 10)
    variants = [
        f'{name}="{value}"',
        f"{name}='{value}'",
        f"{name}={value}",
        name,
        f'{name} = "{value}"',
        f'{name}="a>b"',
    ]
    return random.choice(variants)


def fuzz_open_tag():
    """Generate opening tags, occasionally malformed."""
    tag = random.choice(TAGS)
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 3)))
    if attrs:
        attrs = " " + attrs
    closing = random.choice([">", "/>", " />", ">", ">", ""])
    opening = random.choice(["< ", "<<", "<!"]) if random.random() < 0.05 else "<"
    return f"{opening}{tag}{attrs}{random_whitespace() if closing else ''}{closing}"


def fuzz_close_tag():
    tag = random.choice(TAGS)
    variants = [f"</{tag}>", f"</{tag}>", f"</{tag} >", f"</{tag}"]
    return random.choice(variants)


def fuzz_comment():
    """Generate comments, some with forbidden double hyphens."""
    content = random_string(0, 30)
    variants = [
        f"<!--{content}-->",
        f"<!--{content}-->",
        f"<!---->",
        f"<!-->",
        f"<!--{content}--{content}-->",
        f"<!-{content}-->",
        f"<!--{content}",
        f"<!--{content}- -->",
    ]
    return random.choice(variants)


def fuzz_cdata():
    content = random_string(0, 30)
    variants = [
        f"<![CDATA[{content}]]>",
        f"<![CDATA[{content}]]>",
        f"<![CDATA[<{content}> ]] ]>]]>",
        f"<![CDATA[{content}",
        f"<![CDAT[{content}]]>",
    ]
    return random.choice(variants)


def fuzz_processing_instruction():
    content = random_string(0, 20)
    variants = [
        f"<?{content}?>",
        f'<?xml version="1.0" encoding="utf-8"?>',
        f"<?{content}? >?>",
        f"<?{content}",
    ]
    return random.choice(variants)


def fuzz_doctype():
    return random.choice(["<!DOCTYPE root>", "<!doctype html>", "<!ELEMENT x ANY>"])


def fuzz_text():
    parts = [random_string(0, 15), random_whitespace(), "&amp;", ">", "]]>", "--", "?>"]
    return "".join(random.choices(parts, k=random.randint(1, 5)))


def fuzz_nested_structure(depth=0, max_depth=6):
    """Generate balanced nested elements."""
    tag = random.choice(TAGS)
    if depth >= max_depth or random.random() < 0.3:
        return f"<{tag}>{fuzz_text()}</{tag}>"
    children = "".join(
        fuzz_nested_structure(depth + 1, max_depth) if random.random() < 0.6 else fuzz_text()
        for _ in range(random.randint(1, 3))
    )
    return f"<{tag}>{children}</{tag}>"


def generate_fuzzed_markup():
    """Generate a complete fuzzed document."""
    parts = []

    if random.random() < 0.3:
        parts.append(fuzz_processing_instruction())
    if random.random() < 0.05:
        parts.append(fuzz_doctype())

    num_elements = random.randint(1, 15)
    for _ in range(num_elements):
        element_type = random.choices(
            [
                fuzz_open_tag,
                fuzz_close_tag,
                fuzz_comment,
                fuzz_text,
                fuzz_cdata,
                fuzz_nested_structure,
                fuzz_processing_instruction,
            ],
            weights=[8, 6, 5, 15, 4, 20, 2],
        )[0]
        parts.append(element_type())

    return "".join(parts)


def random_chunks(document):
    """Split a document at random positions, sometimes adding empty chunks."""
    if not document:
        return [document]
    cuts = sorted(random.sample(range(len(document) + 1), k=min(len(document) + 1, random.randint(1, 8))))
    chunks = []
    previous = 0
    for cut in cuts:
        chunks.append(document[previous:cut])
        previous = cut
    chunks.append(document[previous:])
    return chunks


def outcome(chunks, **options):
    """Return (events, error) where error is (code, offset) or None."""
    events = []
    try:
        for event in stream(chunks, **options):
            events.append(event.as_tuple())
    except ParseError as e:
        return events, (e.code, e.offset)
    return events, None


def run_fuzzer(num_tests, seed=None, splits=5, verbose=False, save_failures=False):
    """Run the fuzzer and report chunking-dependent outcomes and crashes."""
    if seed is not None:
        random.seed(seed)

    mismatches = []
    crashes = []
    errors = 0

    print(f"Fuzzing xmltok with {num_tests} documents, {splits} chunkings each...")
    start_time = time.time()

    for i in range(num_tests):
        document = generate_fuzzed_markup()
        options = {
            "always_tag_close": random.random() < 0.3,
            "no_empty_text": random.random() < 0.3,
        }

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            expected = outcome(document, **options)
            if expected[1] is not None:
                errors += 1
            for _ in range(splits):
                chunks = random_chunks(document)
                actual = outcome(chunks, **options)
                if actual != expected:
                    mismatches.append({
                        "test_num": i,
                        "chunks": chunks,
                        "expected": expected,
                        "actual": actual,
                    })
                    if verbose:
                        print(f"  MISMATCH: Test {i}: {chunks!r}")
                    break
        except Exception as e:
            crashes.append({
                "test_num": i,
                "markup": document,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Parse errors:   {errors}")
    print(f"Mismatches:     {len(mismatches)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    if mismatches:
        print(f"\n{'='*60}")
        print("MISMATCH DETAILS:")
        print(f"{'='*60}")
        for mismatch in mismatches[:10]:
            print(f"\nTest #{mismatch['test_num']}:")
            print(f"  Chunks:   {mismatch['chunks']!r}")
            print(f"  Expected: {mismatch['expected']!r}")
            print(f"  Actual:   {mismatch['actual']!r}")

    if crashes:
        print(f"\n{'='*60}")
        print("CRASH DETAILS:")
        print(f"{'='*60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  Markup: {crash['markup'][:200]!r}...")
            print(f"  Error: {crash['error']}")

    if save_failures and (mismatches or crashes):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Seed: {seed}\n\n")
            for mismatch in mismatches:
                f.write(f"=== MISMATCH #{mismatch['test_num']} ===\n")
                f.write(f"Chunks: {mismatch['chunks']!r}\n")
                f.write(f"Expected: {mismatch['expected']!r}\n")
                f.write(f"Actual: {mismatch['actual']!r}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"Markup:\n{crash['markup']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not mismatches and not crashes


def main():
    parser = argparse.ArgumentParser(description="Check that xmltok output does not depend on chunking")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of documents to generate (default: 1000)",
    )
    parser.add_argument(
        "--splits",
        type=int,
        default=5,
        help="Random chunkings tried per document (default: 5)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed documents (no tokenizing)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(generate_fuzzed_markup())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        splits=args.splits,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
