#!/usr/bin/env python3
"""
Random fuzzer for the HTML formatter.
Generates malformed HTML, formats it, and reports crashes and outputs that
change when formatted a second time.
"""

import argparse
import random
import string
import sys
import time
import traceback

from htmlformat import format_html

TAGS = [
    "div", "span", "p", "a", "b", "i", "em", "strong", "img", "table", "tr", "td", "th", "ul", "ol", "li",
    "form", "input", "button", "select", "option", "textarea", "script", "style", "pre", "code",
    "head", "body", "html", "title", "meta", "link", "br", "hr", "h1", "h2", "h3", "template",
    "blockquote", "article", "section", "header", "footer", "nav", "svg", "math",
]

VOID_TAGS = ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"]

ATTRIBUTES = ["id", "class", "style", "href", "src", "alt", "title", "name", "value", "data-x", "hidden"]

PUNCTUATION = [".", ",", "!", "?", ";", ":", "(", ")", "—", "«", "»"]

ENTITIES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;", "&", "&amp", "&#38;", "&#x26;",
    "&#39;", "&#34;", "&unknown;", "&AMP;",
]

SPECIAL_CHARS = ["\x00", "\x0c", "\u00a0", "\u2028", "\u200b", "\ufeff", "\r", "\t"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r\n", "\f", ""]
    return "".join(random.choices(ws, k=random.randint(0, 5)))


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    value_strategies = [
        lambda: random_string(0, 30),
        lambda: random.choice(ENTITIES) + random.choice(ENTITIES),
        lambda: '"' + random_string() + '"',
        lambda: "'" + random_string() + "'",
        lambda: "<" + random_string(1, 5) + ">",
        lambda: "\n" * random.randint(1, 3) + random_string(),
        lambda: "",
    ]
    value = random.choice(value_strategies)()
    quote = '"' if "'" in value or random.random() < 0.5 else "'"
    value = value.replace(quote, "")
    return f"{name}={quote}{value}{quote}"


def fuzz_open_tag():
    tag = random.choice(TAGS + VOID_TAGS)
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    return f"<{tag}{' ' if attrs else ''}{attrs}{random_whitespace()}>"


def fuzz_close_tag():
    return f"</{random.choice(TAGS)}>"


def fuzz_comment():
    content = random_string(0, 30)
    variants = [
        f"<!--{content}-->",
        f"<!-- {content} -->",
        f"<!--{random.choice(PUNCTUATION)}{content}-->",
        "<!---->",
        f"<!--{content}",
    ]
    return random.choice(variants)


def fuzz_doctype():
    variants = [
        "<!DOCTYPE html>",
        "<!doctype html>",
        "<!DOCTYPE>",
        "<!DOCTYPE " + random_string() + ">",
    ]
    return random.choice(variants)


def fuzz_text():
    """Generate text content with edge cases."""
    strategies = [
        lambda: random_string(1, 30),
        lambda: random_whitespace() + random_string(1, 10) + random_whitespace(),
        lambda: random.choice(PUNCTUATION) + random_string(0, 10),
        lambda: random_string(1, 10) + random.choice(PUNCTUATION),
        lambda: random.choice(ENTITIES),
        lambda: "".join(random.choices(SPECIAL_CHARS, k=random.randint(1, 5))),
        lambda: " " * random.randint(1, 40),
    ]
    return random.choice(strategies)()


def fuzz_raw_text():
    """Generate <script>/<style> bodies with nested indentation."""
    tag = random.choice(["script", "style"])
    lines = [" " * random.randint(0, 6) + random_string(0, 20) for _ in range(random.randint(0, 6))]
    return f"<{tag}>{random_whitespace()}{chr(10).join(lines)}{random_whitespace()}</{tag}>"


def fuzz_pre():
    content = "".join(random.choice([fuzz_text, fuzz_open_tag, fuzz_close_tag])() for _ in range(random.randint(0, 5)))
    return f"<pre>{content}</pre>"


def fuzz_nested_structure(depth=0, max_depth=8):
    """Generate nested (possibly invalid) structure."""
    if depth >= max_depth or random.random() < 0.3:
        return fuzz_text()

    tag = random.choice(TAGS)
    children = [fuzz_nested_structure(depth + 1, max_depth) for _ in range(random.randint(0, 3))]
    return f"<{tag}>{''.join(children)}</{tag}>"


def fuzz_inline_punctuation():
    tag = random.choice(["a", "b", "em", "span", "code"])
    return f"<p>{random_string(1, 10)} <{tag}>{random_string(1, 10)}</{tag}>{random.choice(PUNCTUATION)} {random_string()}</p>"


def generate_fuzzed_html():
    """Generate a fuzzed HTML document."""
    parts = []

    if random.random() < 0.5:
        parts.append(fuzz_doctype())

    for _ in range(random.randint(1, 20)):
        element_type = random.choices(
            [
                fuzz_open_tag,
                fuzz_close_tag,
                fuzz_comment,
                fuzz_text,
                fuzz_raw_text,
                fuzz_pre,
                fuzz_nested_structure,
                fuzz_inline_punctuation,
            ],
            weights=[15, 10, 5, 20, 5, 5, 15, 10],
        )[0]
        parts.append(element_type())

    return "".join(parts)


def run_fuzzer(num_tests, seed=None, fragment=False, verbose=False, save_failures=False):
    """Format random documents, collecting crashes, hangs and unstable outputs."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    hangs = []
    unstable = []
    successes = 0

    print(f"Fuzzing formatter with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            once = format_html(html, fragment=fragment)
            elapsed = time.perf_counter() - start

            if elapsed > 5.0:
                hangs.append({"test_num": i, "html": html, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            else:
                successes += 1

            # Style/script bodies keep their own indentation, so only a
            # difference is recorded here, not a failure.
            if format_html(once, fragment=fragment) != once:
                unstable.append({"test_num": i, "html": html})

        except Exception as e:
            crashes.append({
                "test_num": i,
                "html": html,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print("FUZZING RESULTS")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Not idempotent: {len(unstable)}")
    print(f"Total time:     {elapsed_total:.2f}s")

    if crashes:
        print(f"\n{'=' * 60}")
        print("CRASH DETAILS:")
        print(f"{'=' * 60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  HTML: {crash['html'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if verbose and unstable:
        print(f"\n{'=' * 60}")
        print("NON-IDEMPOTENT INPUTS:")
        print(f"{'=' * 60}")
        for case in unstable[:5]:
            print(f"\nTest #{case['test_num']}: {case['html'][:200]!r}")

    if save_failures and (crashes or hangs):
        filename = f"fuzz_failures_{int(time.time())}.txt"
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return len(crashes) == 0 and len(hangs) == 0


def main():
    parser = argparse.ArgumentParser(description="Fuzz the HTML formatter with malformed input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--fragment",
        action="store_true",
        help="Format inputs as fragments instead of documents",
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
        help="Just print N sample fuzzed HTML documents (no formatting)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        fragment=args.fragment,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
