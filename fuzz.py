#!/usr/bin/env python3
"""
Random fuzzer for the softhtml parser and serializer.
Generates invalid/malformed HTML and checks that:

- parsing never raises
- compact output is stable: parsing it again and rendering gives the same string
- pretty output keeps every non-whitespace character of the text content
"""

import argparse
import random
import string
import sys
import time
import traceback

# Fuzzing strategies
TAGS = [
    "div", "span", "p", "a", "img", "table", "tr", "td", "th", "ul", "ol", "li",
    "form", "input", "button", "select", "option", "textarea", "script", "style",
    "head", "body", "html", "title", "meta", "link", "br", "hr", "h1", "h2", "h3",
    "iframe", "embed", "video", "audio", "source", "canvas", "svg", "math",
    "template", "noscript", "pre", "code", "blockquote", "article", "section",
    "header", "footer", "nav", "aside", "main", "figure", "figcaption", "details",
    "summary", "dialog", "my-widget", "x-card",
]

RAW_TEXT_TAGS = ["script", "style"]
VOID_TAGS = ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"]
INLINE_TAGS = ["a", "b", "code", "em", "i", "s", "small", "span", "strong", "u"]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "alt", "title", "name", "value", "type",
    "onclick", "data-x", "aria-label", "role", "tabindex", "disabled", "hidden",
]

SPECIAL_CHARS = [
    "\x00", "\x01", "\x0b", "\x0c", "\x7f",  # Control chars
    "\ufffd",  # Replacement character
    "\u00a0",  # Non-breaking space
    "\u2028", "\u2029",  # Line/paragraph separators
    "\u200b", "\u200d",  # Zero-width chars
    "\ufeff",  # BOM
]

ENTITIES = [
    "&amp;", "&lt;", "&gt;", "&quot;", "&apos;", "&nbsp;",
    "&", "&amp", "&ampamp;", "&am", "&#", "&#x", "&#123", "&#x1f;",
    "&#xdeadbeef;", "&#99999999;", "&#-1;", "&#x;", "&unknown;",
    "&AMP;", "&AMP", "&LT", "&GT",
    "&#0;", "&#x0;", "&#x0D;", "&#13;",  # Null and CR
    "&#xD800;", "&#xDFFF;",  # Surrogate range
    "&#x10FFFF;", "&#x110000;",  # Max and over max codepoint
    "&NotExists;", "&notin;", "&notinva;",
    "&CounterClockwiseContourIntegral;",  # Long entity name
]

WHITESPACE = [" ", "  ", "\t", "\n", "\n\t", "\n\t\t", "\r\n", ""]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    return "".join(random.choices(WHITESPACE, k=random.randint(0, 3)))


def fuzz_tag_name():
    """Generate malformed tag names."""
    strategies = [
        lambda: random.choice(TAGS),  # Valid tag
        lambda: random.choice(TAGS).upper(),  # Uppercase
        lambda: random.choice(TAGS) + random_string(1, 5),  # Tag with suffix
        lambda: random_string(1, 10),  # Random string
        lambda: "",  # Empty
        lambda: random.choice(SPECIAL_CHARS) + random.choice(TAGS),  # Special prefix
        lambda: random.choice(TAGS) + random.choice(SPECIAL_CHARS),  # Special suffix
        lambda: "-" + random.choice(TAGS),  # Dash prefix
        lambda: random.choice(TAGS) + "/" + random.choice(TAGS),  # Slash in name
        lambda: " " + random.choice(TAGS),  # Space prefix
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    """Generate malformed attributes."""
    name_strategies = [
        lambda: random.choice(ATTRIBUTES),
        lambda: random_string(1, 15),
        lambda: "",
        lambda: random.choice(SPECIAL_CHARS),
        lambda: "=",
        lambda: '"',
        lambda: "'",
        lambda: "<",
        lambda: ">",
    ]

    value_strategies = [
        lambda: random_string(0, 50),
        lambda: '"' + random_string() + '"',  # Extra quotes
        lambda: "'" + random_string() + "'",
        lambda: random.choice(ENTITIES),
        lambda: "<script>alert(1)</script>",
        lambda: "color: red; /* note */ margin:0",
        lambda: " a  b  a ",
        lambda: random.choice(SPECIAL_CHARS) * random.randint(1, 10),
        lambda: "\n" * random.randint(1, 5) + random_string(),
        lambda: "",
    ]

    quote_styles = [
        ('="', '"'),
        ("='", "'"),
        ("=", ""),  # Unquoted
        (" = ", ""),  # Spaces around equals
        ("", ""),  # No value
        ('="', ""),  # Unclosed quote
        ("='", ""),  # Unclosed single quote
        ("==", ""),  # Double equals
    ]

    name = random.choice(name_strategies)()
    value = random.choice(value_strategies)()
    quote_start, quote_end = random.choice(quote_styles)

    return f"{name}{quote_start}{value}{quote_end}"


def fuzz_open_tag():
    """Generate malformed opening tags."""
    tag = fuzz_tag_name()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 5)))
    closings = [">", "/>", " >", "/ >", "", ">>", "/>>", ">/"]
    closing = random.choice(closings)
    opening = random.choice(["<", "< ", "<<", "<!", "<?", "</"]) if random.random() < 0.2 else "<"
    return f"{opening}{tag}{random_whitespace()}{attrs}{random_whitespace()}{closing}"


def fuzz_close_tag():
    """Generate malformed closing tags."""
    tag = fuzz_tag_name()
    variants = [
        f"</{tag}>",
        f"</ {tag}>",
        f"</{tag} >",
        f"</{tag.upper()}>",
        f"</{tag}",  # Unclosed
        f"</{tag}/>",  # Self-closing end tag
        f"<//{tag}>",  # Double slash
        f"</{tag} garbage>",  # Extra content
        f"</{tag} ",
    ]
    return random.choice(variants)


def fuzz_comment():
    """Generate malformed comments."""
    content = random_string(0, 50)
    variants = [
        f"<!--{content}-->",
        f"<!-- {content} -->",
        f"<!-{content}-->",
        f"<!--{content}->",
        f"<!--{content}",
        f"<!--{content}--!>",
        "<!---->",
        "<!-->",
        f"<!--<div>{content}</div>-->",
        f"<!--{content}--{content}-->",
    ]
    return random.choice(variants)


def fuzz_doctype():
    return random.choice(["<!DOCTYPE html>", "<!doctype html>", "<!DOCTYPE>", "<!DOCTYPE html", "<!DOCTYPEhtml>"])


def fuzz_text():
    """Generate text with entities, stray markup characters and whitespace runs."""
    parts = []
    for _ in range(random.randint(1, 8)):
        parts.append(
            random.choice(
                [
                    random_string(1, 30),
                    random.choice(ENTITIES),
                    random.choice(SPECIAL_CHARS),
                    random_whitespace(),
                    "<",
                    ">",
                    "a < b",
                    "\U0001f98a",
                ],
            ),
        )
    return "".join(parts)


def fuzz_raw_text():
    """Generate script/style content that looks like markup."""
    tag = random.choice(RAW_TEXT_TAGS)
    content = random.choice(
        [
            "if (a < b && c > d) {}",
            "x = '</div>';",
            f"document.write('<{tag}>');",
            f"// </{tag}",
            "a::after { content: '&amp;'; }",
            "<!-- not a comment -->",
            random_string(0, 40),
        ],
    )
    end = random.choice([f"</{tag}>", f"</{tag.upper()}>", f"</ {tag} >", ""])
    return f"<{tag}>{content}{end}"


def fuzz_nested_structure(depth=0, max_depth=6):
    """Generate nested elements with boundary whitespace, sometimes left unclosed."""
    if depth >= max_depth or random.random() < 0.3:
        return fuzz_text()

    tag = random.choice(TAGS + INLINE_TAGS)
    if tag in VOID_TAGS:
        return f"<{tag}>"

    children = [
        random_whitespace() + fuzz_nested_structure(depth + 1, max_depth) + random_whitespace()
        for _ in range(random.randint(0, 4))
    ]
    close = f"</{tag}>" if random.random() < 0.85 else ""
    return f"<{tag}>{''.join(children)}{close}"


def fuzz_deeply_nested():
    depth = random.randint(20, 150)
    tag = random.choice(["div", "span", "b", "x-node"])
    return f"<{tag}>" * depth + random_string() + f"</{tag}>" * random.randint(0, depth)


def fuzz_many_attributes():
    count = random.randint(20, 200)
    attrs = " ".join(f"{random.choice(ATTRIBUTES)}{i}='{random_string(0, 10)}'" for i in range(count))
    return f"<div {attrs}>x</div>"


def fuzz_pre():
    return f"<pre>{random_whitespace()}{fuzz_text()}{random_whitespace()}</pre>"


def generate_fuzzed_html():
    """Generate a complete fuzzed HTML document."""
    parts = []

    if random.random() < 0.3:
        parts.append(fuzz_doctype())

    num_elements = random.randint(1, 20)
    for _ in range(num_elements):
        element_type = random.choices(
            [
                fuzz_open_tag,
                fuzz_close_tag,
                fuzz_comment,
                fuzz_text,
                fuzz_raw_text,
                fuzz_nested_structure,
                fuzz_deeply_nested,
                fuzz_many_attributes,
                fuzz_pre,
            ],
            weights=[20, 10, 8, 15, 6, 15, 1, 1, 3],
        )[0]
        parts.append(element_type())

    return "".join(parts)


def _visible(text):
    return "".join(text.split())


def check_document(html):
    """Parse and render one document. Returns a failure description, or None."""
    from softhtml import SoftHTML
    from softhtml.serialize import COMPACT

    doc = SoftHTML(html)

    compact = doc.render(COMPACT)
    again = SoftHTML(compact).render(COMPACT)
    if again != compact:
        return f"compact output is not stable:\n  first:  {compact[:200]!r}\n  second: {again[:200]!r}"

    pretty = doc.render()
    if _visible(SoftHTML(pretty).to_text()) != _visible(doc.to_text()):
        return f"pretty output changed the text:\n  {pretty[:200]!r}"
    if SoftHTML(pretty).render() != pretty:
        return f"pretty output is not stable:\n  {pretty[:200]!r}"
    return None


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    mismatches = []
    hangs = []
    successes = 0

    print(f"Fuzzing softhtml with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            failure = check_document(html)
            elapsed = time.perf_counter() - start
        except Exception as e:
            crashes.append({
                "test_num": i,
                "html": html,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if failure is not None:
            mismatches.append({"test_num": i, "html": html, "error": failure})
            if verbose:
                print(f"  MISMATCH: Test {i}")
        elif elapsed > 5.0:
            hangs.append({"test_num": i, "html": html, "time": elapsed})
            if verbose:
                print(f"  HANG: Test {i} took {elapsed:.2f}s")
        else:
            successes += 1

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS: softhtml")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Mismatches:     {len(mismatches)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    for title, failures in (("CRASH DETAILS", crashes), ("MISMATCH DETAILS", mismatches)):
        if not failures:
            continue
        print(f"\n{'='*60}")
        print(f"{title}:")
        print(f"{'='*60}")
        for failure in failures[:10]:  # Show first 10
            print(f"\nTest #{failure['test_num']}:")
            print(f"  HTML: {failure['html'][:200]!r}...")
            print(f"  Error: {failure['error']}")
        if len(failures) > 10:
            print(f"\n... and {len(failures) - 10} more")

    if hangs:
        print(f"\n{'='*60}")
        print("HANG DETAILS:")
        print(f"{'='*60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  HTML: {hang['html'][:200]!r}...")

    failed = crashes or mismatches or hangs
    if save_failures and failed:
        filename = f"fuzz_failures_softhtml_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write("Fuzzing results for softhtml\n")
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for mismatch in mismatches:
                f.write(f"=== MISMATCH #{mismatch['test_num']} ===\n")
                f.write(f"HTML:\n{mismatch['html']}\n")
                f.write(f"Error: {mismatch['error']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return not failed


def main():
    parser = argparse.ArgumentParser(description="Fuzz the softhtml parser with invalid input")
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
        help="Just print N sample fuzzed HTML documents (no parsing)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
