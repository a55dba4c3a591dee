"""Command line front end: python -m htmlformat [FILE]."""

import argparse
import sys
from pathlib import Path

from justhtml import StrictModeError

from .formatter import format_html


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="htmlformat", description="Re-indent HTML into a canonical layout")
    parser.add_argument(
        "file",
        nargs="?",
        help="HTML file to format (default: stdin)",
    )
    parser.add_argument(
        "--output", "-o",
        help="Write the result here instead of stdout",
    )
    parser.add_argument(
        "--fragment", "-f",
        action="store_true",
        help="Parse the input as a fragment instead of a whole document",
    )
    parser.add_argument(
        "--context",
        default="div",
        help="Context element for fragment parsing (default: div)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first parse error",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace visited nodes on stderr",
    )
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    try:
        source = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"htmlformat: cannot read {args.file or '<stdin>'}: {e}", file=sys.stderr)
        return 1

    try:
        result = format_html(
            source,
            fragment=args.fragment,
            context=args.context,
            strict=args.strict,
            debug=args.debug,
        )
    except StrictModeError as e:
        print(f"htmlformat: parse error: {e}", file=sys.stderr)
        return 1

    # Only touch the output once formatting succeeded
    if not args.output:
        sys.stdout.write(result)
        return 0
    try:
        with open(args.output, "w", encoding="utf-8") as out:
            out.write(result)
    except OSError as e:
        print(f"htmlformat: cannot write {args.output}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
