"""Print frontmatter fields of a note file.

Usage: chaos-frontmatter <file> [field|--json]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from chaos_api.domain.frontmatter import extract_field, fields_as_json, format_metadata_lines, parse_frontmatter

JSON_FLAG = "--json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chaos-frontmatter",
        description="Print frontmatter fields of a note file.",
        epilog="field: id, title, status, tags, body; --json: all frontmatter plus body as JSON",
    )
    parser.add_argument("file", help="note file to read")
    parser.add_argument("field", nargs="?", help="field to print, or --json")
    return parser


def _split_args(argv: Sequence[str]) -> tuple[list[str], bool]:
    # --json is a positional choice in the field slot, not a free-standing option.
    args = list(argv)
    as_json = JSON_FLAG in args[1:2]
    if as_json:
        args.pop(1)
    return args, as_json


def render(text: str, field: Optional[str], as_json: bool) -> list[str]:
    parsed = parse_frontmatter(text)
    if as_json:
        return [json.dumps(fields_as_json(parsed), ensure_ascii=False)]
    if field:
        value = extract_field(parsed, field)
        return [] if value is None else [value]
    return format_metadata_lines(parsed)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args, as_json = _split_args(sys.argv[1:] if argv is None else argv)
    ns = build_parser().parse_args(args)

    try:
        text = Path(ns.file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in render(text, ns.field, as_json):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
