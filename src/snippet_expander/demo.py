# src/snippet_expander/demo.py
import argparse
import json
import logging
import sys

from .expansion.general.types import RecordFormatError, ShortcutRecord
from .expansion.general.utils.log import debug as debug_line


def load_shortcuts(path):
    """Read records from a JSON list or the stored {"shortcuts": [...]} shape."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("shortcuts", [])
    if not isinstance(data, list):
        raise RecordFormatError(f"{path}: expected a list of shortcuts")
    records = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise RecordFormatError(f"{path}: shortcut #{i} is {type(item).__name__}, expected an object")
        records.append(ShortcutRecord.from_dict(item))
    return records


def _cmd_expand(args, records):
    from .expansion.general.fuzzy.suggest import suggest_alias
    from .expansion.orchestrator import build_alias_map, expand_text

    alias_map = build_alias_map(records)
    text = " ".join(args.text)
    result = expand_text(text, alias_map, debug=args.debug)
    if args.debug:
        debug_line("expanded=%s unknown=%s", result.expanded, result.unknown, topic="cli")

    for token in result.unknown:
        hint = suggest_alias(token, alias_map, debug=args.debug)
        msg = f"unknown alias !{token}"
        if hint:
            msg += f" (did you mean !{hint}?)"
        print(msg, file=sys.stderr)

    print(result.text)
    return 0


def _cmd_search(args, records):
    from .expansion.orchestrator import search_shortcuts

    results = search_shortcuts(records, " ".join(args.query), limit=args.limit, debug=args.debug)
    if args.debug:
        debug_line("%d result(s)", len(results), topic="cli")
    for item in results:
        flag = "" if item.record.enabled else "  (disabled)"
        if args.scores:
            print(f"{item.score:8.1f}  !{item.record.alias}{flag}")
        else:
            print(f"!{item.record.alias}{flag}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="snippet-demo",
        description="Expand !alias tokens in text, or fuzzy-search a shortcut collection.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")
    parser.add_argument(
        "--shortcuts",
        required=True,
        metavar="FILE",
        help="JSON file with a list of shortcuts (alias, text, enabled, ...)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_expand = sub.add_parser("expand", help="Expand !alias tokens in TEXT")
    p_expand.add_argument("text", nargs="+", help="Text to expand (e.g. 'hello !intro')")
    p_expand.set_defaults(func=_cmd_expand)

    p_search = sub.add_parser("search", help="Rank shortcuts against QUERY")
    p_search.add_argument("query", nargs="*", help="Search query (blank lists everything)")
    p_search.add_argument("--limit", type=int, default=None, help="Max results to print")
    p_search.add_argument("--scores", action="store_true", help="Print scores")
    p_search.set_defaults(func=_cmd_search)
    return parser


def main(argv=None):
    """CLI demo: expand aliases in text or search shortcuts from a JSON file."""
    args = build_parser().parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        records = load_shortcuts(args.shortcuts)
    except (OSError, json.JSONDecodeError, RecordFormatError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return args.func(args, records)


if __name__ == "__main__":
    sys.exit(main())
