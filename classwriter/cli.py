import argparse
import json
import logging
import sys
from pathlib import Path

from .config import WriterConfig
from .errors import CollectingErrorSink
from .processors import generate
from .types import mk_statements


def _load_statements(path: str) -> list:
    if path == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if isinstance(data, dict):
        data = data.get("content", [])
    return mk_statements(data)


def cmd_render(args: argparse.Namespace) -> int:
    statements = _load_statements(args.file)
    indent_unit = None if args.no_indent else " " * args.indent
    sink = CollectingErrorSink()
    out, text = generate(statements, args.classpath, sink, config=WriterConfig(indent_unit=indent_unit))
    for msg in sink.messages:
        print(msg.describe(), file=sys.stderr)
    if out.errors:
        print(f"{args.classpath}: generation failed", file=sys.stderr)
        return 1
    print(text, end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("classwriter")
    p.add_argument("-v", "--verbose", action="store_true", help="Log writer activity to stderr")
    sub = p.add_subparsers(required=True)

    s = sub.add_parser("render", help="Render a JSON statement list into a class definition")
    s.add_argument("file", help="JSON file with a list of statements (or a root object with `content`); - for stdin")
    s.add_argument("--classpath", required=True, help="Classpath of the generated class (e.g. app.tpl.Main)")
    s.add_argument("--indent", type=int, default=1, help="Spaces per indentation level")
    s.add_argument("--no-indent", action="store_true", help="Disable indentation")
    s.set_defaults(func=cmd_render)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
