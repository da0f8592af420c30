"""CLI entry point: python -m pagemeta [FILE] --url URL [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from pagemeta.config import Configuration
from pagemeta.extractors.urlnorm import MalformedURLError
from pagemeta.query import extract

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagemeta",
        description=(
            "Extract canonical page metadata (title, description, keywords,\n"
            "canonical link, language, OpenGraph) from an HTML document."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", default="-", metavar="FILE",
                        help="HTML file to read (default: stdin)")
    parser.add_argument("--url", default="", metavar="URL",
                        help="URL the document was fetched from")
    parser.add_argument("--language", default=None, metavar="CODE",
                        help="Default two-letter language when the page declares none "
                             "(default: $PAGEMETA_LANGUAGE or 'en')")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Print the result as JSON instead of a table")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _setup_logging(level: str) -> None:
    from rich.logging import RichHandler

    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("pagemeta")
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False


def _read_input(file: str) -> str:
    if file == "-":
        return sys.stdin.read()
    return Path(file).read_text(encoding="utf-8", errors="replace")


def _print_table(data: dict) -> None:
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    tbl = Table(title="Page metadata", show_header=True, header_style="bold cyan")
    tbl.add_column("Field", style="bold")
    tbl.add_column("Value", overflow="fold")
    for key, value in data.items():
        if key == "open_graph":
            continue
        tbl.add_row(key, escape(str(value)) if value else "[dim]-[/dim]")

    og = data.get("open_graph") or {}
    og_tbl = Table(title="OpenGraph", show_header=True, header_style="bold cyan")
    og_tbl.add_column("Property", style="bold")
    og_tbl.add_column("Content", overflow="fold")
    for prop, content in og.items():
        og_tbl.add_row(escape(prop), escape(content))

    console = Console()
    console.print(tbl)
    if og:
        console.print(og_tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level)

    try:
        config = Configuration.from_env()
        if args.language:
            config.set("language", args.language)
    except ValidationError as exc:
        print(f"ERROR: invalid language: {exc.errors()[0]['msg']}", file=sys.stderr)
        return 1

    try:
        html = _read_input(args.file)
    except OSError as exc:
        print(f"ERROR: could not read {args.file}: {exc}", file=sys.stderr)
        return 1

    try:
        article = extract(html, url=args.url, config=config)
    except MalformedURLError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    data = article.model_dump()
    if args.json:
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        _print_table(data)
    return 0


if __name__ == "__main__":
    sys.exit(main())
