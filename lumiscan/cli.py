"""Command-line front end for a persistent review session.

Usage:
  lumiscan sample
  lumiscan extract --file paper.pdf
  lumiscan list --section Characterization --search nm
  lumiscan edit <row-id> confidence 0.95
  lumiscan delete <row-id>
  lumiscan export csv --out exports/
"""

import argparse
import asyncio
import math
import sys
from pathlib import Path
from typing import Sequence, TextIO

from lumiscan.config import load_config
from lumiscan.export import ExportFormat
from lumiscan.extraction import DocumentReference
from lumiscan.logging import set_level
from lumiscan.row import EDITABLE_FIELDS, DataRow
from lumiscan.serialization import format_confidence, to_json
from lumiscan.session import ReviewSession
from lumiscan.view import ALL_SECTIONS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lumiscan",
        description="Review, edit and export extracted document facts.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to lumiscan.toml")
    parser.add_argument("--storage", type=Path, default=None, help="Snapshot file (overrides config)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("sample", help="Replace the table with the built-in sample data")

    extract = sub.add_parser("extract", help="Extract facts from a document and append them")
    extract.add_argument("--file", dest="file_name", default=None, help="Uploaded PDF file name")
    extract.add_argument("--url", default=None, help="Article URL")
    extract.add_argument("--delay", type=float, default=None, help="Simulated extraction delay in seconds")

    list_cmd = sub.add_parser("list", help="Show rows, optionally filtered")
    list_cmd.add_argument("--section", default=ALL_SECTIONS, help="Exact section name, or 'All'")
    list_cmd.add_argument("--search", default="", help="Case-insensitive text search")
    list_cmd.add_argument("--json", action="store_true", help="Print the matching rows as JSON")

    sub.add_parser("sections", help="List distinct sections")

    edit = sub.add_parser("edit", help="Change one field of a row")
    edit.add_argument("row_id")
    edit.add_argument("field", choices=EDITABLE_FIELDS)
    edit.add_argument("value")

    delete = sub.add_parser("delete", help="Delete a row")
    delete.add_argument("row_id")

    export = sub.add_parser("export", help="Export all rows")
    export.add_argument("format", choices=[f.value for f in ExportFormat])
    export.add_argument("--out", type=Path, default=None, help="Output directory (overrides config)")

    sub.add_parser("clear", help="Remove every row")
    return parser


def confidence_percent(confidence: float) -> str:
    """Badge text: confidence as a whole percentage, halves rounded up."""
    return f"{math.floor(confidence * 100 + 0.5)}%"


def format_row(row: DataRow) -> str:
    return "\t".join(
        [
            row.id,
            row.section,
            row.key,
            row.value,
            format_confidence(row.confidence),
            row.source_span if row.source_span is not None else "-",
            row.band.value,
            confidence_percent(row.confidence),
        ]
    )


def run(args: argparse.Namespace, session: ReviewSession, out: TextIO) -> None:
    if args.command == "sample":
        session.load_sample()
    elif args.command == "extract":
        if args.delay is not None and hasattr(session.extractor, "delay"):
            session.extractor.delay = args.delay
        try:
            source = DocumentReference(file_name=args.file_name, url=args.url)
        except ValueError:
            session.notify("Missing Document", "Pass --file or --url to extract from.")
            return
        asyncio.run(session.extract(source))
    elif args.command == "list":
        session.set_section_filter(args.section)
        session.set_search(args.search)
        rows = session.visible_rows()
        if args.json:
            print(to_json(rows), file=out)
        else:
            for row in rows:
                print(format_row(row), file=out)
    elif args.command == "sections":
        for section in session.sections():
            print(section, file=out)
    elif args.command == "edit":
        session.edit_field(args.row_id, args.field, args.value)
    elif args.command == "delete":
        session.delete(args.row_id)
    elif args.command == "export":
        if args.out is not None:
            session.export_dir = args.out
        path = session.export(args.format)
        if path is not None:
            print(path, file=out)
    elif args.command == "clear":
        session.clear()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    if args.storage is not None:
        config = config.model_copy(update={"storage_path": args.storage})
    set_level(args.log_level or config.log_level)

    session = ReviewSession.from_config(config)
    run(args, session, sys.stdout)

    for notice in session.notices:
        print(f"{notice.title}: {notice.description}", file=sys.stderr)
    last = session.last_notice
    return 1 if last is not None and last.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
