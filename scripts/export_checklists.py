#!/usr/bin/env python3
"""
Export one month of checklists to a file.

Writes the same CSV or JSON the /api/export/checklists endpoint returns,
reading directly from the configured database.

Usage:
    python scripts/export_checklists.py --year 2025 --month 6 [--vehicle PZ333M]
        [--format csv|json] [--output PATH]
"""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session

from app.checklist.export import export_checklists, export_filename, parse_export_params
from app.core.database import create_db_and_tables, engine
from app.core.errors import InvalidParameters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export a month of vehicle checklists")
    parser.add_argument("--year", required=True, help="Four digit year")
    parser.add_argument("--month", required=True, help="Month number, 1-12")
    parser.add_argument("--vehicle", help="Only export this vehicle number")
    parser.add_argument("--format", default="csv", choices=["csv", "json"])
    parser.add_argument("--output", help="Output path (default: generated filename)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        params = parse_export_params(args.year, args.month, args.format, args.vehicle)
    except InvalidParameters as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    create_db_and_tables()
    with Session(engine) as session:
        result = export_checklists(session, params)

    if params.format == "json":
        output = Path(args.output or export_filename(params).replace(".csv", ".json"))
        output.write_text(json.dumps(result, indent=2))
        count = len(result)
    else:
        output = Path(args.output or result.filename)
        output.write_text(result.content)
        count = result.rows

    print(f"Exported {count} checklists to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
