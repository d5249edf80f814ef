#!/usr/bin/env python3
"""
Data Engine CLI — terminal viewer, statistics, Excel export, and API server.

USAGE:
  python -m dataengine.cli page data.csv                      # First 100 rows as a table
  python -m dataengine.cli page data.csv --start 200 --limit 50

  python -m dataengine.cli summary data.csv                   # Per-column statistics

  python -m dataengine.cli export data.csv                    # Excel workbook to exports/
  python -m dataengine.cli export data.csv --output ./report.xlsx

  python -m dataengine.cli serve                              # Start API server
  python -m dataengine.cli serve --port 8080 --csv data.csv   # Start with a dataset preloaded
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dataengine.analytics.pagination import page
from dataengine.analytics.summary import summarize
from dataengine.config import EXPORT_FOLDER, HOST, PORT, PRELOAD_CSV
from dataengine.data.errors import LoadError
from dataengine.data.loader import load_csv_path
from dataengine.data.schemas import Cell, Dataset

MAX_CELL_WIDTH = 24


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  DATA ENGINE — {title}")
    print("=" * 70)


def _load(path: str) -> Dataset:
    """Load a CSV or exit with status 1."""
    try:
        return load_csv_path(path)
    except LoadError as exc:
        print(f"  Failed to load {path}: {exc.message} ({exc.kind})", file=sys.stderr)
        sys.exit(1)


def _fmt_cell(value: Cell) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:g}"
    text = value.replace("\n", " ")
    if len(text) > MAX_CELL_WIDTH:
        return text[:MAX_CELL_WIDTH - 1] + "…"
    return text


def _fmt_stat(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:,.4g}"
    return str(value)


def render_table(headers: list[str], rows: list[list[str]]) -> str:
    """Plain-text table with a header rule, columns padded to their widest cell."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells):
        return "  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    out = [line(headers), line(["-" * w for w in widths])]
    out.extend(line(r) for r in rows)
    return "\n".join(out)


def cmd_page(args):
    """Show one page of rows."""
    dataset = _load(args.csv)
    result = page(dataset, args.start, args.limit)

    _banner("DATA")
    print(f"\n{dataset.source}: {result.total:,} rows, {len(result.columns)} columns\n")
    if not result.rows:
        print(f"  No data in specified range (start={result.start}, total={result.total})")
        return

    headers = ["#"] + [_fmt_cell(c) for c in result.columns]
    rows = [
        [str(result.start + i)] + [_fmt_cell(v) for v in row]
        for i, row in enumerate(result.rows)
    ]
    print(render_table(headers, rows))
    last = result.start + len(result.rows) - 1
    print(f"\nRows {result.start:,}–{last:,} of {result.total:,}")


def cmd_summary(args):
    """Print per-column statistics."""
    dataset = _load(args.csv)
    summaries = [s.to_dict() for s in summarize(dataset)]

    _banner("COLUMN SUMMARY")
    print(f"\n{dataset.source}: {dataset.row_count:,} rows, {len(dataset.columns)} columns\n")

    numeric = [s for s in summaries if s["type"] == "numeric"]
    categorical = [s for s in summaries if s["type"] == "categorical"]

    if numeric:
        keys = ["name", "count", "null_count", "min", "max", "mean", "stddev", "median"]
        print(f"NUMERIC ({len(numeric)}):\n")
        print(render_table(keys, [[_fmt_stat(s[k]) for k in keys] for s in numeric]))
        print()
    if categorical:
        keys = ["name", "count", "null_count", "distinct_count", "top", "top_count"]
        print(f"CATEGORICAL ({len(categorical)}):\n")
        print(render_table(keys, [[_fmt_stat(s[k]) for k in keys] for s in categorical]))
        print()


def cmd_export(args):
    """Write the Excel workbook."""
    from dataengine.excel.export import export_workbook

    dataset = _load(args.csv)
    output = Path(args.output) if args.output else EXPORT_FOLDER / f"{Path(args.csv).stem}_summary.xlsx"
    saved = export_workbook(dataset, output, args.start, args.limit)
    print(f"  Saved {saved}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn

    from dataengine.main import create_app

    print(f"\nStarting Data Engine API on {args.host}:{args.port}...")
    uvicorn.run(create_app(preload=args.csv), host=args.host, port=args.port, timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dataengine",
        description="Data Engine — in-memory CSV rows and statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # page subcommand
    page_parser = subparsers.add_parser("page", help="Show a page of rows")
    page_parser.add_argument("csv", help="CSV file")
    page_parser.add_argument("--start", default=None, help="First row (default 0)")
    page_parser.add_argument("--limit", default=None, help="Rows to show (default 100, max 1000)")
    page_parser.set_defaults(func=cmd_page)

    # summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Per-column statistics")
    summary_parser.add_argument("csv", help="CSV file")
    summary_parser.set_defaults(func=cmd_summary)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export summary + rows to Excel")
    export_parser.add_argument("csv", help="CSV file")
    export_parser.add_argument("--output", help=f"Output .xlsx (default: {EXPORT_FOLDER}/<name>_summary.xlsx)")
    export_parser.add_argument("--start", default=None, help="First exported row (default 0)")
    export_parser.add_argument("--limit", default=None, help="Rows to export (default 100, max 1000)")
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default=HOST, help=f"Bind address (default {HOST})")
    serve_parser.add_argument("--port", type=int, default=PORT, help=f"Port (default {PORT})")
    serve_parser.add_argument("--csv", default=PRELOAD_CSV, help="CSV to load at startup")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
