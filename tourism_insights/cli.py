#!/usr/bin/env python3
"""
Tourism Insights CLI — summaries, exports and the API server.

USAGE:
  python -m tourism_insights.cli summary                        # Print age-group tables
  python -m tourism_insights.cli summary --csv survey.csv       # Use a specific file
  python -m tourism_insights.cli summary --age-group 18-30      # One age group only

  python -m tourism_insights.cli export                         # Write dashboard JSON
  python -m tourism_insights.cli export --output ./dist/dashboard.json

  python -m tourism_insights.cli excel                          # Excel report in REPORTS_FOLDER

  python -m tourism_insights.cli serve                          # Start API server
  python -m tourism_insights.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path

from tourism_insights.config import COHORTS, REPORTS_FOLDER, CURRENCY
from tourism_insights.analytics.common import sanitize_for_json
from tourism_insights.data.schemas import CategoryKind
from tourism_insights.data.store import SurveyStore


def _load(args) -> SurveyStore:
    """Load the store from --csv or the inbox; exit non-zero on failure."""
    csv = getattr(args, "csv", None)
    store = SurveyStore().load(Path(csv) if csv else None)
    if not store.is_loaded:
        print(f"\n  ERROR: {store.error}\n", file=sys.stderr)
        sys.exit(1)
    return store


def cmd_summary(args):
    """Print age-group counts, spending and profiles."""
    print("\n" + "=" * 70)
    print("  TOURISM INSIGHTS — SURVEY SUMMARY")
    print("=" * 70)

    store = _load(args)
    analysis = store.analysis
    selected = args.age_group

    spending = {r["name"]: r["avg_spending"] for r in analysis.spending}
    print(f"\nAGE GROUPS ({len(analysis.cohorts)}):\n")
    for r in analysis.age_groups:
        if selected and r["name"] != selected:
            continue
        print(f"  {r['name']:<8}{r['count']:>8,} visitors   {CURRENCY} {spending[r['name']]:>16,.2f}")

    for kind, title in [
        (CategoryKind.TRANSPORT, "TRANSPORT"),
        (CategoryKind.ACTIVITY, "ACTIVITIES"),
        (CategoryKind.PLACE, "PLACES"),
    ]:
        rows = analysis.filter_by_cohort(kind, selected)
        print(f"\n{title} ({len(rows)} rows):\n")
        for r in rows[:args.limit] if args.limit else rows:
            print(f"  {r['age_group']:<8}{r[kind.value][:45]:<47}{r['count']:>6,}")

    print("\nPROFILES:\n")
    for cohort, p in analysis.profile_records().items():
        if selected and cohort != selected:
            continue
        print(f"  [{cohort}]")
        print(f"      Transport: {p['top_transport']} ({p['top_transport_count']})")
        print(f"      Activity:  {p['top_activity']} ({p['top_activity_count']})")
        print(f"      Place:     {p['top_place']} ({p['top_place_count']})")
        print(f"      Spending:  {CURRENCY} {p['avg_spending']:,.2f}")
    print()


def cmd_export(args):
    """Write every dashboard table to one JSON file."""
    store = _load(args)
    out = Path(args.output) if args.output else REPORTS_FOLDER / "dashboard.json"
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        json.dump(sanitize_for_json(store.analysis.to_dict()), f, ensure_ascii=False, indent=2)
    print(f"\n  Dashboard data saved to: {out}\n")


def cmd_excel(args):
    """Generate the Excel survey report."""
    from tourism_insights.reports.survey_report import generate_excel

    store = _load(args)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    out = Path(args.output) if args.output else REPORTS_FOLDER / f"Survey_Report_{timestamp}.xlsx"
    generate_excel(store, out)
    print(f"\n  Report saved to: {out}\n")


def cmd_serve(args):
    """Start the FastAPI server."""
    import uvicorn
    print(f"\n  Starting Tourism Insights API on http://{args.host}:{args.port}\n")
    uvicorn.run("tourism_insights.main:app", host=args.host, port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tourism_insights",
        description="Tourist behaviour survey analytics",
    )
    sub = parser.add_subparsers(dest="command")

    p_summary = sub.add_parser("summary", help="Print age-group tables")
    p_summary.add_argument("--csv", help="Survey CSV (default: newest in inbox)")
    p_summary.add_argument("--age-group", choices=COHORTS, help="Only show this age group")
    p_summary.add_argument("--limit", type=int, default=0, help="Max rows per preference table")
    p_summary.set_defaults(func=cmd_summary)

    p_export = sub.add_parser("export", help="Write dashboard JSON")
    p_export.add_argument("--csv", help="Survey CSV (default: newest in inbox)")
    p_export.add_argument("--output", help="Output JSON path")
    p_export.set_defaults(func=cmd_export)

    p_excel = sub.add_parser("excel", help="Generate Excel report")
    p_excel.add_argument("--csv", help="Survey CSV (default: newest in inbox)")
    p_excel.add_argument("--output", help="Output .xlsx path")
    p_excel.set_defaults(func=cmd_excel)

    p_serve = sub.add_parser("serve", help="Start API server")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return
    args.func(args)


if __name__ == "__main__":
    main()
