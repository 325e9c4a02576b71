#!/usr/bin/env python3
"""
Director OS — weekly report from the command line.

Signs in through the client data layer (falling back to the local store when
the API is unreachable), prints the cockpit summary for the chosen range and
the AI executive summary.

Usage:
    python scripts/weekly_report.py                      # director, this year
    python scripts/weekly_report.py --user pm --range ALL
    python scripts/weekly_report.py --range CUSTOM --start 2023-10-01 --end 2023-10-31
    python scripts/weekly_report.py --no-ai              # skip the LLM call
    python scripts/weekly_report.py --unmask             # show project names locally
"""

import argparse
import sys

sys.path.insert(0, ".")

from director_os.ai.report import generate_weekly_report, unmask_report
from director_os.client import build_client_context
from director_os.middleware.logging_config import configure_client_logging
from director_os.services.analytics import cockpit_summary, pm_scorecard
from director_os.services.date_range import DATE_RANGE_OPTIONS, filter_metrics, resolve_date_range


def _print_summary(summary, cards):
    rng = summary["dateRange"]
    print(f"\n=== Cockpit: {rng['label']} ({rng['startDate']} .. {rng['endDate']}) ===")
    print(f"Total revenue:   {summary['totalRevenue']:,.0f}")
    print(f"Total headcount: {summary['totalHeadcount']:,}")
    print(f"Metric rows:     {summary['metricCount']}")
    print(f"Red projects:    {len(summary['redProjects'])}")
    for row in summary["redProjects"]:
        status = row["status"]
        reasons = [name for name, hit in (
            ("revenue", status["isRevenueRisk"]),
            ("sla", status["isSlaMiss"]),
            ("turnover", status["isTurnoverRisk"]),
            ("manual flag", row["metric"].get("riskFlag")),
        ) if hit]
        print(f"  - {row['project']['projectCode']} @ {row['metric']['reportWeek']}: {', '.join(reasons)}")
    print("Kanban:          " + ", ".join(f"{k}={v}" for k, v in summary["taskStages"].items()))

    print("\n=== PM scorecard ===")
    for card in cards:
        print(
            f"  {card['pm']['name']}: projects={card['totalProjects']} "
            f"flags={card['riskCount']} avgSla={card['avgSla'] * 100:.1f}%"
        )


def main():
    parser = argparse.ArgumentParser(description="Print the Director OS weekly report")
    parser.add_argument("--user", default="director", help="Username to sign in as")
    parser.add_argument("--range", default="YEAR", choices=DATE_RANGE_OPTIONS)
    parser.add_argument("--start", help="CUSTOM range start (YYYY-MM-DD)")
    parser.add_argument("--end", help="CUSTOM range end (YYYY-MM-DD)")
    parser.add_argument("--no-ai", action="store_true", help="Skip the executive summary")
    parser.add_argument("--unmask", action="store_true", help="Show project names in the summary")
    args = parser.parse_args()

    configure_client_logging()
    ctx = build_client_context()

    user = ctx.session.login(args.user)
    if user is None:
        print(f"Unknown user: {args.user}", file=sys.stderr)
        return 1
    mode = "offline (local store)" if ctx.session.is_offline_mode else "online"
    print(f"Signed in as {user['name']} [{user['role']}] — {mode}")

    bundle = ctx.data.get_dashboard()
    date_range = resolve_date_range(args.range, custom_start=args.start, custom_end=args.end)
    summary = cockpit_summary(
        bundle["projects"], bundle["metrics"], bundle["tasks"], bundle["config"], date_range,
    )
    cards = pm_scorecard(bundle["pms"], bundle["projects"], bundle["metrics"], date_range)
    _print_summary(summary, cards)

    if not args.no_ai:
        report = generate_weekly_report(
            bundle["projects"],
            filter_metrics(bundle["metrics"], date_range),
            api_key=ctx.settings.gemini_api_key,
        )
        if args.unmask:
            report = unmask_report(report, bundle["projects"])
        print("\n=== Executive summary ===\n")
        print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
