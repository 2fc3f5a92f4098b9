#!/usr/bin/env python3
"""Command line entry point.

  hospital-dashboard serve [--host 0.0.0.0] [--port 4000]
  hospital-dashboard sales-report --staff-id admin001 [--department 01] [--doctor D001]
"""

import argparse
import logging
import sys

from hospital_dashboard.alignment import year_over_year_change
from hospital_dashboard.client import DashboardClient, SALES_REQUIRED_LEVEL
from hospital_dashboard.config import get_settings
from hospital_dashboard.exceptions import ReportingError


def _serve(args) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "hospital_dashboard.main:app",
        host=args.host,
        port=args.port or settings.port,
        log_level=settings.loglevel.lower(),
    )
    return 0


def _format_yen(value: float) -> str:
    return f"¥{value / 1000000:.1f}M"


def _sales_report(args) -> int:
    client = DashboardClient(url=args.url)
    if client.authenticate(args.staff_id) is None:
        print(f"Staff id {args.staff_id!r} not found", file=sys.stderr)
        return 2

    try:
        rows = client.sales_comparison(
            department_code=args.department,
            doctor_code=args.doctor,
            required_level=args.required_level,
        )
    except ReportingError as e:
        print(f"Sales report unavailable: {e}", file=sys.stderr)
        return 3

    print(f"{'Month':<8} {'Total':>10} {'Last year':>10} {'Change':>8}")
    for row in rows:
        change = year_over_year_change(row["totalSales"], row["previousTotalSales"])
        change_text = f"{change:+.1f}%" if change is not None else "-"
        print(
            f"{row['yearMonth']:<8} {_format_yen(row['totalSales']):>10} "
            f"{_format_yen(row['previousTotalSales']):>10} {change_text:>8}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hospital-dashboard", description="Hospital operations reporting API")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the GraphQL API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=None, help="Defaults to $PORT or 4000")
    serve.set_defaults(func=_serve)

    report = sub.add_parser("sales-report", help="Print last twelve months of sales against the prior year")
    report.add_argument("--url", default="http://localhost:4000/graphql")
    report.add_argument("--staff-id", required=True)
    report.add_argument("--department", default=None, help="Department code")
    report.add_argument("--doctor", default=None, help="Doctor code")
    report.add_argument("--required-level", type=int, default=SALES_REQUIRED_LEVEL)
    report.set_defaults(func=_sales_report)
    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
