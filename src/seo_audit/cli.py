"""Command-line interface for the page auditor."""

import argparse
import json
import sys
from typing import Optional

from seo_audit.auditor import run_audit_sync
from seo_audit.config import AuditConfig, load_thresholds
from seo_audit.exceptions import FetchError
from seo_audit.logging_config import setup_logging
from seo_audit.models import AuditReport, Priority

PRIORITY_LABELS = {
    Priority.CRITICAL: "🔴 Critical",
    Priority.HIGH: "🟠 High",
    Priority.MEDIUM: "🟡 Medium",
    Priority.LOW: "⚪ Low",
}


def print_report(report: AuditReport):
    """Print an audit report in a formatted way.

    Args:
        report: Completed AuditReport
    """
    print(f"\n{'=' * 60}")
    print(f"SEO Audit for: {report.url}")
    print(f"{'=' * 60}")
    print(f"\n📊 Overall Score: {report.score}/100")
    print(f"\n{report.summary}")

    degraded = [
        result.name
        for result in (report.robots, report.sitemap, report.on_page, report.performance, report.content)
        if result.degraded
    ]
    if degraded:
        print(f"\n⚠️  Incomplete sections: {', '.join(degraded)}")

    for priority in Priority:
        issues = [issue for issue in report.issues if issue.priority == priority]
        if not issues:
            continue
        print(f"\n{PRIORITY_LABELS[priority]} ({len(issues)}):")
        for issue in issues:
            print(f"  • [{issue.category}] {issue.message}")
            if issue.recommendation:
                print(f"      💡 {issue.recommendation}")

    if not report.issues:
        print("\n✅ No issues found")

    print(f"\nCompleted in {report.execution_time_ms}ms")
    print(f"\n{'=' * 60}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seo-audit",
        description="SEO Audit - Technical, on-page and content audit of a single URL",
    )
    parser.add_argument("url", help="URL to audit (http or https)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON report instead of the formatted summary",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write the JSON report to this file",
    )
    parser.add_argument(
        "--thresholds",
        help="JSON file with analysis threshold overrides",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging verbosity (default: LOG_LEVEL from the environment, else INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the ``seo-audit`` command.

    Returns:
        Exit status: 0 on success, 1 when the page could not be fetched,
        2 on invalid arguments
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        thresholds = load_thresholds(args.thresholds)
    except (OSError, ValueError) as e:
        parser.error(f"could not load thresholds: {e}")

    try:
        report = run_audit_sync(args.url, config=AuditConfig.from_env(), thresholds=thresholds)
    except FetchError as e:
        if args.json:
            print(json.dumps(e.to_dict(), indent=2))
        else:
            print(f"\n❌ Failed to audit {args.url}: {e}")
        return 1

    report_dict = report.to_dict()

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(report_dict, f, indent=2)
        print(f"Report saved to {args.output}", file=sys.stderr)

    if args.json:
        print(json.dumps(report_dict, indent=2))
    else:
        print_report(report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
