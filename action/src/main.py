#!/usr/bin/env python3
"""Command-line entry point for EKS template verification.

Runs every registered property against a template repository, prints the
results grouped by area and exits non-zero when any property does not pass.
"""

import argparse
import logging
import os
import sys
from itertools import groupby

from shared.schemas import PropertyResult, SuiteReport

from action.src.config import Settings, get_settings
from action.src.harness import run_suite
from action.src.locator import find_project_root

logger = logging.getLogger(__name__)

STATUS_EMOJI = {"PASS": "✅", "FAIL": "❌", "ERROR": "⚠️"}

# Findings printed per property before truncating
MAX_FINDINGS_SHOWN = 3


def log_group(title: str) -> None:
    """Start a GitHub Actions log group."""
    print(f"::group::{title}")


def log_group_end() -> None:
    """End a GitHub Actions log group."""
    print("::endgroup::")


def log_error(message: str) -> None:
    """Log an error message."""
    print(f"::error::{message}")


def configure_logging(level: str, stream=sys.stdout) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream)],
    )


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least one."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: list[str] | None, settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="eks-verify",
        description="Verify an EKS Terraform template against its architectural properties.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=settings.project_root,
        help="Template repository root (default: discovered from the working directory)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default=settings.output_format,
        help="Report format",
    )
    parser.add_argument(
        "--max-examples",
        type=positive_int,
        default=settings.max_examples,
        help="Upper bound on cases per randomized property",
    )
    parser.add_argument(
        "--area",
        action="append",
        dest="areas",
        help="Only evaluate properties in this area (repeatable, e.g. --area backend)",
    )
    return parser.parse_args(argv)


def format_result(result: PropertyResult) -> list[str]:
    """Lines describing one property result."""
    status = result.status.value
    lines = [f"  {STATUS_EMOJI.get(status, '❓')} {result.id}: {status}"]
    if result.parameters and not result.passed:
        lines.append(f"      parameters: {result.parameters}")
    for finding in result.findings[:MAX_FINDINGS_SHOWN]:
        location = f" ({finding.path})" if finding.path else ""
        lines.append(f"      - [{finding.kind.value}] {finding.issue}{location}")
    if len(result.findings) > MAX_FINDINGS_SHOWN:
        lines.append(f"      ... and {len(result.findings) - MAX_FINDINGS_SHOWN} more findings")
    return lines


def print_report(report: SuiteReport) -> None:
    print("=" * 60)
    print("EKS Template Verification")
    print("=" * 60)
    print(f"Project root: {report.project_root}")
    print(f"Properties: {report.summary.total}")
    print()

    for area, results in groupby(report.results, key=lambda r: r.id.split(".", 1)[0]):
        log_group(f"Area: {area}")
        for result in results:
            for line in format_result(result):
                print(line)
        log_group_end()

    for result in report.failures():
        issues = "; ".join(f.issue for f in result.findings) or result.status.value
        log_error(f"{result.id} ({result.name}): {issues}")

    print()
    print("=" * 60)
    print("Final Results")
    print("=" * 60)
    print(f"  Passed:  {report.summary.passed}")
    print(f"  Failed:  {report.summary.failed}")
    print(f"  Errored: {report.summary.errored}")
    print(f"  Overall: {STATUS_EMOJI.get(report.status.value, '❓')} {report.status.value}")
    print("=" * 60)


def build_step_summary(report: SuiteReport) -> str:
    """Markdown summary for the GitHub Actions job page."""
    lines = [
        "## EKS Template Verification Results",
        "",
        f"**Project root:** `{report.project_root}`",
        f"**Overall:** {STATUS_EMOJI.get(report.status.value, '❓')} {report.status.value}",
        f"**Passed:** {report.summary.passed} / {report.summary.total}",
        "",
        "| Property | Name | Status |",
        "|----------|------|--------|",
    ]
    for result in report.results:
        status = result.status.value
        lines.append(f"| {result.id} | {result.name} | {STATUS_EMOJI.get(status, '❓')} {status} |")
    lines.append("")
    return "\n".join(lines)


def write_step_summary(report: SuiteReport) -> None:
    summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
    if summary_file:
        with open(summary_file, "a", encoding="utf-8") as f:
            f.write(build_step_summary(report))


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 when every property passes, 1 otherwise)
    """
    settings = settings or get_settings()
    args = parse_args(argv, settings)
    # JSON reports own stdout
    configure_logging(settings.log_level, sys.stderr if args.format == "json" else sys.stdout)

    root = args.root or find_project_root()
    report = run_suite(root, max_examples=args.max_examples, areas=args.areas)

    if args.format == "json":
        print(report.model_dump_json(indent=2))
    else:
        print_report(report)

    write_step_summary(report)

    return 0 if not report.failures() else 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
