"""Property harness.

Fixed properties are evaluated once. Randomized properties are evaluated for
every value of a finite domain, then for every case hypothesis draws from
their strategy. The first failing case is shrunk and its result reported.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from hypothesis import HealthCheck, Verbosity, example, given, settings

from shared.constants import SCHEMA_VERSION
from shared.schemas import (
    Finding,
    FindingKind,
    PropertyResult,
    PropertyStatus,
    SuiteReport,
    SuiteSummary,
)

from action.src.generators import finite_examples
from action.src.locator import find_project_root
from action.src.registry import PropertyCheck, select_checks

logger = logging.getLogger(__name__)

DEFAULT_MAX_EXAMPLES = 100


class PropertyFailure(Exception):
    """Raised inside a hypothesis run when a drawn case fails."""

    def __init__(self, result: PropertyResult):
        super().__init__(f"{result.id} failed with parameters {result.parameters}")
        self.result = result


def run_fixed(check: PropertyCheck, root: str | Path) -> PropertyResult:
    """Evaluate a parameterless property once."""
    return check.func(root=root)


def run_randomized(
    check: PropertyCheck, root: str | Path, max_examples: int = DEFAULT_MAX_EXAMPLES
) -> PropertyResult:
    """Evaluate a property over generated cases.

    Args:
        check: Registered property with a case strategy
        root: Project root to evaluate against
        max_examples: Upper bound on generated cases; finite domains are
            always evaluated in full on top of them

    Returns:
        The shrunk failing result, or a PASS result recording how many cases
        were evaluated and every file they inspected
    """
    if check.cases is None:
        raise ValueError(f"{check.id} has no case strategy")

    evaluated = 0
    inspected: list[str] = []

    def evaluate_case(case: dict) -> None:
        nonlocal evaluated
        evaluated += 1
        result = check.func(root=root, **case)
        for path in result.inspected_files:
            if path not in inspected:
                inspected.append(path)
        if not result.passed:
            raise PropertyFailure(result)

    # Explicit examples run regardless of max_examples, so every value of a
    # finite domain (each environment, each pair) is always covered.
    test = given(check.cases())(evaluate_case)
    for case in finite_examples(check.cases):
        test = example(case)(test)
    test = settings(
        max_examples=max_examples,
        database=None,
        deadline=None,
        report_multiple_bugs=False,
        verbosity=Verbosity.quiet,
        suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
    )(test)

    try:
        test()
    except PropertyFailure as failure:
        logger.debug(f"{check.id} failed after {evaluated} evaluations")
        return failure.result

    return PropertyResult(
        id=check.id,
        name=check.name,
        status=PropertyStatus.PASS,
        parameters={"examples": evaluated},
        inspected_files=inspected,
    )


def error_kind(error: Exception) -> FindingKind:
    """Classify an exception raised by a check."""
    # UnicodeDecodeError is a ValueError, so file errors are matched first
    if isinstance(error, (OSError, UnicodeDecodeError)):
        return FindingKind.READ_ERROR
    if isinstance(error, ValueError):
        return FindingKind.INVALID_PARAMETER
    return FindingKind.CHECK_ERROR


def error_result(check: PropertyCheck, error: Exception) -> PropertyResult:
    """Build an ERROR result for a check that raised."""
    return PropertyResult(
        id=check.id,
        name=check.name,
        status=PropertyStatus.ERROR,
        findings=[
            Finding(
                kind=error_kind(error),
                issue=f"{type(error).__name__}: {error}",
            )
        ],
    )


def run_check(
    check: PropertyCheck, root: str | Path, max_examples: int = DEFAULT_MAX_EXAMPLES
) -> PropertyResult:
    """Evaluate one property, turning any exception into an ERROR result."""
    try:
        if check.randomized:
            return run_randomized(check, root, max_examples)
        return run_fixed(check, root)
    except Exception as e:
        logger.error(f"{check.id} raised {type(e).__name__}: {e}", exc_info=True)
        return error_result(check, e)


def summarize(results: list[PropertyResult]) -> SuiteSummary:
    return SuiteSummary(
        total=len(results),
        passed=sum(1 for r in results if r.status == PropertyStatus.PASS),
        failed=sum(1 for r in results if r.status == PropertyStatus.FAIL),
        errored=sum(1 for r in results if r.status == PropertyStatus.ERROR),
    )


def overall_status(summary: SuiteSummary) -> PropertyStatus:
    """ERROR if any property errored, else FAIL if any failed, else PASS."""
    if summary.errored:
        return PropertyStatus.ERROR
    if summary.failed:
        return PropertyStatus.FAIL
    return PropertyStatus.PASS


def run_suite(
    root: str | Path | None = None,
    max_examples: int = DEFAULT_MAX_EXAMPLES,
    areas: list[str] | None = None,
) -> SuiteReport:
    """Evaluate every registered property against a template repository.

    Args:
        root: Project root; discovered from the working directory if None
        max_examples: Upper bound on cases per randomized property
        areas: Optional property areas to limit the run to

    Returns:
        SuiteReport with one result per property, in registry order
    """
    project_root = Path(root) if root is not None else find_project_root()
    checks = select_checks(areas)
    logger.info(f"Evaluating {len(checks)} properties against {project_root}")

    results = []
    for check in checks:
        result = run_check(check, project_root, max_examples)
        logger.debug(f"{check.id}: {result.status.value}")
        results.append(result)

    summary = summarize(results)
    return SuiteReport(
        schema_version=SCHEMA_VERSION,
        project_root=str(project_root),
        generated_at=datetime.now(timezone.utc).isoformat(),
        status=overall_status(summary),
        summary=summary,
        results=results,
    )
