"""Remote state backend properties.

Each environment keeps its state in S3 with native lockfile locking and
encryption at rest.
"""

from pathlib import Path

from shared.schemas import PropertyResult

from action.src.locator import environment_file
from action.src.predicates import contains, matches_pattern
from action.src.properties.common import Evaluation


def check_state_locking(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate backend.state_locking for one environment.

    The backend must set ``use_lockfile = true`` and must not reference a
    DynamoDB lock table.
    """
    evaluation = Evaluation("backend.state_locking", environment=environment)
    backend = environment_file(environment, "backend.tf", root)

    if evaluation.require_file(backend):
        evaluation.expect(
            matches_pattern(backend, r"use_lockfile\s*=\s*true"),
            backend,
            f"use_lockfile must be true in {environment}",
        )
        evaluation.forbid(
            contains(backend, "dynamodb_table"),
            backend,
            f"dynamodb_table must not be used in {environment} (use S3 native locking)",
        )

    return evaluation.result()


def check_state_encryption(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate backend.encryption for one environment."""
    evaluation = Evaluation("backend.encryption", environment=environment)
    backend = environment_file(environment, "backend.tf", root)

    if evaluation.require_file(backend):
        evaluation.expect(
            matches_pattern(backend, r"\bencrypt\s*=\s*true"),
            backend,
            f"encrypt must be true in {environment}",
        )

    return evaluation.result()
