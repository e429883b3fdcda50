"""Per-environment configuration properties.

Each check reproduces a lookup table {environment -> expected literal} from
shared.constants against the environment's own files.
"""

import re
from pathlib import Path

from shared.constants import (
    EXPECTED_APPS_MAX_SIZE,
    EXPECTED_BACKUP,
    EXPECTED_ENFORCEMENT_MODE,
    EXPECTED_INSTANCE_TYPE_PATTERNS,
    EXPECTED_RETENTION_DAYS,
    EXPECTED_SINGLE_NAT_GATEWAY,
    MANDATORY_TAGS,
)
from shared.schemas import PropertyResult

from action.src.locator import environment_file
from action.src.predicates import contains, matches_pattern
from action.src.properties.common import Evaluation


def check_tfvars_example(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.tfvars_example."""
    evaluation = Evaluation("environment.tfvars_example", environment=environment)
    evaluation.require_file(environment_file(environment, "terraform.tfvars.example", root))
    return evaluation.result()


def check_instance_types(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.instance_types."""
    evaluation = Evaluation("environment.instance_types", environment=environment)
    example = environment_file(environment, "terraform.tfvars.example", root)
    pattern = EXPECTED_INSTANCE_TYPE_PATTERNS[environment]

    if evaluation.require_file(example):
        evaluation.expect(
            matches_pattern(example, pattern),
            example,
            f"{environment} must use instance types matching {pattern}",
        )

    return evaluation.result()


def check_autoscaling(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.autoscaling."""
    evaluation = Evaluation("environment.autoscaling", environment=environment)
    example = environment_file(environment, "terraform.tfvars.example", root)
    max_size = EXPECTED_APPS_MAX_SIZE[environment]

    if evaluation.require_file(example):
        evaluation.expect(
            matches_pattern(example, rf"max_size\s*=\s*{max_size}\b"),
            example,
            f"{environment} apps node group must have max_size = {max_size}",
        )

    return evaluation.result()


def check_nat_gateway_mode(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.nat_gateway_mode."""
    evaluation = Evaluation("environment.nat_gateway_mode", environment=environment)
    example = environment_file(environment, "terraform.tfvars.example", root)
    single = EXPECTED_SINGLE_NAT_GATEWAY[environment]

    if evaluation.require_file(example):
        evaluation.expect(
            matches_pattern(example, rf"single_nat_gateway\s*=\s*{single}\b"),
            example,
            f"{environment} must set single_nat_gateway = {single}",
        )

    return evaluation.result()


def check_mandatory_tags(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.mandatory_tags."""
    evaluation = Evaluation("environment.mandatory_tags", environment=environment)
    main = environment_file(environment, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(
            contains(main, "default_tags"), main, "provider must declare default_tags"
        )
        for tag in MANDATORY_TAGS:
            evaluation.expect(contains(main, tag), main, f"mandatory tag {tag} must be set")

    return evaluation.result()


def check_retention(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.retention."""
    evaluation = Evaluation("environment.retention", environment=environment)
    main = environment_file(environment, "main.tf", root)

    if evaluation.require_file(main):
        for name, days in EXPECTED_RETENTION_DAYS[environment].items():
            evaluation.expect(
                matches_pattern(main, rf"{name}\s*=\s*{days}\b"),
                main,
                f"{name} must be {days} in {environment}",
            )

    return evaluation.result()


def check_backup_schedule(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.backup_schedule."""
    evaluation = Evaluation("environment.backup_schedule", environment=environment)
    main = environment_file(environment, "main.tf", root)
    expected = EXPECTED_BACKUP[environment]

    if evaluation.require_file(main):
        evaluation.expect(
            contains(main, expected["schedule"]),
            main,
            f"backup schedule must be \"{expected['schedule']}\" in {environment}",
        )
        evaluation.expect(
            matches_pattern(
                main, rf"backup_retention_days\s*=\s*{expected['backup_retention_days']}\b"
            ),
            main,
            f"backup_retention_days must be {expected['backup_retention_days']} in {environment}",
        )

    return evaluation.result()


def check_policy_mode(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate environment.policy_mode."""
    evaluation = Evaluation("environment.policy_mode", environment=environment)
    main = environment_file(environment, "main.tf", root)
    mode = EXPECTED_ENFORCEMENT_MODE[environment]

    if evaluation.require_file(main):
        evaluation.expect(
            matches_pattern(main, rf'enforcement_mode\s*=\s*"{re.escape(mode)}"'),
            main,
            f'{environment} must set enforcement_mode = "{mode}"',
        )

    return evaluation.result()
