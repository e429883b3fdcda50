"""Managed node group properties."""

import re
from pathlib import Path

from shared.constants import NODE_GROUP_FIELDS, SYSTEM_NODE_GROUP_MAX_SPREAD
from shared.schemas import NodeGroupConfig, PropertyResult

from action.src.locator import environment_file, module_file
from action.src.predicates import (
    contains,
    has_validation_for_field,
    iter_block_bodies,
    matches_pattern,
    read_content,
)
from action.src.properties.common import Evaluation

CLUSTER_MODULE = "clusters/eks"


def check_required_fields(root: str | Path | None = None) -> PropertyResult:
    """Evaluate node_groups.required_fields."""
    evaluation = Evaluation("node_groups.required_fields")
    variables = module_file(CLUSTER_MODULE, "variables.tf", root)

    if evaluation.require_file(variables):
        for field in NODE_GROUP_FIELDS:
            evaluation.expect(
                contains(variables, field),
                variables,
                f"node_groups must define field {field}",
            )

    return evaluation.result()


def check_system_taint(root: str | Path | None = None) -> PropertyResult:
    """Evaluate node_groups.system_taint.

    The module must render taints dynamically and the staging defaults must
    taint the system group with CriticalAddonsOnly=true:NoSchedule.
    """
    evaluation = Evaluation("node_groups.system_taint")
    node_groups = module_file(CLUSTER_MODULE, "node_groups.tf", root)
    staging_variables = environment_file("staging", "variables.tf", root)

    if evaluation.require_file(node_groups):
        evaluation.expect(
            contains(node_groups, 'dynamic "taint"'),
            node_groups,
            'node_groups.tf must have a dynamic "taint" block',
        )

    if evaluation.require_file(staging_variables):
        expected = [
            (r'key\s*=\s*"CriticalAddonsOnly"', "taint key must be CriticalAddonsOnly"),
            (r'value\s*=\s*"true"', 'taint value must be "true"'),
            (r'effect\s*=\s*"NoSchedule"', "taint effect must be NoSchedule"),
        ]
        for pattern, issue in expected:
            evaluation.expect(matches_pattern(staging_variables, pattern), staging_variables, issue)

    return evaluation.result()


def check_apps_untainted(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate node_groups.apps_untainted for one environment."""
    evaluation = Evaluation("node_groups.apps_untainted", environment=environment)
    example = environment_file(environment, "terraform.tfvars.example", root)

    if evaluation.require_file(example):
        evaluation.expect(
            contains(example, "taints = []"),
            example,
            f"apps node group must declare taints = [] in {environment}",
        )

    return evaluation.result()


def _size(body: str, field: str) -> int | None:
    match = re.search(rf"\b{field}\s*=\s*(\d+)", body)
    return int(match.group(1)) if match else None


def check_system_autoscaling(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate node_groups.system_autoscaling for one environment.

    An environment without a ``system = { ... }`` node group passes.
    """
    evaluation = Evaluation("node_groups.system_autoscaling", environment=environment)
    example = environment_file(environment, "terraform.tfvars.example", root)

    if not evaluation.require_file(example):
        return evaluation.result()

    for body in iter_block_bodies(read_content(example), r"\bsystem\s*="):
        min_size = _size(body, "min_size")
        max_size = _size(body, "max_size")
        if not evaluation.expect(
            min_size is not None and max_size is not None,
            example,
            f"system node group must set min_size and max_size in {environment}",
        ):
            continue
        evaluation.expect(
            max_size - min_size <= SYSTEM_NODE_GROUP_MAX_SPREAD,
            example,
            f"system node group scales from {min_size} to {max_size} in {environment}; "
            f"spread must be at most {SYSTEM_NODE_GROUP_MAX_SPREAD}",
        )

    return evaluation.result()


def check_node_group_record(
    node_group: NodeGroupConfig, root: str | Path | None = None
) -> PropertyResult:
    """Evaluate node_groups.record_supported for a node group record.

    Raises:
        ValueError: If the record is not internally consistent
    """
    if not node_group.is_consistent():
        raise ValueError(
            "Node group record must satisfy min_size <= desired_size <= max_size "
            "and list at least one instance type"
        )

    evaluation = Evaluation("node_groups.record_supported", node_group=node_group.model_dump())
    variables = module_file(CLUSTER_MODULE, "variables.tf", root)

    if evaluation.require_file(variables):
        for field in node_group.populated_fields():
            evaluation.expect(
                contains(variables, field),
                variables,
                f"module must accept node group field {field}",
            )
        evaluation.expect(
            has_validation_for_field(variables, "node_groups"),
            variables,
            "node_groups must have a validation block",
        )
        for effect in sorted({taint.effect for taint in node_group.taints}):
            evaluation.expect(
                contains(variables, f'"{effect}"'),
                variables,
                f"taint effect {effect} must be accepted",
            )

    return evaluation.result()
