"""EKS control plane properties."""

from pathlib import Path

from shared.constants import CONTROL_PLANE_LOG_TYPES
from shared.schemas import PropertyResult

from action.src.locator import module_file
from action.src.predicates import (
    contains,
    count_resources,
    has_validation_for_field,
    matches_pattern,
)
from action.src.properties.common import Evaluation

CLUSTER_MODULE = "clusters/eks"


def check_control_plane_logs(root: str | Path | None = None) -> PropertyResult:
    """Evaluate eks.control_plane_logs.

    All five log types must appear in the module defaults and the log type
    variable must be validated.
    """
    evaluation = Evaluation("eks.control_plane_logs")
    variables = module_file(CLUSTER_MODULE, "variables.tf", root)

    if evaluation.require_file(variables):
        for log_type in CONTROL_PLANE_LOG_TYPES:
            evaluation.expect(
                contains(variables, log_type),
                variables,
                f"control plane log type '{log_type}' must be enabled",
            )
        evaluation.expect(
            has_validation_for_field(variables, "control_plane_log_types"),
            variables,
            "control_plane_log_types must have a validation block",
        )

    return evaluation.result()


def check_secrets_encryption(root: str | Path | None = None) -> PropertyResult:
    """Evaluate eks.secrets_encryption."""
    evaluation = Evaluation("eks.secrets_encryption")
    eks = module_file(CLUSTER_MODULE, "eks.tf", root)

    if evaluation.require_file(eks):
        evaluation.expect(contains(eks, "aws_kms_key"), eks, "a dedicated aws_kms_key must exist")
        evaluation.expect(
            contains(eks, "encryption_config"), eks, "encryption_config must be configured"
        )
        evaluation.expect(
            contains(eks, '"secrets"'), eks, "encryption_config must cover the secrets resource"
        )

    return evaluation.result()


def check_kubernetes_version(root: str | Path | None = None) -> PropertyResult:
    """Evaluate eks.kubernetes_version."""
    evaluation = Evaluation("eks.kubernetes_version")
    variables = module_file(CLUSTER_MODULE, "variables.tf", root)

    if evaluation.require_file(variables):
        evaluation.expect(
            has_validation_for_field(variables, "cluster_version"),
            variables,
            "cluster_version must have a validation block",
        )
        evaluation.expect(
            matches_pattern(variables, r"1\\."),
            variables,
            "cluster_version validation must match 1.x versions",
        )

    return evaluation.result()


def check_oidc_provider(root: str | Path | None = None) -> PropertyResult:
    """Evaluate eks.oidc_provider."""
    evaluation = Evaluation("eks.oidc_provider")
    irsa = module_file(CLUSTER_MODULE, "irsa.tf", root)

    if evaluation.require_file(irsa):
        evaluation.expect(
            count_resources(irsa, "aws_iam_openid_connect_provider") > 0,
            irsa,
            "IRSA must create aws_iam_openid_connect_provider",
        )

    return evaluation.result()
