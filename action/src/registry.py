"""Registry of every property the suite evaluates.

Fixed properties take only ``root``; randomized ones also take the keyword
arguments drawn from their case strategy.
"""

from dataclasses import dataclass
from typing import Callable

from hypothesis import strategies as st

from shared.constants import PROPERTY_DEFINITIONS
from shared.schemas import PropertyResult

from action.src import generators
from action.src.properties import (
    backend,
    compliance,
    documentation,
    eks,
    environment,
    isolation,
    network,
    node_groups,
    platform,
    syntax,
    workflows,
)


@dataclass(frozen=True)
class PropertyCheck:
    """A registered property and how to drive it."""

    id: str
    func: Callable[..., PropertyResult]
    cases: Callable[[], st.SearchStrategy[dict]] | None = None

    @property
    def name(self) -> str:
        return PROPERTY_DEFINITIONS[self.id]["name"]

    @property
    def description(self) -> str:
        return PROPERTY_DEFINITIONS[self.id]["description"]

    @property
    def randomized(self) -> bool:
        return self.cases is not None

    @property
    def area(self) -> str:
        return self.id.split(".", 1)[0]


_env = generators.environment_cases

PROPERTY_CHECKS: list[PropertyCheck] = [
    # backend
    PropertyCheck("backend.state_locking", backend.check_state_locking, _env),
    PropertyCheck("backend.encryption", backend.check_state_encryption, _env),
    # isolation
    PropertyCheck(
        "isolation.state_paths",
        isolation.check_distinct_state_paths,
        generators.environment_pair_cases,
    ),
    PropertyCheck(
        "isolation.vpc_cidrs",
        isolation.check_distinct_vpc_cidrs,
        generators.environment_pair_cases,
    ),
    PropertyCheck("isolation.environment_identity", isolation.check_environment_identity, _env),
    # network
    PropertyCheck(
        "network.subnets_multi_az", network.check_subnets_multi_az, generators.az_count_cases
    ),
    PropertyCheck("network.nat_gateways", network.check_nat_gateways, generators.nat_gateway_cases),
    PropertyCheck("network.subnet_kubernetes_tags", network.check_subnet_kubernetes_tags),
    PropertyCheck("network.vpc_endpoints", network.check_vpc_endpoints),
    # eks
    PropertyCheck("eks.control_plane_logs", eks.check_control_plane_logs),
    PropertyCheck("eks.secrets_encryption", eks.check_secrets_encryption),
    PropertyCheck("eks.kubernetes_version", eks.check_kubernetes_version),
    PropertyCheck("eks.oidc_provider", eks.check_oidc_provider),
    # node groups
    PropertyCheck("node_groups.required_fields", node_groups.check_required_fields),
    PropertyCheck("node_groups.system_taint", node_groups.check_system_taint),
    PropertyCheck("node_groups.apps_untainted", node_groups.check_apps_untainted, _env),
    PropertyCheck("node_groups.system_autoscaling", node_groups.check_system_autoscaling, _env),
    PropertyCheck(
        "node_groups.record_supported",
        node_groups.check_node_group_record,
        generators.node_group_cases,
    ),
    # environment
    PropertyCheck("environment.tfvars_example", environment.check_tfvars_example, _env),
    PropertyCheck("environment.instance_types", environment.check_instance_types, _env),
    PropertyCheck("environment.autoscaling", environment.check_autoscaling, _env),
    PropertyCheck("environment.nat_gateway_mode", environment.check_nat_gateway_mode, _env),
    PropertyCheck("environment.mandatory_tags", environment.check_mandatory_tags, _env),
    PropertyCheck("environment.retention", environment.check_retention, _env),
    PropertyCheck("environment.backup_schedule", environment.check_backup_schedule, _env),
    PropertyCheck("environment.policy_mode", environment.check_policy_mode, _env),
    # platform
    PropertyCheck("platform.argocd_release", platform.check_argocd_release),
    PropertyCheck("platform.argocd_namespace", platform.check_argocd_namespace),
    PropertyCheck("platform.argocd_tolerations", platform.check_argocd_tolerations),
    PropertyCheck("platform.argocd_outputs", platform.check_argocd_outputs),
    PropertyCheck("platform.policy_engine_validation", platform.check_policy_engine_validation),
    PropertyCheck("platform.security_policies", platform.check_security_policies),
    PropertyCheck("platform.external_secrets_store", platform.check_external_secrets_store),
    PropertyCheck("platform.external_secrets_region", platform.check_external_secrets_region),
    PropertyCheck(
        "platform.external_secrets_namespace", platform.check_external_secrets_namespace
    ),
    PropertyCheck("platform.external_secrets_example", platform.check_external_secrets_example),
    PropertyCheck("platform.observability_stack", platform.check_observability_stack),
    PropertyCheck("platform.observability_outputs", platform.check_observability_outputs),
    PropertyCheck("platform.ingress_type_validation", platform.check_ingress_type_validation),
    PropertyCheck("platform.cluster_issuer", platform.check_cluster_issuer),
    PropertyCheck("platform.ingress_route53_zone", platform.check_ingress_route53_zone),
    PropertyCheck("platform.ingress_example", platform.check_ingress_example),
    PropertyCheck("platform.velero_bucket", platform.check_velero_bucket),
    PropertyCheck("platform.velero_outputs", platform.check_velero_outputs),
    PropertyCheck("platform.irsa_trust", platform.check_irsa_trust),
    # compliance
    PropertyCheck("compliance.cloudtrail", compliance.check_cloudtrail),
    PropertyCheck("compliance.aws_config", compliance.check_aws_config),
    PropertyCheck("compliance.guardduty", compliance.check_guardduty),
    PropertyCheck("compliance.bucket_protection", compliance.check_bucket_protection),
    # workflows
    PropertyCheck("workflows.plan_fmt", workflows.check_plan_fmt),
    PropertyCheck("workflows.plan_validate", workflows.check_plan_validate),
    PropertyCheck("workflows.plan_plan", workflows.check_plan_plan),
    PropertyCheck("workflows.plan_oidc", workflows.check_plan_oidc),
    PropertyCheck("workflows.plan_comment", workflows.check_plan_comment),
    PropertyCheck("workflows.apply_staging_automatic", workflows.check_apply_staging_automatic),
    PropertyCheck("workflows.apply_prod_approval", workflows.check_apply_prod_approval),
    # documentation
    PropertyCheck("documentation.readme", documentation.check_readme),
    PropertyCheck("documentation.troubleshooting", documentation.check_troubleshooting),
    PropertyCheck("documentation.cost_optimization", documentation.check_cost_optimization),
    PropertyCheck(
        "documentation.terraform_docs_config", documentation.check_terraform_docs_config
    ),
    PropertyCheck("documentation.tflint_config", documentation.check_tflint_config),
    PropertyCheck("documentation.test_directory", documentation.check_test_directory),
    PropertyCheck(
        "documentation.descriptions", documentation.check_descriptions, generators.module_cases
    ),
    # syntax
    PropertyCheck("syntax.hcl", syntax.check_hcl_syntax, generators.module_cases),
]


def get_check(property_id: str) -> PropertyCheck:
    """Look up a registered property by ID.

    Raises:
        KeyError: If no property has that ID
    """
    for check in PROPERTY_CHECKS:
        if check.id == property_id:
            return check
    raise KeyError(f"Unknown property '{property_id}'")


def select_checks(areas: list[str] | None = None) -> list[PropertyCheck]:
    """Registered properties, optionally limited to some areas (e.g., "backend")."""
    if not areas:
        return list(PROPERTY_CHECKS)
    return [check for check in PROPERTY_CHECKS if check.area in areas]
