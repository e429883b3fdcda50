"""VPC topology properties of the EKS cluster module."""

from pathlib import Path

from shared.constants import AZ_COUNT_MAX, AZ_COUNT_MIN, REQUIRED_VPC_ENDPOINTS
from shared.schemas import PropertyResult

from action.src.locator import module_file
from action.src.predicates import contains, matches_pattern
from action.src.properties.common import Evaluation

CLUSTER_MODULE = "clusters/eks"


def _validate_az_count(az_count: int) -> None:
    if not AZ_COUNT_MIN <= az_count <= AZ_COUNT_MAX:
        raise ValueError(
            f"AZ count must be between {AZ_COUNT_MIN} and {AZ_COUNT_MAX}, got {az_count}"
        )


def check_subnets_multi_az(az_count: int, root: str | Path | None = None) -> PropertyResult:
    """Evaluate network.subnets_multi_az for an availability zone count.

    With N zones the module must create N private and N public subnets, so
    both subnet resources have to be keyed by the availability zone list.
    """
    _validate_az_count(az_count)
    evaluation = Evaluation("network.subnets_multi_az", az_count=az_count)
    vpc = module_file(CLUSTER_MODULE, "vpc.tf", root)

    if evaluation.require_file(vpc):
        evaluation.expect(
            matches_pattern(vpc, r'resource\s+"aws_subnet"\s+"private"'),
            vpc,
            "private aws_subnet resource must exist",
        )
        evaluation.expect(
            matches_pattern(vpc, r'resource\s+"aws_subnet"\s+"public"'),
            vpc,
            "public aws_subnet resource must exist",
        )
        evaluation.expect(
            contains(vpc, "availability_zones"),
            vpc,
            "subnets must be created per availability_zones entry",
        )

    return evaluation.result()


def check_nat_gateways(
    az_count: int, single_nat_gateway: bool, root: str | Path | None = None
) -> PropertyResult:
    """Evaluate network.nat_gateways.

    Multi-AZ mode needs one NAT gateway per zone, so the gateway resource must
    be counted and switchable through single_nat_gateway.
    """
    _validate_az_count(az_count)
    evaluation = Evaluation(
        "network.nat_gateways", az_count=az_count, single_nat_gateway=single_nat_gateway
    )
    vpc = module_file(CLUSTER_MODULE, "vpc.tf", root)

    if evaluation.require_file(vpc):
        evaluation.expect(
            contains(vpc, 'resource "aws_nat_gateway"'),
            vpc,
            "aws_nat_gateway resource must exist",
        )
        evaluation.expect(
            contains(vpc, "single_nat_gateway"),
            vpc,
            "NAT gateway count must depend on single_nat_gateway",
        )
        evaluation.expect(
            matches_pattern(vpc, r"\bcount\s*="),
            vpc,
            "NAT gateways must be created with count",
        )

    return evaluation.result()


def check_subnet_kubernetes_tags(root: str | Path | None = None) -> PropertyResult:
    """Evaluate network.subnet_kubernetes_tags."""
    evaluation = Evaluation("network.subnet_kubernetes_tags")
    vpc = module_file(CLUSTER_MODULE, "vpc.tf", root)

    if evaluation.require_file(vpc):
        evaluation.expect(
            contains(vpc, "kubernetes.io/cluster"),
            vpc,
            "subnets must carry kubernetes.io/cluster tags",
        )
        evaluation.expect(
            contains(vpc, "cluster_name"),
            vpc,
            "subnet tags must reference cluster_name",
        )

    return evaluation.result()


def check_vpc_endpoints(root: str | Path | None = None) -> PropertyResult:
    """Evaluate network.vpc_endpoints."""
    evaluation = Evaluation("network.vpc_endpoints")
    endpoints = module_file(CLUSTER_MODULE, "vpc_endpoints.tf", root)

    if evaluation.require_file(endpoints):
        for service in REQUIRED_VPC_ENDPOINTS:
            evaluation.expect(
                contains(endpoints, service),
                endpoints,
                f"VPC endpoint for {service} must exist",
            )

    return evaluation.result()
