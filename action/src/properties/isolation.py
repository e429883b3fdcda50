"""Environment isolation properties.

Distinct environments must never share state storage or address space.
"""

from pathlib import Path

from shared.constants import EXPECTED_VPC_CIDRS
from shared.schemas import PropertyResult

from action.src.locator import environment_file
from action.src.predicates import contains, extract_assignment
from action.src.properties.common import Evaluation


def state_location(backend_file: Path) -> str | None:
    """Get the ``s3://bucket/key`` state location declared by a backend file.

    Returns None if no key is declared.
    """
    key = extract_assignment(backend_file, "key")
    if key is None:
        return None
    bucket = extract_assignment(backend_file, "bucket") or ""
    return f"s3://{bucket}/{key}"


def check_distinct_state_paths(
    first: str, second: str, root: str | Path | None = None
) -> PropertyResult:
    """Evaluate isolation.state_paths for a pair of environments."""
    evaluation = Evaluation("isolation.state_paths", first=first, second=second)
    backends = [environment_file(env, "backend.tf", root) for env in (first, second)]

    if first == second:
        return evaluation.result()

    if not all([evaluation.require_file(backend) for backend in backends]):
        return evaluation.result()

    locations = []
    for env, backend in zip((first, second), backends):
        location = state_location(backend)
        evaluation.expect(location is not None, backend, f"{env} backend must declare a state key")
        locations.append(location)

    if None not in locations:
        evaluation.forbid(
            locations[0] == locations[1],
            backends[1],
            f"{first} and {second} share state location {locations[0]}",
        )

    return evaluation.result()


def check_distinct_vpc_cidrs(
    first: str, second: str, root: str | Path | None = None
) -> PropertyResult:
    """Evaluate isolation.vpc_cidrs for a pair of environments."""
    evaluation = Evaluation("isolation.vpc_cidrs", first=first, second=second)
    examples = [environment_file(env, "terraform.tfvars.example", root) for env in (first, second)]

    if first == second:
        return evaluation.result()

    if not all([evaluation.require_file(example) for example in examples]):
        return evaluation.result()

    cidrs = []
    for env, example in zip((first, second), examples):
        cidr = extract_assignment(example, "vpc_cidr")
        evaluation.expect(cidr is not None, example, f"{env} must declare vpc_cidr")
        cidrs.append(cidr)

    if None not in cidrs:
        evaluation.forbid(
            cidrs[0] == cidrs[1],
            examples[1],
            f"{first} and {second} share VPC CIDR {cidrs[0]}",
        )

    return evaluation.result()


def check_environment_identity(environment: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate isolation.environment_identity for one environment.

    The backend must be scoped by the environment name and the VPC must use
    the CIDR reserved for the environment.
    """
    evaluation = Evaluation("isolation.environment_identity", environment=environment)
    backend = environment_file(environment, "backend.tf", root)
    example = environment_file(environment, "terraform.tfvars.example", root)
    expected_cidr = EXPECTED_VPC_CIDRS[environment]

    if evaluation.require_file(backend):
        evaluation.expect(
            contains(backend, environment),
            backend,
            f"backend state path must mention '{environment}'",
        )

    if evaluation.require_file(example):
        evaluation.expect(
            contains(example, expected_cidr),
            example,
            f"{environment} must use VPC CIDR {expected_cidr}",
        )

    return evaluation.result()
