"""Hypothesis strategies for randomized property evaluation.

Every strategy draws from a small bounded domain. Structural records are
filtered so only internally consistent ones reach a property.
"""

from hypothesis import strategies as st

from shared.constants import (
    AZ_COUNT_MAX,
    AZ_COUNT_MIN,
    DOCUMENTED_MODULES,
    ENVIRONMENTS,
    INSTANCE_TYPES,
    TAINT_EFFECTS,
)
from shared.schemas import NodeGroupConfig, Taint

# Kubernetes label keys and values: lowercase identifiers
_identifiers = st.from_regex(r"[a-z][a-z0-9]{0,15}", fullmatch=True)


def environments() -> st.SearchStrategy[str]:
    return st.sampled_from(ENVIRONMENTS)


def environment_pairs() -> st.SearchStrategy[tuple[str, str]]:
    """Ordered pairs of distinct environments."""
    return st.tuples(environments(), environments()).filter(lambda pair: pair[0] != pair[1])


def az_counts() -> st.SearchStrategy[int]:
    return st.integers(min_value=AZ_COUNT_MIN, max_value=AZ_COUNT_MAX)


def documented_modules() -> st.SearchStrategy[str]:
    return st.sampled_from(DOCUMENTED_MODULES)


def instance_types() -> st.SearchStrategy[str]:
    return st.sampled_from(INSTANCE_TYPES)


def taints() -> st.SearchStrategy[Taint]:
    return st.builds(
        Taint,
        key=_identifiers,
        value=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", max_size=10),
        effect=st.sampled_from(TAINT_EFFECTS),
    )


def node_groups() -> st.SearchStrategy[NodeGroupConfig]:
    """Node group records with min <= desired <= max and instance types.

    Inconsistent draws are rejected and redrawn.
    """
    return st.builds(
        NodeGroupConfig,
        instance_types=st.lists(instance_types(), max_size=3, unique=True),
        min_size=st.integers(min_value=1, max_value=5),
        max_size=st.integers(min_value=5, max_value=50),
        desired_size=st.integers(min_value=2, max_value=10),
        disk_size=st.integers(min_value=20, max_value=500),
        labels=st.dictionaries(_identifiers, _identifiers, max_size=3),
        taints=st.lists(taints(), max_size=3),
    ).filter(lambda node_group: node_group.is_consistent())


# --- Keyword-argument cases for registry checks ---


def environment_cases() -> st.SearchStrategy[dict]:
    return st.fixed_dictionaries({"environment": environments()})


def environment_pair_cases() -> st.SearchStrategy[dict]:
    return environment_pairs().map(lambda pair: {"first": pair[0], "second": pair[1]})


def az_count_cases() -> st.SearchStrategy[dict]:
    return st.fixed_dictionaries({"az_count": az_counts()})


def nat_gateway_cases() -> st.SearchStrategy[dict]:
    return st.fixed_dictionaries({"az_count": az_counts(), "single_nat_gateway": st.booleans()})


def node_group_cases() -> st.SearchStrategy[dict]:
    return st.fixed_dictionaries({"node_group": node_groups()})


def module_cases() -> st.SearchStrategy[dict]:
    return st.fixed_dictionaries({"module": documented_modules()})


# --- Finite domains evaluated in full before any random draw ---


def _environment_examples() -> list[dict]:
    return [{"environment": environment} for environment in ENVIRONMENTS]


def _environment_pair_examples() -> list[dict]:
    return [
        {"first": first, "second": second}
        for first in ENVIRONMENTS
        for second in ENVIRONMENTS
        if first != second
    ]


def _az_count_examples() -> list[dict]:
    return [{"az_count": count} for count in range(AZ_COUNT_MIN, AZ_COUNT_MAX + 1)]


def _nat_gateway_examples() -> list[dict]:
    return [
        {"az_count": count, "single_nat_gateway": single}
        for count in range(AZ_COUNT_MIN, AZ_COUNT_MAX + 1)
        for single in (False, True)
    ]


def _module_examples() -> list[dict]:
    return [{"module": module} for module in DOCUMENTED_MODULES]


_FINITE_EXAMPLES = {
    environment_cases: _environment_examples,
    environment_pair_cases: _environment_pair_examples,
    az_count_cases: _az_count_examples,
    nat_gateway_cases: _nat_gateway_examples,
    module_cases: _module_examples,
}


def finite_examples(cases) -> list[dict]:
    """Every case a finite-domain case strategy can draw.

    Returns an empty list for open domains such as node group records.
    """
    enumerate_all = _FINITE_EXAMPLES.get(cases)
    return enumerate_all() if enumerate_all is not None else []
