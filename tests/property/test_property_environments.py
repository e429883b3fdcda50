"""Randomized properties over deployment environments."""

from hypothesis import assume, given, settings

from shared.constants import EXPECTED_ENFORCEMENT_MODE, EXPECTED_RETENTION_DAYS

from action.src.generators import environment_pairs, environments
from action.src.locator import environment_file
from action.src.properties.backend import check_state_encryption, check_state_locking
from action.src.properties.environment import check_policy_mode, check_retention
from action.src.properties.isolation import (
    check_distinct_state_paths,
    check_distinct_vpc_cidrs,
    state_location,
)


class TestIsolation:
    """Distinct environments never share state or address space."""

    @settings(max_examples=20, deadline=None)
    @given(environment_pairs())
    def test_distinct_state_paths(self, template_root, pair):
        """Should never share a state key between environments."""
        first, second = pair
        assume(first != second)

        assert check_distinct_state_paths(first, second, template_root).passed

    @settings(max_examples=20, deadline=None)
    @given(environment_pairs())
    def test_state_locations_differ(self, template_root, pair):
        """Should resolve a distinct state location per environment."""
        locations = {
            state_location(environment_file(env, "backend.tf", template_root)) for env in pair
        }

        assert None not in locations
        assert len(locations) == 2

    @settings(max_examples=20, deadline=None)
    @given(environment_pairs())
    def test_distinct_vpc_cidrs(self, template_root, pair):
        """Should never share a VPC CIDR between environments."""
        assert check_distinct_vpc_cidrs(*pair, root=template_root).passed

    @settings(max_examples=10, deadline=None)
    @given(environments())
    def test_same_environment_is_trivially_isolated(self, template_root, environment):
        """Should treat an environment as isolated from itself."""
        assert check_distinct_state_paths(environment, environment, template_root).passed


class TestBackend:
    """Every environment locks and encrypts its state."""

    @settings(max_examples=10, deadline=None)
    @given(environments())
    def test_state_locking(self, template_root, environment):
        """Should lock state in every environment."""
        assert check_state_locking(environment, template_root).passed

    @settings(max_examples=10, deadline=None)
    @given(environments())
    def test_state_encryption(self, template_root, environment):
        """Should encrypt state in every environment."""
        assert check_state_encryption(environment, template_root).passed


class TestEnvironmentLiterals:
    """Per-environment literals match their lookup tables."""

    @settings(max_examples=10, deadline=None)
    @given(environments())
    def test_retention(self, template_root, environment):
        """Should match the retention literals of the environment."""
        result = check_retention(environment, template_root)

        assert result.passed
        assert set(EXPECTED_RETENTION_DAYS[environment]) == {
            "prometheus_retention_days",
            "loki_retention_days",
        }

    @settings(max_examples=10, deadline=None)
    @given(environments())
    def test_policy_mode(self, template_root, environment):
        """Should match the policy mode of the environment."""
        assert check_policy_mode(environment, template_root).passed
        assert EXPECTED_ENFORCEMENT_MODE[environment] in ("audit", "enforce")


class TestIdempotence:
    """Re-running a check against unchanged files yields the same verdict."""

    @settings(max_examples=10, deadline=None)
    @given(environments())
    def test_repeat_evaluation(self, template_root, environment):
        """Should give the same verdict on repeated evaluation."""
        first = check_retention(environment, template_root)
        second = check_retention(environment, template_root)

        assert first == second
