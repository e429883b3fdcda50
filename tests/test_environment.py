"""Tests for per-environment configuration properties."""

import pytest

from shared.schemas import FindingKind

from action.src.properties.environment import (
    check_autoscaling,
    check_backup_schedule,
    check_instance_types,
    check_mandatory_tags,
    check_nat_gateway_mode,
    check_policy_mode,
    check_retention,
    check_tfvars_example,
)

ENVIRONMENT_CHECKS = [
    check_tfvars_example,
    check_instance_types,
    check_autoscaling,
    check_nat_gateway_mode,
    check_mandatory_tags,
    check_retention,
    check_backup_schedule,
    check_policy_mode,
]


def env_file(root, environment, filename):
    return root / "live" / "aws" / environment / filename


@pytest.mark.parametrize("environment", ["staging", "prod"])
@pytest.mark.parametrize("check", ENVIRONMENT_CHECKS, ids=lambda c: c.__name__)
def test_passes_on_template(template_root, check, environment):
    """Every environment property should hold for the fixture template."""
    result = check(environment, template_root)

    assert result.passed is True, result.findings
    assert result.parameters == {"environment": environment}


class TestTfvarsExample:
    """Tests for environment.tfvars_example."""

    def test_missing(self, template_copy):
        """Should fail when the tfvars example is missing."""
        env_file(template_copy, "prod", "terraform.tfvars.example").unlink()

        result = check_tfvars_example("prod", template_copy)

        assert result.findings[0].kind == FindingKind.MISSING_FILE

    def test_dependent_checks_fail_when_missing(self, template_copy):
        """Should fail every check that reads the missing tfvars example."""
        env_file(template_copy, "staging", "terraform.tfvars.example").unlink()

        assert check_instance_types("staging", template_copy).passed is False
        assert check_autoscaling("staging", template_copy).passed is False


class TestInstanceTypes:
    """Tests for environment.instance_types."""

    def test_prod_with_staging_sizes(self, template_copy, rewrite):
        """Should fail when prod uses staging instance types."""
        rewrite(
            env_file(template_copy, "prod", "terraform.tfvars.example"),
            '["m5.xlarge", "m5.2xlarge"]',
            '["t3.large"]',
        )

        assert check_instance_types("prod", template_copy).passed is False


class TestAutoscaling:
    """Tests for environment.autoscaling."""

    def test_wrong_max_size(self, template_copy, rewrite):
        """Should fail when the apps max_size does not match."""
        rewrite(
            env_file(template_copy, "prod", "terraform.tfvars.example"),
            "max_size       = 50",
            "max_size       = 20",
        )

        assert check_autoscaling("prod", template_copy).passed is False

    def test_max_size_needs_word_boundary(self, template_copy, rewrite):
        """Should not accept 100 as staging's 10."""
        rewrite(
            env_file(template_copy, "staging", "terraform.tfvars.example"),
            "max_size       = 10",
            "max_size       = 100",
        )

        assert check_autoscaling("staging", template_copy).passed is False


class TestNatGatewayMode:
    """Tests for environment.nat_gateway_mode."""

    def test_prod_single_nat_gateway(self, template_copy, rewrite):
        """Should fail when prod uses a single NAT gateway."""
        rewrite(
            env_file(template_copy, "prod", "terraform.tfvars.example"),
            "single_nat_gateway = false",
            "single_nat_gateway = true",
        )

        assert check_nat_gateway_mode("prod", template_copy).passed is False


class TestMandatoryTags:
    """Tests for environment.mandatory_tags."""

    def test_missing_tag(self, template_copy, rewrite):
        """Should fail when a tag is missing."""
        rewrite(
            env_file(template_copy, "staging", "main.tf"),
            '      Owner       = "platform-team"\n',
            "",
        )

        result = check_mandatory_tags("staging", template_copy)

        assert result.passed is False
        assert [f.issue for f in result.findings] == ["mandatory tag Owner must be set"]


class TestRetention:
    """Tests for environment.retention."""

    def test_staging_with_prod_retention(self, template_copy, rewrite):
        """Should fail when staging uses prod retention."""
        rewrite(
            env_file(template_copy, "staging", "main.tf"),
            "prometheus_retention_days = 7",
            "prometheus_retention_days = 30",
        )

        result = check_retention("staging", template_copy)

        assert result.passed is False
        assert len(result.findings) == 1

    def test_retention_needs_word_boundary(self, template_copy, rewrite):
        """Should not accept 150 as prod's 15."""
        rewrite(
            env_file(template_copy, "prod", "main.tf"),
            "loki_retention_days       = 15",
            "loki_retention_days       = 150",
        )

        assert check_retention("prod", template_copy).passed is False


class TestBackupSchedule:
    """Tests for environment.backup_schedule."""

    def test_wrong_schedule(self, template_copy, rewrite):
        """Should fail when the backup schedule does not match."""
        rewrite(env_file(template_copy, "prod", "main.tf"), '"0 */6 * * *"', '"0 2 * * *"')

        assert check_backup_schedule("prod", template_copy).passed is False

    def test_wrong_retention(self, template_copy, rewrite):
        """Should fail when backup retention does not match."""
        rewrite(
            env_file(template_copy, "staging", "main.tf"),
            "backup_retention_days = 7",
            "backup_retention_days = 14",
        )

        assert check_backup_schedule("staging", template_copy).passed is False


class TestPolicyMode:
    """Tests for environment.policy_mode."""

    def test_prod_in_audit_mode(self, template_copy, rewrite):
        """Should fail when prod runs the policy engine in audit mode."""
        rewrite(env_file(template_copy, "prod", "main.tf"), '"enforce"', '"audit"')

        result = check_policy_mode("prod", template_copy)

        assert result.passed is False
        assert 'enforcement_mode = "enforce"' in result.findings[0].issue

    def test_staging_in_enforce_mode(self, template_copy, rewrite):
        """Should fail when staging enforces policies."""
        rewrite(env_file(template_copy, "staging", "main.tf"), '"audit"', '"enforce"')

        assert check_policy_mode("staging", template_copy).passed is False
