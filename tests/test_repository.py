"""Tests for CI workflow, documentation and syntax properties."""

import pytest

from shared.constants import DOCUMENTED_MODULES
from shared.schemas import FindingKind, PropertyStatus

from action.src.properties import documentation, syntax, workflows

WORKFLOW_CHECKS = [
    workflows.check_plan_fmt,
    workflows.check_plan_validate,
    workflows.check_plan_plan,
    workflows.check_plan_oidc,
    workflows.check_plan_comment,
    workflows.check_apply_staging_automatic,
    workflows.check_apply_prod_approval,
]

DOCUMENTATION_CHECKS = [
    documentation.check_readme,
    documentation.check_troubleshooting,
    documentation.check_cost_optimization,
    documentation.check_terraform_docs_config,
    documentation.check_tflint_config,
    documentation.check_test_directory,
]


def workflow_file(root, name):
    return root / ".github" / "workflows" / name


class TestWorkflows:
    """Tests for CI workflow properties."""

    @pytest.mark.parametrize("check", WORKFLOW_CHECKS, ids=lambda c: c.__name__)
    def test_passes_on_template(self, template_root, check):
        """Should pass every workflow check on the template."""
        assert check(template_root).passed is True

    def test_fmt_without_check_flag(self, template_copy, rewrite):
        """Should fail when terraform fmt runs without -check."""
        rewrite(
            workflow_file(template_copy, "terraform-plan.yml"),
            "terraform fmt -check -recursive",
            "terraform fmt -recursive",
        )

        result = workflows.check_plan_fmt(template_copy)

        assert [f.issue for f in result.findings] == ["terraform fmt must run with -check"]

    def test_static_credentials(self, template_copy, rewrite):
        """Should fail when the plan workflow uses static AWS keys."""
        rewrite(
            workflow_file(template_copy, "terraform-plan.yml"),
            "role-to-assume: ${{ secrets.AWS_PLAN_ROLE_ARN }}",
            "aws-access-key-id: ${{ secrets.AWS_ACCESS_KEY_ID }}",
        )

        assert workflows.check_plan_oidc(template_copy).passed is False

    def test_missing_plan_workflow(self, template_copy):
        """Should report a missing file for every plan check."""
        workflow_file(template_copy, "terraform-plan.yml").unlink()

        for check in WORKFLOW_CHECKS[:5]:
            result = check(template_copy)
            assert result.findings[0].kind == FindingKind.MISSING_FILE

    def test_staging_behind_environment_approval(self, template_copy, rewrite):
        """Should fail when staging waits for environment approval."""
        rewrite(
            workflow_file(template_copy, "terraform-apply-staging.yml"),
            "    runs-on: ubuntu-latest\n",
            "    runs-on: ubuntu-latest\n    environment:\n      name: staging\n",
        )

        result = workflows.check_apply_staging_automatic(template_copy)

        assert result.passed is False
        assert result.findings[0].kind == FindingKind.FORBIDDEN_MATCH

    def test_staging_manual_trigger(self, template_copy, rewrite):
        """Should fail when staging does not apply on push."""
        rewrite(
            workflow_file(template_copy, "terraform-apply-staging.yml"),
            "on:\n  push:\n",
            "on:\n  workflow_dispatch:\n  pull_request:\n",
        )

        assert workflows.check_apply_staging_automatic(template_copy).passed is False

    def test_prod_without_protection(self, template_copy, rewrite):
        """Should fail when prod has no protected environment."""
        rewrite(
            workflow_file(template_copy, "terraform-apply-prod.yml"),
            "    environment:\n      name: production\n",
            "",
        )

        result = workflows.check_apply_prod_approval(template_copy)

        assert result.status == PropertyStatus.FAIL
        assert len(result.findings) == 2


class TestDocumentation:
    """Tests for documentation and tooling properties."""

    @pytest.mark.parametrize("check", DOCUMENTATION_CHECKS, ids=lambda c: c.__name__)
    def test_passes_on_template(self, template_root, check):
        """Should pass every documentation check on the template."""
        assert check(template_root).passed is True

    @pytest.mark.parametrize(
        "check, relative",
        [
            (documentation.check_readme, "README.md"),
            (documentation.check_troubleshooting, "docs/troubleshooting.md"),
            (documentation.check_cost_optimization, "docs/cost-optimization.md"),
            (documentation.check_terraform_docs_config, ".terraform-docs.yml"),
            (documentation.check_tflint_config, ".tflint.hcl"),
        ],
    )
    def test_missing_file(self, template_copy, check, relative):
        """Should report the missing documentation file."""
        (template_copy / relative).unlink()

        result = check(template_copy)

        assert result.findings[0].kind == FindingKind.MISSING_FILE

    def test_empty_test_directory(self, template_copy):
        """Should fail when the test directory is empty."""
        (template_copy / "test" / "README.md").unlink()

        result = documentation.check_test_directory(template_copy)

        assert result.findings[0].kind == FindingKind.PATTERN_MISMATCH

    def test_nested_test_file_counts(self, template_copy):
        """Should count test files in nested directories."""
        test_dir = template_copy / "test"
        (test_dir / "README.md").unlink()
        (test_dir / "unit").mkdir()
        (test_dir / "unit" / "test_vpc.py").write_text("def test_vpc():\n    pass\n")

        assert documentation.check_test_directory(template_copy).passed is True

    @pytest.mark.parametrize("module", DOCUMENTED_MODULES)
    def test_descriptions(self, template_root, module):
        """Should find descriptions on every variable and output."""
        result = documentation.check_descriptions(module, template_root)

        assert result.passed is True, result.findings
        assert result.parameters == {"module": module}

    def test_undocumented_output(self, template_copy):
        """Should report an output without a description."""
        outputs = template_copy / "modules" / "platform" / "velero" / "outputs.tf"
        outputs.write_text(
            outputs.read_text()
            + '\noutput "backup_role_arn" {\n  value = aws_iam_role.velero.arn\n}\n'
        )

        result = documentation.check_descriptions("platform/velero", template_copy)

        assert result.passed is False
        assert result.findings[0].issue == 'output "backup_role_arn" in platform/velero must have a description'

    def test_module_without_outputs(self, template_copy):
        """Should skip files a module does not have."""
        (template_copy / "modules" / "compliance" / "outputs.tf").unlink()

        assert documentation.check_descriptions("compliance", template_copy).passed is True

    def test_unknown_module(self, template_root):
        """Should raise ValueError for an unknown module."""
        with pytest.raises(ValueError):
            documentation.check_descriptions("platform/istio", template_root)


class TestSyntax:
    """Tests for syntax.hcl."""

    @pytest.mark.parametrize("module", DOCUMENTED_MODULES)
    def test_passes_on_template(self, template_root, module):
        """Should parse every module file on the template."""
        assert syntax.check_hcl_syntax(module, template_root).passed is True

    def test_invalid_file(self, template_copy):
        """Should fail when a module file is not valid HCL."""
        broken = template_copy / "modules" / "platform" / "argocd" / "broken.tf"
        broken.write_text('resource "helm_release" "x" {\n  name = \n')

        result = syntax.check_hcl_syntax("platform/argocd", template_copy)

        assert result.passed is False
        assert [f.issue for f in result.findings] == ["broken.tf must be valid HCL"]

    def test_missing_module(self, template_copy):
        """Should fail when the module directory is missing."""
        velero = template_copy / "modules" / "platform" / "velero"
        for path in list(velero.iterdir()):
            path.unlink()
        velero.rmdir()

        result = syntax.check_hcl_syntax("platform/velero", template_copy)

        assert result.findings[0].kind == FindingKind.MISSING_FILE

    def test_module_without_tf_files(self, template_copy):
        """Should fail when the module has no .tf files."""
        velero = template_copy / "modules" / "platform" / "velero"
        for path in list(velero.iterdir()):
            path.unlink()

        result = syntax.check_hcl_syntax("platform/velero", template_copy)

        assert result.findings[0].kind == FindingKind.PATTERN_MISMATCH

    def test_unknown_module(self, template_root):
        """Should raise ValueError for an unknown module."""
        with pytest.raises(ValueError):
            syntax.check_hcl_syntax("platform/istio", template_root)
