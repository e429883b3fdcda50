"""CI workflow properties for the plan and apply pipelines."""

from pathlib import Path

from shared.constants import APPLY_PROD_WORKFLOW, APPLY_STAGING_WORKFLOW, PLAN_WORKFLOW
from shared.schemas import PropertyResult

from action.src.locator import repository_path
from action.src.predicates import contains, matches_pattern
from action.src.properties.common import Evaluation


def _check_plan_steps(
    property_id: str, root: str | Path | None, expected: list[tuple[str, str]]
) -> PropertyResult:
    evaluation = Evaluation(property_id)
    workflow = repository_path(PLAN_WORKFLOW, root)

    if evaluation.require_file(workflow):
        for text, issue in expected:
            evaluation.expect(contains(workflow, text), workflow, issue)

    return evaluation.result()


def check_plan_fmt(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.plan_fmt."""
    return _check_plan_steps(
        "workflows.plan_fmt",
        root,
        [
            ("terraform fmt", "plan workflow must run terraform fmt"),
            ("fmt -check", "terraform fmt must run with -check"),
        ],
    )


def check_plan_validate(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.plan_validate."""
    return _check_plan_steps(
        "workflows.plan_validate",
        root,
        [("terraform validate", "plan workflow must run terraform validate")],
    )


def check_plan_plan(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.plan_plan."""
    return _check_plan_steps(
        "workflows.plan_plan",
        root,
        [("terraform plan", "plan workflow must run terraform plan")],
    )


def check_plan_oidc(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.plan_oidc."""
    return _check_plan_steps(
        "workflows.plan_oidc",
        root,
        [
            (
                "aws-actions/configure-aws-credentials",
                "plan workflow must use aws-actions/configure-aws-credentials",
            ),
            ("role-to-assume", "AWS credentials must come from role-to-assume (OIDC)"),
        ],
    )


def check_plan_comment(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.plan_comment."""
    evaluation = Evaluation("workflows.plan_comment")
    workflow = repository_path(PLAN_WORKFLOW, root)

    if evaluation.require_file(workflow):
        evaluation.expect(
            matches_pattern(workflow, r"(comment|PR|pull.*request)"),
            workflow,
            "plan workflow must post the plan to the pull request",
        )

    return evaluation.result()


def check_apply_staging_automatic(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.apply_staging_automatic.

    Staging applies on every push to main, so the job must not sit behind an
    environment protection rule.
    """
    evaluation = Evaluation("workflows.apply_staging_automatic")
    workflow = repository_path(APPLY_STAGING_WORKFLOW, root)

    if evaluation.require_file(workflow):
        evaluation.expect(
            matches_pattern(workflow, r"on:\s*\n\s*push:"),
            workflow,
            "staging apply must trigger on push",
        )
        evaluation.expect(contains(workflow, "main"), workflow, "staging apply must run on main")
        evaluation.forbid(
            contains(workflow, "environment:"),
            workflow,
            "staging apply must not require environment approval",
        )

    return evaluation.result()


def check_apply_prod_approval(root: str | Path | None = None) -> PropertyResult:
    """Evaluate workflows.apply_prod_approval."""
    evaluation = Evaluation("workflows.apply_prod_approval")
    workflow = repository_path(APPLY_PROD_WORKFLOW, root)

    if evaluation.require_file(workflow):
        evaluation.expect(
            contains(workflow, "environment:"), workflow, "prod apply must use environment protection"
        )
        evaluation.expect(
            contains(workflow, "name: production"),
            workflow,
            "prod apply must use the production environment",
        )

    return evaluation.result()
