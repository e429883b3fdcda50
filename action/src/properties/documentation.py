"""Repository documentation and tooling properties."""

from pathlib import Path

from shared.constants import DOCUMENTED_MODULES
from shared.schemas import PropertyResult

from action.src.locator import module_file, repository_path
from action.src.predicates import extract_named_blocks, has_description_block
from action.src.properties.common import Evaluation


def _check_exists(property_id: str, relative: str, root: str | Path | None) -> PropertyResult:
    evaluation = Evaluation(property_id)
    evaluation.require_file(repository_path(relative, root))
    return evaluation.result()


def check_readme(root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.readme."""
    return _check_exists("documentation.readme", "README.md", root)


def check_troubleshooting(root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.troubleshooting."""
    return _check_exists("documentation.troubleshooting", "docs/troubleshooting.md", root)


def check_cost_optimization(root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.cost_optimization."""
    return _check_exists("documentation.cost_optimization", "docs/cost-optimization.md", root)


def check_terraform_docs_config(root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.terraform_docs_config."""
    return _check_exists("documentation.terraform_docs_config", ".terraform-docs.yml", root)


def check_tflint_config(root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.tflint_config."""
    return _check_exists("documentation.tflint_config", ".tflint.hcl", root)


def check_test_directory(root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.test_directory."""
    evaluation = Evaluation("documentation.test_directory")
    test_dir = repository_path("test", root)

    if evaluation.require_directory(test_dir):
        evaluation.expect(
            any(path.is_file() for path in test_dir.rglob("*")),
            test_dir,
            "test/ must contain at least one file",
        )

    return evaluation.result()


def check_descriptions(module: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate documentation.descriptions for one module.

    Every variable in variables.tf and every output in outputs.tf needs a
    non-empty description. A module without one of the files skips it.
    """
    if module not in DOCUMENTED_MODULES:
        raise ValueError(f"Unknown module '{module}'")

    evaluation = Evaluation("documentation.descriptions", module=module)

    for filename, block_type in [("variables.tf", "variable"), ("outputs.tf", "output")]:
        path = module_file(module, filename, root)
        if not evaluation.optional_file(path):
            continue
        for name in extract_named_blocks(path, block_type):
            evaluation.expect(
                has_description_block(path, block_type, name),
                path,
                f'{block_type} "{name}" in {module} must have a description',
            )

    return evaluation.result()
