"""HCL well-formedness property."""

from pathlib import Path

from shared.constants import DOCUMENTED_MODULES
from shared.schemas import PropertyResult

from action.src.detect import find_tf_files, parse_tf_file
from action.src.locator import module_path
from action.src.properties.common import Evaluation


def check_hcl_syntax(module: str, root: str | Path | None = None) -> PropertyResult:
    """Evaluate syntax.hcl for one module.

    Only parse success is judged; the parsed tree is discarded.
    """
    if module not in DOCUMENTED_MODULES:
        raise ValueError(f"Unknown module '{module}'")

    evaluation = Evaluation("syntax.hcl", module=module)
    directory = module_path(module, root)

    if evaluation.require_directory(directory):
        tf_files = find_tf_files(directory)
        evaluation.expect(bool(tf_files), directory, f"{module} must contain .tf files")
        for tf_file in tf_files:
            evaluation.expect(
                parse_tf_file(tf_file) is not None,
                tf_file,
                f"{tf_file.name} must be valid HCL",
            )

    return evaluation.result()
