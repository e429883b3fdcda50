"""Terraform file detection and HCL syntax check.

Finds .tf files under a directory and checks that they parse with python-hcl2.
The parsed tree is only used as a well-formedness signal, never inspected.
"""

import logging
import os
from pathlib import Path
from typing import Any

import hcl2

from shared.constants import EXCLUDED_DIRS

logger = logging.getLogger(__name__)


def find_tf_files(root_path: str | Path) -> list[Path]:
    """Find all .tf files below a directory.

    Args:
        root_path: Directory to scan

    Returns:
        Sorted list of .tf file paths (empty if the directory does not exist)
    """
    root = Path(root_path).resolve()
    tf_files: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Filter out excluded directories (modifies dirnames in-place)
        dirnames[:] = [d for d in dirnames if d not in EXCLUDED_DIRS and not d.startswith(".")]

        current_dir = Path(dirpath)
        for filename in filenames:
            if filename.endswith(".tf"):
                tf_files.append(current_dir / filename)

    return sorted(tf_files)


def parse_tf_file(file_path: str | Path) -> dict[str, Any] | None:
    """Parse a single Terraform file.

    Args:
        file_path: Path to .tf file

    Returns:
        Parsed HCL dict or None if the content is not valid HCL

    Raises:
        OSError: If the file cannot be read
    """
    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()

    try:
        return hcl2.loads(content)
    except Exception as e:
        logger.debug(f"HCL parse failed for {file_path}: {e}")
        return None


if __name__ == "__main__":
    import sys

    path = sys.argv[1] if len(sys.argv) > 1 else "."
    for tf_file in find_tf_files(path):
        status = "ok" if parse_tf_file(tf_file) is not None else "INVALID"
        print(f"{status:8} {tf_file}")
