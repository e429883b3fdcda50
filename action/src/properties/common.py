"""Shared building blocks for property checks.

A check opens an Evaluation, records findings while it inspects files, and
returns ``evaluation.result()``. The property passes when nothing was recorded.
"""

from pathlib import Path
from typing import Any

from shared.constants import PROPERTY_DEFINITIONS
from shared.schemas import Finding, FindingKind, PropertyResult, PropertyStatus

from action.src.locator import directory_exists, file_exists


class Evaluation:
    """Accumulates findings for a single property evaluation."""

    def __init__(self, property_id: str, **parameters: Any):
        """Start evaluating a property.

        Args:
            property_id: Key into PROPERTY_DEFINITIONS
            **parameters: Inputs the property is evaluated with
        """
        if property_id not in PROPERTY_DEFINITIONS:
            raise KeyError(f"Unknown property '{property_id}'")
        self.property_id = property_id
        self.parameters = parameters
        self.findings: list[Finding] = []
        self.inspected: list[str] = []

    def _inspect(self, path: Path) -> None:
        if str(path) not in self.inspected:
            self.inspected.append(str(path))

    def add(self, kind: FindingKind, path: Path | None, issue: str) -> None:
        self.findings.append(
            Finding(kind=kind, path=str(path) if path is not None else None, issue=issue)
        )

    def require_file(self, path: Path) -> bool:
        """Record a MISSING_FILE finding unless the file exists."""
        self._inspect(path)
        if file_exists(path):
            return True
        self.add(FindingKind.MISSING_FILE, path, f"{path.name} must exist")
        return False

    def require_directory(self, path: Path) -> bool:
        """Record a MISSING_FILE finding unless the directory exists."""
        self._inspect(path)
        if directory_exists(path):
            return True
        self.add(FindingKind.MISSING_FILE, path, f"{path.name}/ directory must exist")
        return False

    def require_any_file(self, paths: list[Path], issue: str) -> list[Path]:
        """Return the paths that exist; record MISSING_FILE if none does."""
        present = [path for path in paths if self.optional_file(path)]
        if not present:
            self.add(FindingKind.MISSING_FILE, paths[0].parent, issue)
        return present

    def optional_file(self, path: Path) -> bool:
        """Whether an optional artifact is present; absence is not a finding."""
        if file_exists(path):
            self._inspect(path)
            return True
        return False

    def expect(self, condition: bool, path: Path | None, issue: str) -> bool:
        """Record a PATTERN_MISMATCH finding unless the condition holds."""
        if not condition:
            self.add(FindingKind.PATTERN_MISMATCH, path, issue)
        return condition

    def forbid(self, condition: bool, path: Path | None, issue: str) -> bool:
        """Record a FORBIDDEN_MATCH finding if the condition holds."""
        if condition:
            self.add(FindingKind.FORBIDDEN_MATCH, path, issue)
        return not condition

    def result(self) -> PropertyResult:
        return PropertyResult(
            id=self.property_id,
            name=PROPERTY_DEFINITIONS[self.property_id]["name"],
            status=PropertyStatus.PASS if not self.findings else PropertyStatus.FAIL,
            parameters=self.parameters,
            findings=list(self.findings),
            inspected_files=list(self.inspected),
        )
