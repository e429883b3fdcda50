"""Pydantic schemas for EKS template verification results.

These schemas define the structure of property verdicts and the suite report.
Schema version is pinned to 1.0.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class PropertyStatus(str, Enum):
    """Verdict of a single property evaluation."""

    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


class FindingKind(str, Enum):
    """Why a property did not pass."""

    MISSING_FILE = "MISSING_FILE"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"
    FORBIDDEN_MATCH = "FORBIDDEN_MATCH"
    READ_ERROR = "READ_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    CHECK_ERROR = "CHECK_ERROR"


# --- Property Results ---


class Finding(BaseModel):
    """A single reason a property failed."""

    kind: FindingKind
    path: str | None = Field(default=None, description="File or directory the finding refers to")
    issue: str = Field(description="Human-readable explanation")


class PropertyResult(BaseModel):
    """Verdict for one evaluation of a named property."""

    id: str = Field(description="Property ID (e.g., backend.state_locking)")
    name: str = Field(description="Human-readable property name")
    status: PropertyStatus
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Inputs the property was evaluated with"
    )
    findings: list[Finding] = Field(default_factory=list)
    inspected_files: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status == PropertyStatus.PASS


# --- Generated Records ---


class Taint(BaseModel):
    """A Kubernetes taint on a node group."""

    key: str
    value: str = ""
    effect: str


class NodeGroupConfig(BaseModel):
    """Structural record of a managed node group."""

    instance_types: list[str] = Field(default_factory=list)
    min_size: int = Field(ge=0)
    max_size: int = Field(ge=0)
    desired_size: int = Field(ge=0)
    disk_size: int = Field(default=20, ge=1)
    labels: dict[str, str] = Field(default_factory=dict)
    taints: list[Taint] = Field(default_factory=list)

    def is_consistent(self) -> bool:
        """Whether the size bounds are ordered and instance types are given."""
        return (
            self.min_size <= self.desired_size <= self.max_size
            and len(self.instance_types) > 0
        )

    def populated_fields(self) -> list[str]:
        """Field names this record actually sets, in declaration order."""
        fields = ["instance_types", "min_size", "max_size", "desired_size", "disk_size"]
        if self.labels:
            fields.append("labels")
        if self.taints:
            fields.append("taints")
        return fields


# --- Suite Report ---


class SuiteSummary(BaseModel):
    """Aggregated counts for a suite run."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    errored: int = 0


class SuiteReport(BaseModel):
    """Report produced by a full verification run."""

    schema_version: str = "1.0"
    project_root: str
    generated_at: str = Field(description="ISO 8601 timestamp")
    status: PropertyStatus
    summary: SuiteSummary
    results: list[PropertyResult] = Field(default_factory=list)

    def failures(self) -> list[PropertyResult]:
        return [r for r in self.results if not r.passed]
