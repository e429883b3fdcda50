"""Shared schemas and constants for EKS template verification."""

from shared.schemas import (
    Finding,
    FindingKind,
    NodeGroupConfig,
    PropertyResult,
    PropertyStatus,
    SuiteReport,
    SuiteSummary,
    Taint,
)
from shared.constants import (
    ENVIRONMENTS,
    PROPERTY_DEFINITIONS,
    SCHEMA_VERSION,
)

__all__ = [
    "Finding",
    "FindingKind",
    "NodeGroupConfig",
    "PropertyResult",
    "PropertyStatus",
    "SuiteReport",
    "SuiteSummary",
    "Taint",
    "ENVIRONMENTS",
    "PROPERTY_DEFINITIONS",
    "SCHEMA_VERSION",
]
