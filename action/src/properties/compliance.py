"""Account-level compliance properties (audit trail, configuration recording,
threat detection, protected log buckets)."""

from pathlib import Path

from shared.schemas import PropertyResult

from action.src.locator import module_file
from action.src.predicates import contains, count_resources
from action.src.properties.common import Evaluation

COMPLIANCE = "compliance"
VELERO = "platform/velero"


def _expect_resources(
    evaluation: Evaluation, path: Path, resource_types: list[str]
) -> None:
    for resource_type in resource_types:
        evaluation.expect(
            count_resources(path, resource_type) > 0,
            path,
            f"compliance module must create {resource_type}",
        )


def check_cloudtrail(root: str | Path | None = None) -> PropertyResult:
    """Evaluate compliance.cloudtrail."""
    evaluation = Evaluation("compliance.cloudtrail")
    main = module_file(COMPLIANCE, "main.tf", root)

    if evaluation.require_file(main):
        _expect_resources(evaluation, main, ["aws_cloudtrail"])

    return evaluation.result()


def check_aws_config(root: str | Path | None = None) -> PropertyResult:
    """Evaluate compliance.aws_config."""
    evaluation = Evaluation("compliance.aws_config")
    main = module_file(COMPLIANCE, "main.tf", root)

    if evaluation.require_file(main):
        _expect_resources(
            evaluation,
            main,
            ["aws_config_configuration_recorder", "aws_config_delivery_channel"],
        )

    return evaluation.result()


def check_guardduty(root: str | Path | None = None) -> PropertyResult:
    """Evaluate compliance.guardduty."""
    evaluation = Evaluation("compliance.guardduty")
    main = module_file(COMPLIANCE, "main.tf", root)

    if evaluation.require_file(main):
        _expect_resources(evaluation, main, ["aws_guardduty_detector"])

    return evaluation.result()


def check_bucket_protection(root: str | Path | None = None) -> PropertyResult:
    """Evaluate compliance.bucket_protection.

    Audit log buckets need a policy denying s3:DeleteBucket; Velero must keep
    its backups in a managed bucket. Absent modules are skipped.
    """
    evaluation = Evaluation("compliance.bucket_protection")
    compliance_main = module_file(COMPLIANCE, "main.tf", root)
    velero_main = module_file(VELERO, "main.tf", root)

    if evaluation.optional_file(compliance_main):
        evaluation.expect(
            contains(compliance_main, "aws_s3_bucket_policy"),
            compliance_main,
            "audit log bucket must have an aws_s3_bucket_policy",
        )
        evaluation.expect(
            contains(compliance_main, "DeleteBucket"),
            compliance_main,
            "bucket policy must deny s3:DeleteBucket",
        )

    if evaluation.optional_file(velero_main):
        evaluation.expect(
            contains(velero_main, "aws_s3_bucket"),
            velero_main,
            "Velero backups must live in a managed aws_s3_bucket",
        )

    return evaluation.result()
