"""Platform add-on properties (ArgoCD, policy engine, External Secrets,
observability, ingress, Velero, IRSA)."""

from pathlib import Path

from shared.constants import (
    ARGOCD_OUTPUTS,
    IRSA_MODULE_FILES,
    POLICY_ENGINES,
    SECURITY_POLICIES,
)
from shared.schemas import PropertyResult

from action.src.locator import file_exists, module_file, module_path
from action.src.predicates import (
    contains,
    count_resources,
    extract_outputs,
    has_validation_for_field,
)
from action.src.properties.common import Evaluation

ARGOCD = "platform/argocd"
POLICY_ENGINE = "platform/policy-engine"
EXTERNAL_SECRETS = "platform/external-secrets"
OBSERVABILITY = "platform/observability"
INGRESS = "platform/ingress"
VELERO = "platform/velero"


def _expect_any_example(
    evaluation: Evaluation, examples_dir: Path, filenames: list[str], issue: str
) -> None:
    if evaluation.require_directory(examples_dir):
        evaluation.expect(
            any(file_exists(examples_dir / name) for name in filenames), examples_dir, issue
        )


def _expect_any_output(
    evaluation: Evaluation, outputs_file: Path, names: list[str], issue: str
) -> None:
    outputs = extract_outputs(outputs_file)
    evaluation.expect(any(name in outputs for name in names), outputs_file, issue)


# --- ArgoCD ---


def check_argocd_release(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.argocd_release."""
    evaluation = Evaluation("platform.argocd_release")
    main = module_file(ARGOCD, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(
            contains(main, 'resource "helm_release"'), main, "ArgoCD must use helm_release"
        )
        evaluation.expect(contains(main, "argo-cd"), main, "Helm chart must be argo-cd")

    return evaluation.result()


def check_argocd_namespace(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.argocd_namespace."""
    evaluation = Evaluation("platform.argocd_namespace")
    main = module_file(ARGOCD, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(
            contains(main, 'resource "kubernetes_namespace"'),
            main,
            "ArgoCD must create kubernetes_namespace",
        )
        evaluation.expect(contains(main, '"argocd"'), main, "namespace must be argocd")

    return evaluation.result()


def check_argocd_tolerations(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.argocd_tolerations."""
    evaluation = Evaluation("platform.argocd_tolerations")
    main = module_file(ARGOCD, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(contains(main, "tolerations"), main, "ArgoCD must set tolerations")
        evaluation.expect(
            contains(main, "var.tolerations"), main, "tolerations must come from var.tolerations"
        )

    return evaluation.result()


def check_argocd_outputs(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.argocd_outputs."""
    evaluation = Evaluation("platform.argocd_outputs")
    outputs_file = module_file(ARGOCD, "outputs.tf", root)

    if evaluation.require_file(outputs_file):
        outputs = extract_outputs(outputs_file)
        for expected in ARGOCD_OUTPUTS:
            evaluation.expect(
                expected in outputs, outputs_file, f"ArgoCD must export output {expected}"
            )

    return evaluation.result()


# --- Policy engine ---


def check_policy_engine_validation(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.policy_engine_validation."""
    evaluation = Evaluation("platform.policy_engine_validation")
    variables = module_file(POLICY_ENGINE, "variables.tf", root)

    if evaluation.require_file(variables):
        evaluation.expect(
            has_validation_for_field(variables, "engine"),
            variables,
            "engine variable must have a validation block",
        )
        for engine in POLICY_ENGINES:
            evaluation.expect(
                contains(variables, engine), variables, f"engine validation must accept {engine}"
            )

    return evaluation.result()


def check_security_policies(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.security_policies.

    Each policy may be implemented for either engine; at least one of the two
    policy files has to exist.
    """
    evaluation = Evaluation("platform.security_policies")
    policy_files = [
        module_file(POLICY_ENGINE, f"policies_{engine}.tf", root) for engine in POLICY_ENGINES
    ]
    present = evaluation.require_any_file(
        policy_files, "policies_kyverno.tf or policies_gatekeeper.tf must exist"
    )

    if present:
        for policy in SECURITY_POLICIES:
            evaluation.expect(
                any(contains(path, policy) for path in present),
                present[0],
                f"security policy {policy} must exist",
            )

    return evaluation.result()


# --- External Secrets ---


def check_external_secrets_store(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.external_secrets_store."""
    evaluation = Evaluation("platform.external_secrets_store")
    main = module_file(EXTERNAL_SECRETS, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(
            contains(main, "ClusterSecretStore"), main, "External Secrets must create ClusterSecretStore"
        )

    return evaluation.result()


def check_external_secrets_region(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.external_secrets_region."""
    evaluation = Evaluation("platform.external_secrets_region")
    variables = module_file(EXTERNAL_SECRETS, "variables.tf", root)

    if evaluation.require_file(variables):
        evaluation.expect(
            contains(variables, 'variable "aws_region"'),
            variables,
            "External Secrets must declare variable aws_region",
        )

    return evaluation.result()


def check_external_secrets_namespace(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.external_secrets_namespace."""
    evaluation = Evaluation("platform.external_secrets_namespace")
    main = module_file(EXTERNAL_SECRETS, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(
            contains(main, 'resource "kubernetes_namespace"'),
            main,
            "External Secrets must create kubernetes_namespace",
        )

    return evaluation.result()


def check_external_secrets_example(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.external_secrets_example."""
    evaluation = Evaluation("platform.external_secrets_example")
    _expect_any_example(
        evaluation,
        module_path(EXTERNAL_SECRETS, root) / "examples",
        ["external-secret-example.yaml", "example.yaml"],
        "an ExternalSecret example manifest must exist",
    )
    return evaluation.result()


# --- Observability ---


def check_observability_stack(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.observability_stack."""
    evaluation = Evaluation("platform.observability_stack")
    main = module_file(OBSERVABILITY, "main.tf", root)

    if evaluation.require_file(main):
        for chart in ["kube-prometheus-stack", "loki", "opentelemetry"]:
            evaluation.expect(contains(main, chart), main, f"observability must install {chart}")

    return evaluation.result()


def check_observability_outputs(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.observability_outputs."""
    evaluation = Evaluation("platform.observability_outputs")
    outputs_file = module_file(OBSERVABILITY, "outputs.tf", root)

    if evaluation.require_file(outputs_file):
        _expect_any_output(
            evaluation,
            outputs_file,
            ["grafana_endpoint", "grafana_url"],
            "observability must export a Grafana endpoint",
        )
        _expect_any_output(
            evaluation,
            outputs_file,
            ["prometheus_endpoint", "prometheus_url"],
            "observability must export a Prometheus endpoint",
        )

    return evaluation.result()


# --- Ingress ---


def check_ingress_type_validation(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.ingress_type_validation."""
    evaluation = Evaluation("platform.ingress_type_validation")
    variables = module_file(INGRESS, "variables.tf", root)

    if evaluation.require_file(variables):
        evaluation.expect(
            has_validation_for_field(variables, "ingress_type"),
            variables,
            "ingress_type variable must have a validation block",
        )

    return evaluation.result()


def check_cluster_issuer(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.cluster_issuer."""
    evaluation = Evaluation("platform.cluster_issuer")
    cert_manager = module_file(INGRESS, "cert_manager.tf", root)

    if evaluation.require_file(cert_manager):
        evaluation.expect(
            contains(cert_manager, "ClusterIssuer"), cert_manager, "ingress must create ClusterIssuer"
        )
        evaluation.expect(
            contains(cert_manager, "letsencrypt"),
            cert_manager,
            "ClusterIssuer must use Let's Encrypt",
        )

    return evaluation.result()


def check_ingress_route53_zone(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.ingress_route53_zone."""
    evaluation = Evaluation("platform.ingress_route53_zone")
    variables = module_file(INGRESS, "variables.tf", root)

    if evaluation.require_file(variables):
        evaluation.expect(
            contains(variables, 'variable "route53_zone_id"'),
            variables,
            "ingress must declare variable route53_zone_id",
        )

    return evaluation.result()


def check_ingress_example(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.ingress_example."""
    evaluation = Evaluation("platform.ingress_example")
    _expect_any_example(
        evaluation,
        module_path(INGRESS, root) / "examples",
        ["ingress-alb-example.yaml", "ingress-nginx-example.yaml"],
        "an ALB or nginx Ingress example manifest must exist",
    )
    return evaluation.result()


# --- Velero ---


def check_velero_bucket(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.velero_bucket."""
    evaluation = Evaluation("platform.velero_bucket")
    main = module_file(VELERO, "main.tf", root)

    if evaluation.require_file(main):
        evaluation.expect(
            count_resources(main, "aws_s3_bucket") > 0, main, "Velero must create aws_s3_bucket"
        )

    return evaluation.result()


def check_velero_outputs(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.velero_outputs."""
    evaluation = Evaluation("platform.velero_outputs")
    outputs_file = module_file(VELERO, "outputs.tf", root)

    if evaluation.require_file(outputs_file):
        _expect_any_output(
            evaluation,
            outputs_file,
            ["backup_bucket_name", "bucket_name"],
            "Velero must export the bucket name",
        )

    return evaluation.result()


# --- IRSA ---


def check_irsa_trust(root: str | Path | None = None) -> PropertyResult:
    """Evaluate platform.irsa_trust.

    Modules that are not part of the template are skipped.
    """
    evaluation = Evaluation("platform.irsa_trust")

    for module_name, filename in IRSA_MODULE_FILES:
        path = module_file(module_name, filename, root)
        if not evaluation.optional_file(path):
            continue
        evaluation.expect(contains(path, "aws_iam_role"), path, f"{module_name} must create an IAM role")
        evaluation.expect(
            contains(path, "oidc_provider"), path, f"{module_name} role must trust the OIDC provider"
        )
        evaluation.expect(
            contains(path, "StringEquals"),
            path,
            f"{module_name} trust policy must pin the service account with StringEquals",
        )

    return evaluation.result()
