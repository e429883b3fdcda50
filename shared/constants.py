"""Locked constants for EKS template verification."""

# Schema version for suite reports
SCHEMA_VERSION = "1.0"

# Deployment targets, each with its own directory under live/aws/
ENVIRONMENTS = ("staging", "prod")

# Directory layout of the template repository
MODULES_DIR = "modules"
LIVE_DIR = ("live", "aws")
MARKER_DIRS = ("live", "modules")

# Directory names the harness may be invoked from inside the template
KNOWN_SUBDIRS = {"unit", "property", "test", "tests"}

# Directories to exclude when scanning for Terraform files
EXCLUDED_DIRS = {
    ".terraform",
    ".git",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
}

# Availability zone bounds for the network module
AZ_COUNT_MIN = 2
AZ_COUNT_MAX = 4

# Modules whose variables and outputs must be documented
DOCUMENTED_MODULES = [
    "clusters/eks",
    "platform/argocd",
    "platform/policy-engine",
    "platform/external-secrets",
    "platform/observability",
    "platform/ingress",
    "platform/velero",
    "compliance",
]

WORKFLOWS_DIR = ".github/workflows"
PLAN_WORKFLOW = f"{WORKFLOWS_DIR}/terraform-plan.yml"
APPLY_STAGING_WORKFLOW = f"{WORKFLOWS_DIR}/terraform-apply-staging.yml"
APPLY_PROD_WORKFLOW = f"{WORKFLOWS_DIR}/terraform-apply-prod.yml"

# --- Whitelists ---

CONTROL_PLANE_LOG_TYPES = ["api", "audit", "authenticator", "controllerManager", "scheduler"]

REQUIRED_VPC_ENDPOINTS = ["ecr.api", "ecr.dkr", "sts", "logs", "ssm"]

NODE_GROUP_FIELDS = [
    "instance_types",
    "min_size",
    "max_size",
    "desired_size",
    "disk_size",
    "labels",
    "taints",
]

MANDATORY_TAGS = ["Environment", "ManagedBy", "Project", "Owner", "Purpose"]

SECURITY_POLICIES = ["block_privileged", "require_non_root", "require_resources", "block_latest_tag"]

POLICY_ENGINES = ["kyverno", "gatekeeper"]

ARGOCD_OUTPUTS = ["namespace", "server_service_name", "initial_admin_password_secret"]

IRSA_MODULE_FILES = [
    ("platform/external-secrets", "main.tf"),
    ("platform/velero", "main.tf"),
    ("platform/ingress", "alb_controller.tf"),
]

TAINT_EFFECTS = ["NoSchedule", "PreferNoSchedule", "NoExecute"]

INSTANCE_TYPES = [
    "t3.medium",
    "t3.large",
    "t3.xlarge",
    "m5.large",
    "m5.xlarge",
    "m5.2xlarge",
]

# System node groups may not scale by more than this many nodes
SYSTEM_NODE_GROUP_MAX_SPREAD = 3

# --- Per-environment lookup tables ---

EXPECTED_VPC_CIDRS = {
    "staging": "10.0.0.0/16",
    "prod": "10.1.0.0/16",
}

EXPECTED_INSTANCE_TYPE_PATTERNS = {
    "staging": r"t3\.(medium|large)",
    "prod": r"m5\.(xlarge|2xlarge)",
}

EXPECTED_APPS_MAX_SIZE = {
    "staging": 10,
    "prod": 50,
}

EXPECTED_SINGLE_NAT_GATEWAY = {
    "staging": "true",
    "prod": "false",
}

EXPECTED_RETENTION_DAYS = {
    "staging": {"prometheus_retention_days": 7, "loki_retention_days": 3},
    "prod": {"prometheus_retention_days": 30, "loki_retention_days": 15},
}

EXPECTED_BACKUP = {
    "staging": {"schedule": "0 2 * * *", "backup_retention_days": 7},
    "prod": {"schedule": "0 */6 * * *", "backup_retention_days": 30},
}

EXPECTED_ENFORCEMENT_MODE = {
    "staging": "audit",
    "prod": "enforce",
}

# --- Property definitions with locked descriptions ---

PROPERTY_DEFINITIONS = {
    # backend
    "backend.state_locking": {
        "name": "S3 Native State Locking",
        "description": "backend.tf enables use_lockfile and does not use a DynamoDB lock table.",
    },
    "backend.encryption": {
        "name": "Encrypted State",
        "description": "backend.tf sets encrypt = true.",
    },
    # isolation
    "isolation.state_paths": {
        "name": "Unique State Locations",
        "description": "Distinct environments never declare the same state bucket and key.",
    },
    "isolation.vpc_cidrs": {
        "name": "Unique VPC CIDRs",
        "description": "Distinct environments declare different vpc_cidr values.",
    },
    "isolation.environment_identity": {
        "name": "Environment Identity",
        "description": "Each environment's backend is scoped by name and its VPC uses the expected CIDR.",
    },
    # network
    "network.subnets_multi_az": {
        "name": "Multi-AZ Subnets",
        "description": "The VPC creates private and public subnets keyed by availability zone.",
    },
    "network.nat_gateways": {
        "name": "NAT Gateway per AZ",
        "description": "NAT gateways are counted per AZ with a single-NAT switch.",
    },
    "network.subnet_kubernetes_tags": {
        "name": "Kubernetes Subnet Tags",
        "description": "Subnets carry kubernetes.io/cluster/<cluster_name> discovery tags.",
    },
    "network.vpc_endpoints": {
        "name": "Complete VPC Endpoints",
        "description": "Endpoints exist for ecr.api, ecr.dkr, sts, logs and ssm.",
    },
    # eks
    "eks.control_plane_logs": {
        "name": "Control Plane Logs",
        "description": "All five control plane log types are enabled and validated.",
    },
    "eks.secrets_encryption": {
        "name": "Secrets Encryption with KMS",
        "description": "A dedicated KMS key encrypts the secrets resource.",
    },
    "eks.kubernetes_version": {
        "name": "Kubernetes Version Validation",
        "description": "cluster_version is validated against a 1.x pattern.",
    },
    "eks.oidc_provider": {
        "name": "OIDC Provider",
        "description": "IRSA creates an aws_iam_openid_connect_provider.",
    },
    # node groups
    "node_groups.required_fields": {
        "name": "Complete Node Groups",
        "description": "Node group definitions declare every required field.",
    },
    "node_groups.system_taint": {
        "name": "System Node Taint",
        "description": "The system node group is tainted CriticalAddonsOnly=true:NoSchedule.",
    },
    "node_groups.apps_untainted": {
        "name": "Untainted Apps Nodes",
        "description": "The apps node group declares no taints.",
    },
    "node_groups.system_autoscaling": {
        "name": "Conservative System Autoscaling",
        "description": "System node groups scale by at most three nodes.",
    },
    "node_groups.record_supported": {
        "name": "Node Group Record Supported",
        "description": "Every field and taint effect of a node group record is accepted by the module.",
    },
    # environment
    "environment.tfvars_example": {
        "name": "tfvars Example",
        "description": "terraform.tfvars.example exists for the environment.",
    },
    "environment.instance_types": {
        "name": "Instance Types by Environment",
        "description": "Staging uses t3 medium/large, prod uses m5 xlarge/2xlarge.",
    },
    "environment.autoscaling": {
        "name": "Autoscaling by Environment",
        "description": "Apps max_size is 10 in staging and 50 in prod.",
    },
    "environment.nat_gateway_mode": {
        "name": "NAT Gateway Mode",
        "description": "Staging uses a single NAT gateway, prod one per AZ.",
    },
    "environment.mandatory_tags": {
        "name": "Mandatory Tags",
        "description": "default_tags carries Environment, ManagedBy, Project, Owner and Purpose.",
    },
    "environment.retention": {
        "name": "Retention by Environment",
        "description": "Prometheus and Loki retention days match the environment table.",
    },
    "environment.backup_schedule": {
        "name": "Backup Schedule by Environment",
        "description": "Velero schedule and retention match the environment table.",
    },
    "environment.policy_mode": {
        "name": "Policy Enforcement Mode",
        "description": "Staging audits policies, prod enforces them.",
    },
    # platform
    "platform.argocd_release": {
        "name": "ArgoCD Helm Release",
        "description": "ArgoCD is installed from the argo-cd chart with helm_release.",
    },
    "platform.argocd_namespace": {
        "name": "ArgoCD Namespace",
        "description": "ArgoCD creates the argocd kubernetes_namespace.",
    },
    "platform.argocd_tolerations": {
        "name": "ArgoCD Tolerations",
        "description": "ArgoCD tolerations are configurable through var.tolerations.",
    },
    "platform.argocd_outputs": {
        "name": "ArgoCD Outputs",
        "description": "ArgoCD exports namespace, server service and admin secret outputs.",
    },
    "platform.policy_engine_validation": {
        "name": "Policy Engine Validation",
        "description": "The engine variable is validated and accepts kyverno and gatekeeper.",
    },
    "platform.security_policies": {
        "name": "Security Policies",
        "description": "All four baseline security policies exist for kyverno or gatekeeper.",
    },
    "platform.external_secrets_store": {
        "name": "ClusterSecretStore",
        "description": "External Secrets creates a ClusterSecretStore.",
    },
    "platform.external_secrets_region": {
        "name": "External Secrets Region",
        "description": "External Secrets exposes an aws_region variable.",
    },
    "platform.external_secrets_namespace": {
        "name": "External Secrets Namespace",
        "description": "External Secrets creates its kubernetes_namespace.",
    },
    "platform.external_secrets_example": {
        "name": "ExternalSecret Example",
        "description": "An ExternalSecret example manifest ships with the module.",
    },
    "platform.observability_stack": {
        "name": "Observability Stack",
        "description": "kube-prometheus-stack, loki and opentelemetry are installed.",
    },
    "platform.observability_outputs": {
        "name": "Observability Outputs",
        "description": "Grafana and Prometheus endpoints are exported.",
    },
    "platform.ingress_type_validation": {
        "name": "Ingress Type Validation",
        "description": "The ingress_type variable is validated.",
    },
    "platform.cluster_issuer": {
        "name": "Let's Encrypt ClusterIssuer",
        "description": "cert-manager creates a letsencrypt ClusterIssuer.",
    },
    "platform.ingress_route53_zone": {
        "name": "Route53 Zone Variable",
        "description": "Ingress exposes a route53_zone_id variable.",
    },
    "platform.ingress_example": {
        "name": "Ingress Example",
        "description": "An ALB or nginx ingress example manifest ships with the module.",
    },
    "platform.velero_bucket": {
        "name": "Velero Backup Bucket",
        "description": "Velero creates an aws_s3_bucket.",
    },
    "platform.velero_outputs": {
        "name": "Velero Bucket Output",
        "description": "Velero exports the backup bucket name.",
    },
    "platform.irsa_trust": {
        "name": "IRSA Trust Policies",
        "description": "IRSA roles trust the OIDC provider with a StringEquals condition.",
    },
    # compliance
    "compliance.cloudtrail": {
        "name": "CloudTrail",
        "description": "The compliance module creates aws_cloudtrail.",
    },
    "compliance.aws_config": {
        "name": "AWS Config",
        "description": "The compliance module creates a configuration recorder and delivery channel.",
    },
    "compliance.guardduty": {
        "name": "GuardDuty",
        "description": "The compliance module creates aws_guardduty_detector.",
    },
    "compliance.bucket_protection": {
        "name": "Bucket Protection Policies",
        "description": "Log and backup buckets are protected against deletion.",
    },
    # workflows
    "workflows.plan_fmt": {
        "name": "Plan Workflow Format Check",
        "description": "The plan workflow runs terraform fmt -check.",
    },
    "workflows.plan_validate": {
        "name": "Plan Workflow Validate",
        "description": "The plan workflow runs terraform validate.",
    },
    "workflows.plan_plan": {
        "name": "Plan Workflow Plan",
        "description": "The plan workflow runs terraform plan.",
    },
    "workflows.plan_oidc": {
        "name": "Plan Workflow OIDC",
        "description": "The plan workflow assumes an AWS role through OIDC.",
    },
    "workflows.plan_comment": {
        "name": "Plan Workflow PR Comment",
        "description": "The plan workflow reports back to the pull request.",
    },
    "workflows.apply_staging_automatic": {
        "name": "Automatic Staging Apply",
        "description": "Staging applies on push to main without environment protection.",
    },
    "workflows.apply_prod_approval": {
        "name": "Approved Prod Apply",
        "description": "Prod applies through the protected production environment.",
    },
    # documentation
    "documentation.readme": {
        "name": "README",
        "description": "README.md exists at the project root.",
    },
    "documentation.troubleshooting": {
        "name": "Troubleshooting Guide",
        "description": "docs/troubleshooting.md exists.",
    },
    "documentation.cost_optimization": {
        "name": "Cost Optimization Guide",
        "description": "docs/cost-optimization.md exists.",
    },
    "documentation.terraform_docs_config": {
        "name": "terraform-docs Config",
        "description": ".terraform-docs.yml exists.",
    },
    "documentation.tflint_config": {
        "name": "TFLint Config",
        "description": ".tflint.hcl exists.",
    },
    "documentation.test_directory": {
        "name": "Test Directory",
        "description": "A test/ directory with at least one file exists.",
    },
    "documentation.descriptions": {
        "name": "Documented Variables and Outputs",
        "description": "Every variable and output of a module has a non-empty description.",
    },
    # syntax
    "syntax.hcl": {
        "name": "Well-formed HCL",
        "description": "Every .tf file of a module parses as HCL.",
    },
}
