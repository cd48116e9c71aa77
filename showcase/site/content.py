"""Static content rendered by the marketing site.

Every section of the page is plain data defined here; templates only map it
to markup. Terraform and Rego samples are shipped as package data files under
`samples/` and loaded once on first use.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources


@dataclass(frozen=True)
class NavLink:
    label: str
    href: str


@dataclass(frozen=True)
class FeaturePill:
    icon: str
    label: str


@dataclass(frozen=True)
class ArchitectureLayer:
    title: str
    items: tuple[str, ...]
    color: str


@dataclass(frozen=True)
class SecurityFeature:
    title: str
    description: str


@dataclass(frozen=True)
class PipelineStage:
    """One CI/CD pipeline stage card.

    Attributes:
        stage_id: Stable identifier used in the `stage` query parameter.
        name: Display name.
        description: One-line purpose.
        tool: Tool that implements the stage.
        color: Palette key used by the stylesheet.
        details: What the stage does.
        failure_example: Change that makes the stage fail.
    """

    stage_id: str
    name: str
    description: str
    tool: str
    color: str
    details: tuple[str, ...]
    failure_example: str


@dataclass(frozen=True)
class Principle:
    title: str
    description: str


@dataclass(frozen=True)
class SecurityControl:
    name: str
    tool: str
    description: str
    enforcement: str
    status: str


@dataclass(frozen=True)
class SecurityControlCategory:
    category: str
    items: tuple[SecurityControl, ...]


@dataclass(frozen=True)
class SecurityMetric:
    label: str
    value: str
    suffix: str


@dataclass(frozen=True)
class ComplianceFramework:
    name: str
    relevant_controls: tuple[str, ...]


@dataclass(frozen=True)
class CodeSample:
    """Illustrative source file shown in a tabbed code viewer.

    Attributes:
        name: File name, also the tab key.
        description: One-line summary.
        language: Label shown on the code block.
        category: Optional grouping badge.
    """

    name: str
    description: str
    language: str
    category: str = ""

    @property
    def code(self) -> str:
        return content_load_sample(self.name)


@dataclass(frozen=True)
class EnforcementStep:
    step: str
    title: str
    description: str


NAV_LINKS = (
    NavLink(label="Architecture", href="#architecture"),
    NavLink(label="Pipeline", href="#pipeline"),
    NavLink(label="Security", href="#security"),
    NavLink(label="Infrastructure", href="#infrastructure"),
    NavLink(label="Policies", href="#policies"),
)

HERO_FEATURES = (
    FeaturePill(icon="🔒", label="Secret Scanning"),
    FeaturePill(icon="🐳", label="Container Security"),
    FeaturePill(icon="📋", label="Policy-as-Code"),
    FeaturePill(icon="🏗️", label="IaC Security"),
    FeaturePill(icon="✅", label="Manual Approval"),
    FeaturePill(icon="🔍", label="Drift Detection"),
)

ARCHITECTURE_LAYERS = (
    ArchitectureLayer(
        title="User Layer",
        items=("HTTPS Traffic", "CloudFront CDN (Optional)", "WAF Protection"),
        color="devsec",
    ),
    ArchitectureLayer(
        title="Load Balancing",
        items=("Application Load Balancer", "Target Groups", "Health Checks"),
        color="purple",
    ),
    ArchitectureLayer(
        title="Compute Layer",
        items=("ECS Fargate Frontend", "ECS Fargate Backend", "Auto Scaling"),
        color="pink",
    ),
    ArchitectureLayer(
        title="Network Layer",
        items=("VPC with Public/Private Subnets", "NAT Gateway", "Security Groups"),
        color="amber",
    ),
)

ARCHITECTURE_SECURITY_FEATURES = (
    SecurityFeature(
        title="Network Isolation",
        description="Backend services run in private subnets, accessible only from the frontend security group. "
        "No direct internet access to backend containers.",
    ),
    SecurityFeature(
        title="Least Privilege IAM",
        description="Task execution roles and task roles follow the principle of least privilege, granting only "
        "necessary permissions for container operations.",
    ),
    SecurityFeature(
        title="Encrypted Communications",
        description="All traffic is encrypted in transit using TLS. Container images are pulled over encrypted "
        "connections from GitHub Container Registry.",
    ),
    SecurityFeature(
        title="Serverless Security",
        description="AWS Fargate eliminates the need to manage and patch EC2 instances. AWS handles the underlying "
        "infrastructure security.",
    ),
)

AWS_SERVICES = (
    "Amazon VPC",
    "Amazon ECS",
    "AWS Fargate",
    "Application Load Balancer",
    "NAT Gateway",
    "IAM",
    "CloudWatch",
    "AWS Secrets Manager",
)

PIPELINE_STAGES = (
    PipelineStage(
        stage_id="secret-scan",
        name="Secret Scanning",
        description="Detect hardcoded secrets and credentials in source code",
        tool="Gitleaks",
        color="red",
        details=(
            "Scans entire repository for secrets",
            "Detects API keys, passwords, tokens",
            "Prevents credentials from reaching production",
        ),
        failure_example="Add AWS_SECRET_KEY=abc123 to any file",
    ),
    PipelineStage(
        stage_id="frontend-build",
        name="Frontend Lint & Build",
        description="Static analysis and build verification for the marketing site",
        tool="Ruff + pytest",
        color="blue",
        details=(
            "Runs Ruff for code quality",
            "Template rendering smoke tests",
            "Wheel build of the site package",
        ),
        failure_example="Introduce an undefined name or a broken template block",
    ),
    PipelineStage(
        stage_id="backend-build",
        name="Backend Lint & Build",
        description="Code quality checks for the FastAPI backend",
        tool="Ruff + pytest",
        color="green",
        details=(
            "Runs Ruff for code quality",
            "Security-focused linting rules",
            "Validates package dependencies",
        ),
        failure_example="Leave an unused import or a failing endpoint test",
    ),
    PipelineStage(
        stage_id="container-build",
        name="Container Build & Push",
        description="Build Docker images and push to GitHub Container Registry",
        tool="Docker + GHCR",
        color="cyan",
        details=(
            "Multi-stage Docker builds",
            "Tags with SHA and latest",
            "Pushes to ghcr.io/himanm/devops-project-11-*",
        ),
        failure_example="Introduce syntax error in Dockerfile",
    ),
    PipelineStage(
        stage_id="container-scan",
        name="Container Security Scan",
        description="Scan container images for vulnerabilities",
        tool="Trivy",
        color="purple",
        details=(
            "Scans for CVEs in OS packages",
            "Detects vulnerable dependencies",
            "Blocks HIGH/CRITICAL vulnerabilities",
        ),
        failure_example="Use an old base image with known vulnerabilities",
    ),
    PipelineStage(
        stage_id="terraform-validate",
        name="Terraform Format & Validate",
        description="Verify Terraform configuration syntax and formatting",
        tool="Terraform",
        color="violet",
        details=(
            "Checks formatting with terraform fmt",
            "Validates configuration syntax",
            "Initializes providers for validation",
        ),
        failure_example="Remove closing brace or misalign indentation",
    ),
    PipelineStage(
        stage_id="iac-scan",
        name="IaC Security Scan",
        description="Static analysis for infrastructure security misconfigurations",
        tool="Checkov",
        color="orange",
        details=(
            "400+ security policies",
            "AWS best practices checks",
            "Compliance validation",
        ),
        failure_example="Add encryption = false to an S3 bucket",
    ),
    PipelineStage(
        stage_id="opa-check",
        name="OPA Policy Enforcement",
        description="Custom policy validation using Open Policy Agent",
        tool="Conftest + OPA",
        color="teal",
        details=(
            "No public backend policy",
            "No open security groups",
            "Mandatory tagging enforcement",
        ),
        failure_example="Remove required tags or expose backend",
    ),
    PipelineStage(
        stage_id="terraform-plan",
        name="Terraform Plan",
        description="Generate and review infrastructure changes",
        tool="Terraform",
        color="indigo",
        details=(
            "Generates execution plan",
            "Shows resources to be created/modified",
            "Saves plan artifact for apply",
        ),
        failure_example="Reference non-existent variable or resource",
    ),
    PipelineStage(
        stage_id="manual-approval",
        name="Manual Approval",
        description="Human review gate before production deployment",
        tool="GitHub Environments",
        color="yellow",
        details=(
            "Requires designated reviewer approval",
            "Timeout after 72 hours",
            "Audit trail of approvals",
        ),
        failure_example="Reject the deployment manually",
    ),
    PipelineStage(
        stage_id="terraform-apply",
        name="Terraform Apply",
        description="Apply infrastructure changes to production",
        tool="Terraform",
        color="emerald",
        details=(
            "Applies saved plan",
            "Creates/updates AWS resources",
            "Stores state in backend",
        ),
        failure_example="AWS credentials expired or insufficient permissions",
    ),
    PipelineStage(
        stage_id="drift-detection",
        name="Drift Detection",
        description="Detect infrastructure configuration drift post-deployment",
        tool="Terraform + OPA",
        color="rose",
        details=(
            "Runs terraform plan post-deploy",
            "Detects manual changes",
            "Re-validates OPA policies",
        ),
        failure_example="Manually change a resource in AWS console",
    ),
)

PIPELINE_PRINCIPLES = (
    Principle(
        title="Fail Fast",
        description="Security checks run early to catch issues before expensive build stages.",
    ),
    Principle(
        title="Defense in Depth",
        description="Multiple security layers ensure no single point of failure in the pipeline.",
    ),
    Principle(
        title="Full Visibility",
        description="Each security check is a separate job for clear audit trails and debugging.",
    ),
)

SECURITY_CONTROL_CATEGORIES = (
    SecurityControlCategory(
        category="Code Security",
        items=(
            SecurityControl(
                name="Secret Detection",
                tool="Gitleaks",
                description="Prevents hardcoded credentials from reaching the repository",
                enforcement="Pre-merge",
                status="Automated",
            ),
            SecurityControl(
                name="Static Code Analysis",
                tool="Ruff",
                description="Identifies code quality issues and potential security bugs",
                enforcement="Build stage",
                status="Automated",
            ),
        ),
    ),
    SecurityControlCategory(
        category="Container Security",
        items=(
            SecurityControl(
                name="Image Vulnerability Scan",
                tool="Trivy",
                description="Scans container images for known CVEs",
                enforcement="Post-build",
                status="Automated",
            ),
            SecurityControl(
                name="Non-root Container User",
                tool="Dockerfile",
                description="Containers run as non-privileged user",
                enforcement="Build-time",
                status="Enforced",
            ),
            SecurityControl(
                name="Minimal Base Images",
                tool="Python slim",
                description="Reduced attack surface with minimal OS packages",
                enforcement="Build-time",
                status="Enforced",
            ),
        ),
    ),
    SecurityControlCategory(
        category="Infrastructure Security",
        items=(
            SecurityControl(
                name="IaC Security Scan",
                tool="Checkov",
                description="Validates Terraform against 400+ security policies",
                enforcement="Pre-plan",
                status="Automated",
            ),
            SecurityControl(
                name="Policy-as-Code",
                tool="OPA/Conftest",
                description="Custom organizational policies for infrastructure",
                enforcement="Pre-apply",
                status="Automated",
            ),
            SecurityControl(
                name="Drift Detection",
                tool="Terraform",
                description="Detects unauthorized infrastructure changes",
                enforcement="Post-deploy",
                status="Automated",
            ),
        ),
    ),
    SecurityControlCategory(
        category="Access Control",
        items=(
            SecurityControl(
                name="Manual Approval Gate",
                tool="GitHub Environments",
                description="Human review required before production deployment",
                enforcement="Pre-production",
                status="Required",
            ),
            SecurityControl(
                name="Least Privilege IAM",
                tool="Terraform/AWS",
                description="Minimal permissions for all roles and policies",
                enforcement="Design-time",
                status="Enforced",
            ),
            SecurityControl(
                name="Network Segmentation",
                tool="AWS VPC",
                description="Backend isolated in private subnets",
                enforcement="Infrastructure",
                status="Enforced",
            ),
        ),
    ),
)

SECURITY_METRICS = (
    SecurityMetric(label="Security Stages", value="12", suffix="jobs"),
    SecurityMetric(label="Policy Checks", value="400+", suffix="rules"),
    SecurityMetric(label="Scan Coverage", value="100", suffix="%"),
    SecurityMetric(label="Manual Gates", value="1", suffix="required"),
)

COMPLIANCE_FRAMEWORKS = (
    ComplianceFramework(name="SOC 2", relevant_controls=("Access Control", "Audit Logging", "Encryption")),
    ComplianceFramework(name="NIST CSF", relevant_controls=("Identify", "Protect", "Detect", "Respond")),
    ComplianceFramework(name="CIS Benchmarks", relevant_controls=("Container Security", "AWS Best Practices")),
)

TERRAFORM_FILES = (
    CodeSample(
        name="providers.tf",
        description="AWS provider and Terraform backend configuration",
        language="HCL",
    ),
    CodeSample(
        name="ecs.tf",
        description="ECS Fargate cluster and services for frontend and backend",
        language="HCL",
    ),
    CodeSample(
        name="security-groups.tf",
        description="Security groups with least-privilege access rules",
        language="HCL",
    ),
)

TERRAFORM_PRACTICES = (
    "Remote state with S3 backend and DynamoDB locking",
    "State encryption enabled by default",
    "Modular structure for reusability",
    "Version constraints for providers",
    "Default tags applied to all resources",
    "Separate workspaces for environments",
)

TERRAFORM_ENFORCEMENT = (
    "Checkov scans all Terraform files",
    "OPA policies validate plan output",
    "No public access to backend services",
    "Encryption required for all data stores",
    "Mandatory resource tagging",
    "Drift detection after deployment",
)

POLICIES = (
    CodeSample(
        name="no_public_backend.rego",
        description="Ensures the backend ECS service cannot be exposed to the public internet",
        language="Rego",
        category="Network Security",
    ),
    CodeSample(
        name="no_open_security_groups.rego",
        description="Prevents security groups from having overly permissive ingress rules",
        language="Rego",
        category="Network Security",
    ),
    CodeSample(
        name="mandatory_tags.rego",
        description="Enforces required resource tags for cost allocation and management",
        language="Rego",
        category="Governance",
    ),
)

POLICY_ENFORCEMENT_STEPS = (
    EnforcementStep(step="1", title="Plan Generation", description="Terraform generates a JSON plan of proposed changes"),
    EnforcementStep(step="2", title="Policy Evaluation", description="Conftest evaluates the plan against Rego policies"),
    EnforcementStep(step="3", title="Decision", description="Policies return deny messages for violations"),
    EnforcementStep(step="4", title="Enforcement", description="Pipeline fails if any deny rules match"),
)

POLICY_COMMAND = "conftest test tfplan.json --policy policies/ --all-namespaces"

FOOTER_LINKS = (
    NavLink(label="Architecture", href="#architecture"),
    NavLink(label="Pipeline", href="#pipeline"),
    NavLink(label="Security Controls", href="#security"),
    NavLink(label="Infrastructure", href="#infrastructure"),
    NavLink(label="Policies", href="#policies"),
)

FOOTER_TECHNOLOGIES = (
    "AWS ECS Fargate",
    "Terraform",
    "GitHub Actions",
    "OPA / Conftest",
    "Trivy",
    "Checkov",
    "Gitleaks",
)

REPOSITORY_URL = "https://github.com/himanm/DevOps-Project-11"


@lru_cache(maxsize=None)
def content_load_sample(name: str) -> str:
    """Read one bundled code sample.

    Args:
        name: Sample file name, for example `ecs.tf`.

    Returns:
        str: Sample source text.

    Raises:
        FileNotFoundError: Raised when no sample with that name is bundled.
    """

    sample_file = resources.files("showcase.site").joinpath("samples").joinpath(name)
    if not sample_file.is_file():
        raise FileNotFoundError(f"unknown code sample: {name}")
    return sample_file.read_text(encoding="utf-8")


def content_find_stage(stage_id: str | None) -> PipelineStage | None:
    """Return the pipeline stage with the given id, if any."""

    return next((stage for stage in PIPELINE_STAGES if stage.stage_id == stage_id), None)


def content_select_sample(samples: tuple[CodeSample, ...], name: str | None) -> CodeSample:
    """Return the named sample, falling back to the first one.

    Args:
        samples: Candidate samples in tab order.
        name: Requested sample name.

    Returns:
        CodeSample: Selected sample.
    """

    return next((sample for sample in samples if sample.name == name), samples[0])
