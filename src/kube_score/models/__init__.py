"""Data models for kube-score.

All models are Pydantic BaseModel with frozen=True for immutability, except
the append-only Scorecard.
"""

from kube_score.models.kube import (
    Container,
    LabelSelector,
    LabelSelectorRequirement,
    ObjectMeta,
    PodSecurityContext,
    PodSpec,
    PodTemplateSpec,
    Probe,
    ResourceRequirements,
    SecurityContext,
    TypeMeta,
)
from kube_score.models.resources import (
    CanonicalResource,
    DisruptionBudgetResource,
    NetworkPolicyResource,
    ObjectIdentity,
    Pod,
    ServiceResource,
    TargetShape,
    TypeIdentity,
    Workload,
)
from kube_score.models.scorecard import (
    Check,
    CheckResult,
    Comment,
    Grade,
    Outcome,
    ScoredObject,
    Scorecard,
)
from kube_score.models.quantity import parse_quantity, quantities_equal

__all__ = [
    # Kubernetes fragments
    "Container",
    "LabelSelector",
    "LabelSelectorRequirement",
    "ObjectMeta",
    "PodSecurityContext",
    "PodSpec",
    "PodTemplateSpec",
    "Probe",
    "ResourceRequirements",
    "SecurityContext",
    "TypeMeta",
    # Resources
    "CanonicalResource",
    "DisruptionBudgetResource",
    "NetworkPolicyResource",
    "ObjectIdentity",
    "Pod",
    "ServiceResource",
    "TargetShape",
    "TypeIdentity",
    "Workload",
    # Scorecard
    "Check",
    "CheckResult",
    "Comment",
    "Grade",
    "Outcome",
    "ScoredObject",
    "Scorecard",
    # Quantity
    "parse_quantity",
    "quantities_equal",
]
