"""kube-score: static analysis of Kubernetes object definitions.

Grades every supported object of a set of manifests against a catalogue of
best-practice checks, including cross-object relationships:

- **Normalizer**: decodes documents of every supported apiVersion into
  canonical resources
- **Index**: a read-only snapshot used for selector lookups
- **Checks**: container, security, probe, network policy, service and
  disruption budget checks
- **Scorecard**: per-object outcomes in a stable order

Usage:
    # Library API
    from kube_score import ScoreConfig, load_file, score

    documents = load_file("deployment.yaml")
    scorecard = score(documents, config=ScoreConfig(ignored_namespaces={"kube-system"}))

    for scored in scorecard:
        for outcome in scored.checks:
            print(scored.human_name, outcome.check.id, outcome.grade.value)

CLI:
    kube-score score deployment.yaml service.yaml
    kube-score score --output-format json -
    kube-score list
"""

__version__ = "0.1.0"

# Core
from kube_score.core import (
    RawDocument,
    ResourceIndex,
    ScoringEngine,
    load_file,
    load_files,
    parse_documents,
    score,
)
from kube_score.adapters import AdapterRegistry, Normalizer, PodSpecer
from kube_score.checks import CheckRegistry, register_default_checks

# Models (commonly used)
from kube_score.models import (
    CanonicalResource,
    Check,
    CheckResult,
    Comment,
    Grade,
    Outcome,
    ScoredObject,
    Scorecard,
    TargetShape,
)

# Configuration and errors
from kube_score.utils import (
    ConfigurationError,
    DecodeError,
    KubeScoreError,
    LoadError,
    ScoreConfig,
    SelectorSyntaxError,
)

# Renderers
from kube_score.renderers.base import OutputFormat, RenderContext, Renderer

__all__ = [
    # Version
    "__version__",
    # Core
    "RawDocument",
    "ResourceIndex",
    "ScoringEngine",
    "load_file",
    "load_files",
    "parse_documents",
    "score",
    "AdapterRegistry",
    "Normalizer",
    "PodSpecer",
    "CheckRegistry",
    "register_default_checks",
    # Models
    "CanonicalResource",
    "Check",
    "CheckResult",
    "Comment",
    "Grade",
    "Outcome",
    "ScoredObject",
    "Scorecard",
    "TargetShape",
    # Config and errors
    "ConfigurationError",
    "DecodeError",
    "KubeScoreError",
    "LoadError",
    "ScoreConfig",
    "SelectorSyntaxError",
    # Renderers
    "Renderer",
    "RenderContext",
    "OutputFormat",
]
