"""Schema-version adapters that absorb manifest churn."""

from kube_score.adapters.base import Adapter, PodSpecer
from kube_score.adapters.registry import AdapterRegistry, DocumentAdapter, SUPPORTED_DOCUMENTS
from kube_score.adapters.normalizer import Normalizer

__all__ = [
    "Adapter",
    "PodSpecer",
    "AdapterRegistry",
    "DocumentAdapter",
    "SUPPORTED_DOCUMENTS",
    "Normalizer",
]
