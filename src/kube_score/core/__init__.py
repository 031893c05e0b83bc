"""Core scoring logic for kube-score.

This module provides the main library API: index building, selector
matching, the scoring engine and the ``score`` entry point.
"""

from kube_score.core.index import ResourceIndex
from kube_score.core.selector import (
    Selector,
    compile_label_selector,
    selector_from_set,
    selector_matches,
    set_selector_matches,
)
from kube_score.core.loader import RawDocument, load_file, load_files, parse_documents
from kube_score.core.engine import ScoringEngine
from kube_score.core.score import score

__all__ = [
    "ResourceIndex",
    "Selector",
    "compile_label_selector",
    "selector_from_set",
    "selector_matches",
    "set_selector_matches",
    "RawDocument",
    "load_file",
    "load_files",
    "parse_documents",
    "ScoringEngine",
    "score",
]
