"""Entry point tying normalizer, index, registry and engine together."""

from __future__ import annotations

from typing import Any, Iterable

from kube_score.adapters.normalizer import Normalizer
from kube_score.checks import CheckRegistry, register_default_checks
from kube_score.core.engine import ScoringEngine
from kube_score.core.index import ResourceIndex
from kube_score.models.scorecard import Scorecard
from kube_score.utils.config import ScoreConfig
from kube_score.utils.logging import get_logger

logger = get_logger("score")


def score(
    documents: Iterable[Any],
    config: ScoreConfig | None = None,
    registry: CheckRegistry | None = None,
    abort_on_decode_error: bool = True,
) -> Scorecard:
    """Decode, index and score a batch of documents.

    Args:
        documents: RawDocument objects or (apiVersion, kind, body) tuples
        config: Run configuration (defaults when None)
        registry: Check registry (built-in checks when None)
        abort_on_decode_error: Raise on the first malformed document instead
            of skipping it

    Returns:
        The complete scorecard

    Raises:
        DecodeError: If a document cannot be decoded and ``abort_on_decode_error`` is set
    """
    if config is None:
        config = ScoreConfig()
    if registry is None:
        registry = register_default_checks(config=config)

    resources = Normalizer(verbose=config.verbose).decode_all(
        documents, abort_on_error=abort_on_decode_error
    )
    index = ResourceIndex.build(resources)
    logger.debug(
        f"Indexed {len(index)} resources: {len(index.pods)} pods, "
        f"{len(index.workloads)} workloads, {len(index.services)} services"
    )

    return ScoringEngine(registry, config).score(index)
