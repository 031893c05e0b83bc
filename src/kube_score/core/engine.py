"""Scoring Engine: runs registered checks against an indexed snapshot."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from kube_score.checks.registry import CheckRegistry
from kube_score.core.index import ResourceIndex
from kube_score.models.resources import CanonicalResource
from kube_score.models.scorecard import Check, CheckResult, Comment, Grade, Outcome, Scorecard
from kube_score.utils.config import ScoreConfig
from kube_score.utils.logging import get_logger, get_logger_with_context

logger = get_logger("engine")

IGNORE_ANNOTATION = "kube-score/ignore"


class ScoringEngine:
    """Runs every applicable check against every resource of an index.

    The registry and config are fixed for the lifetime of the engine, so one
    engine can score any number of indexes, from any number of threads.

    Example:
        registry = register_default_checks(config=config)
        engine = ScoringEngine(registry, config)
        scorecard = engine.score(ResourceIndex.build(resources))
    """

    def __init__(self, registry: CheckRegistry, config: ScoreConfig | None = None) -> None:
        self._registry = registry
        self._config = config or ScoreConfig()

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    @property
    def config(self) -> ScoreConfig:
        return self._config

    def score(self, index: ResourceIndex) -> Scorecard:
        """Score a complete index.

        Outcomes are appended in decode order, then check registration order,
        whatever the number of workers.
        """
        resources = index.resources
        logger.debug(f"Scoring {len(resources)} resources with {self._config.workers} worker(s)")

        if self._config.workers > 1 and len(resources) > 1:
            with ThreadPoolExecutor(max_workers=self._config.workers) as pool:
                results = list(pool.map(lambda r: self.score_resource(r, index), resources))
        else:
            results = [self.score_resource(r, index) for r in resources]

        scorecard = Scorecard()
        for resource, outcomes in zip(resources, results):
            scorecard.add_all(resource.type_meta, resource.metadata, outcomes)
        return scorecard

    def score_resource(self, resource: CanonicalResource, index: ResourceIndex) -> list[Outcome]:
        """Outcomes for one resource, in check registration order."""
        ignored = self.ignored_tests_for(resource)
        namespace_ignored = resource.namespace in self._config.ignored_namespaces

        outcomes: list[Outcome] = []
        for check in self._registry.checks_for(resource):
            if check.optional and check.id not in self._config.enabled_optional_tests:
                continue

            if namespace_ignored:
                outcomes.append(Outcome(check=check, grade=Grade.ALL_OK, skipped=True))
                continue

            if check.id in ignored:
                outcomes.append(Outcome(check=check, grade=Grade.SKIPPED, skipped=True))
                continue

            outcomes.append(self._evaluate(check, resource, index))

        return outcomes

    def ignored_tests_for(self, resource: CanonicalResource) -> frozenset[str]:
        """Run-wide ignored ids plus those listed in the resource's annotation."""
        if not self._config.use_ignore_annotation:
            return self._config.ignored_tests

        sources = [resource.metadata.annotations]
        get_template = getattr(resource, "get_pod_template", None)
        if get_template is not None:
            sources.append(get_template().metadata.annotations)

        from_annotation: set[str] = set()
        for annotations in sources:
            raw = annotations.get(IGNORE_ANNOTATION, "")
            from_annotation.update(part.strip() for part in raw.split(",") if part.strip())
        return self._config.ignored_tests | from_annotation

    def _evaluate(self, check: Check, resource: CanonicalResource, index: ResourceIndex) -> Outcome:
        try:
            result = check.evaluate(resource, index)
        except Exception as e:
            get_logger_with_context(
                "engine", check=check.id, resource=f"{resource.kind}/{resource.name}"
            ).warning(f"Check could not be evaluated: {e}")
            result = CheckResult(
                grade=Grade.CRITICAL,
                comments=[Comment(summary="The check could not be evaluated", description=str(e))],
            )

        if not isinstance(result, CheckResult):
            result = CheckResult(
                grade=Grade.CRITICAL,
                comments=[Comment(summary="The check returned no result")],
            )

        return Outcome(check=check, grade=result.grade, comments=list(result.comments))
