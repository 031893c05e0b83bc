"""Unit tests for the check registry and scoring engine."""

import pytest

from kube_score.checks import CheckRegistry, register_default_checks
from kube_score.core.engine import IGNORE_ANNOTATION, ScoringEngine
from kube_score.core.index import ResourceIndex
from kube_score.core.score import score
from kube_score.models import CheckResult, Comment, Grade, TargetShape
from kube_score.utils.config import ScoreConfig


def always(grade: Grade):
    def evaluate(resource, index):
        return CheckResult(grade=grade, comments=[Comment(summary=f"{grade.value} for {resource.name}")])

    return evaluate


@pytest.fixture
def registry() -> CheckRegistry:
    """A small registry with one check per shape."""
    registry = CheckRegistry()
    registry.add("meta", "Meta", TargetShape.METADATA, always(Grade.ALL_OK))
    registry.add("template", "Template", TargetShape.POD_TEMPLATE, always(Grade.WARNING))
    registry.add("service", "Service", TargetShape.SERVICE, always(Grade.CRITICAL))
    registry.add("optional", "Optional", TargetShape.POD_TEMPLATE, always(Grade.CRITICAL), optional=True)
    registry.add(
        "deployments-only",
        "Deployments only",
        TargetShape.WORKLOAD,
        always(Grade.CRITICAL),
        kinds={"Deployment"},
    )
    return registry


class TestCheckRegistry:
    """Tests for CheckRegistry."""

    def test_duplicate_id_rejected(self, registry):
        """Check ids are unique."""
        with pytest.raises(ValueError, match="already registered"):
            registry.add("meta", "Meta again", TargetShape.METADATA, always(Grade.ALL_OK))

    def test_lookup(self, registry):
        """Checks can be looked up by id."""
        assert "meta" in registry
        assert registry["meta"].name == "Meta"
        assert registry.get("missing") is None
        with pytest.raises(KeyError):
            registry["missing"]

    def test_registration_order(self, registry):
        """Iteration follows registration order."""
        assert registry.ids == ["meta", "template", "service", "optional", "deployments-only"]
        assert len(registry) == 5

    def test_checks_for_filters_by_shape_and_kind(self, registry, manifests, decode):
        """Only checks whose shape and kind filter match are returned."""
        deployment = decode(manifests.workload("Deployment"))
        statefulset = decode(manifests.workload("StatefulSet"))
        service = decode(manifests.service())

        assert [c.id for c in registry.checks_for(deployment)] == [
            "meta",
            "template",
            "optional",
            "deployments-only",
        ]
        assert [c.id for c in registry.checks_for(statefulset)] == ["meta", "template", "optional"]
        assert [c.id for c in registry.checks_for(service)] == ["meta", "service"]

    def test_default_catalogue(self):
        """The built-in catalogue registers every check once."""
        registry = register_default_checks()

        assert registry.ids == [
            "stable-version",
            "container-resources",
            "container-resource-requests-equal-limits",
            "container-image-tag",
            "container-image-pull-policy",
            "pod-networkpolicy",
            "pod-probes",
            "container-security-context",
            "container-seccomp-profile",
            "networkpolicy-targets-pod",
            "service-targets-pod",
            "statefulset-has-poddisruptionbudget",
            "deployment-has-poddisruptionbudget",
        ]
        optional = {c.id for c in registry if c.optional}
        assert optional == {"container-resource-requests-equal-limits", "container-seccomp-profile"}


class TestScoringEngine:
    """Tests for ScoringEngine."""

    def test_outcomes_in_registration_order(self, registry, manifests, build_index):
        """Outcomes of a resource follow check registration order."""
        index = build_index(manifests.workload("Deployment"))

        scorecard = ScoringEngine(registry).score(index)

        scored = scorecard.get("Deployment", "web")
        assert [o.check.id for o in scored.checks] == ["meta", "template", "deployments-only"]
        assert [o.grade for o in scored.checks] == [Grade.ALL_OK, Grade.WARNING, Grade.CRITICAL]

    def test_objects_in_decode_order(self, registry, manifests, build_index):
        """Scored objects appear in decode order."""
        index = build_index(
            manifests.service(name="svc"),
            manifests.pod(name="pod"),
            manifests.workload("Deployment", name="deploy"),
        )

        scorecard = ScoringEngine(registry).score(index)

        assert [s.object_meta.name for s in scorecard] == ["svc", "pod", "deploy"]

    def test_optional_check_disabled_produces_no_outcome(self, registry, manifests, build_index):
        """Optional checks that are not enabled leave no trace."""
        index = build_index(manifests.pod())

        scored = ScoringEngine(registry).score(index).get("Pod", "web")

        assert scored.outcome_for("optional") is None

    def test_optional_check_enabled(self, registry, manifests, build_index):
        """Enabled optional checks are evaluated."""
        index = build_index(manifests.pod())
        config = ScoreConfig(enabled_optional_tests={"optional"})

        scored = ScoringEngine(registry, config).score(index).get("Pod", "web")

        assert scored.outcome_for("optional").grade == Grade.CRITICAL

    def test_ignored_namespace(self, registry, manifests, build_index):
        """Resources in ignored namespaces get skipped AllOK outcomes."""
        index = build_index(manifests.service(namespace="kube-system"))
        config = ScoreConfig(ignored_namespaces={"kube-system"})

        scored = ScoringEngine(registry, config).score(index).get("Service", "web", "kube-system")

        outcome = scored.outcome_for("service")
        assert outcome.skipped
        assert outcome.grade == Grade.ALL_OK
        assert outcome.comments == []

    def test_ignored_namespace_does_not_enable_optional(self, registry, manifests, build_index):
        """Disabled optional checks are absent even in ignored namespaces."""
        index = build_index(manifests.pod(namespace="kube-system"))
        config = ScoreConfig(ignored_namespaces={"kube-system"})

        scored = ScoringEngine(registry, config).score(index).get("Pod", "web", "kube-system")

        assert scored.outcome_for("optional") is None

    def test_ignored_test(self, registry, manifests, build_index):
        """Ignored check ids are reported as Skipped."""
        index = build_index(manifests.service())
        config = ScoreConfig(ignored_tests={"service"})

        outcome = ScoringEngine(registry, config).score(index).get("Service", "web").outcome_for("service")

        assert outcome.skipped
        assert outcome.grade == Grade.SKIPPED

    def test_ignore_annotation(self, registry, manifests, build_index):
        """The ignore annotation skips the listed checks for one object."""
        index = build_index(
            manifests.service(name="a", annotations={IGNORE_ANNOTATION: "service, meta"}),
            manifests.service(name="b"),
        )

        scorecard = ScoringEngine(registry).score(index)

        a = scorecard.get("Service", "a")
        assert a.outcome_for("service").grade == Grade.SKIPPED
        assert a.outcome_for("meta").grade == Grade.SKIPPED
        assert not scorecard.get("Service", "b").outcome_for("service").skipped

    def test_ignore_annotation_on_pod_template(self, registry, manifests, build_index):
        """The annotation is also read from a workload's pod template."""
        index = build_index(
            manifests.workload("Deployment", template_annotations={IGNORE_ANNOTATION: "template"})
        )

        scored = ScoringEngine(registry).score(index).get("Deployment", "web")

        assert scored.outcome_for("template").grade == Grade.SKIPPED

    def test_ignore_annotation_disabled(self, registry, manifests, build_index):
        """The annotation is not honoured when turned off."""
        index = build_index(manifests.service(annotations={IGNORE_ANNOTATION: "service"}))
        config = ScoreConfig(use_ignore_annotation=False)

        outcome = ScoringEngine(registry, config).score(index).get("Service", "web").outcome_for("service")

        assert not outcome.skipped
        assert outcome.grade == Grade.CRITICAL

    def test_failing_check_is_critical(self, manifests, build_index):
        """An evaluation that raises becomes a Critical outcome."""

        def broken(resource, index):
            raise RuntimeError("boom")

        registry = CheckRegistry()
        registry.add("broken", "Broken", TargetShape.METADATA, broken)
        registry.add("fine", "Fine", TargetShape.METADATA, always(Grade.ALL_OK))

        scored = ScoringEngine(registry).score(build_index(manifests.pod())).get("Pod", "web")

        broken_outcome = scored.outcome_for("broken")
        assert broken_outcome.grade == Grade.CRITICAL
        assert broken_outcome.comments[0].summary == "The check could not be evaluated"
        assert broken_outcome.comments[0].description == "boom"
        assert scored.outcome_for("fine").grade == Grade.ALL_OK

    def test_non_result_is_critical(self, manifests, build_index):
        """An evaluation that returns something else becomes Critical."""
        registry = CheckRegistry()
        registry.add("silent", "Silent", TargetShape.METADATA, lambda resource, index: None)

        scored = ScoringEngine(registry).score(build_index(manifests.pod())).get("Pod", "web")

        assert scored.outcome_for("silent").grade == Grade.CRITICAL

    def test_resource_without_applicable_checks_still_listed(self, manifests, build_index):
        """Every decoded resource appears in the scorecard."""
        registry = CheckRegistry()
        registry.add("service", "Service", TargetShape.SERVICE, always(Grade.ALL_OK))

        scorecard = ScoringEngine(registry).score(build_index(manifests.pod()))

        assert len(scorecard) == 1
        assert scorecard.get("Pod", "web").checks == []

    def test_idempotent(self, manifests, documents):
        """Scoring the same input twice gives equal scorecards."""
        docs = documents(
            manifests.workload("Deployment"),
            manifests.service(selector={"app": "web"}),
            manifests.network_policy(),
        )

        assert score(docs).to_dict() == score(docs).to_dict()

    def test_workers_preserve_order(self, manifests, documents):
        """Parallel scoring produces the same scorecard as sequential scoring."""
        bodies = [manifests.workload("Deployment", name=f"app-{i}") for i in range(10)]
        bodies += [manifests.service(name=f"svc-{i}", selector={"app": f"app-{i}"}) for i in range(10)]
        docs = documents(*bodies)

        sequential = score(docs, config=ScoreConfig(workers=1))
        parallel = score(docs, config=ScoreConfig(workers=4))

        assert parallel.to_dict() == sequential.to_dict()

    def test_empty_index(self, registry):
        """An empty index produces an empty scorecard."""
        scorecard = ScoringEngine(registry).score(ResourceIndex.build([]))

        assert len(scorecard) == 0
        assert scorecard.worst_grade() is None

    def test_duplicate_identities_scored_separately(self, manifests, documents):
        """Two documents with the same identity never share outcomes."""
        scorecard = score(documents(manifests.pod(), manifests.pod()))

        assert len(scorecard) == 2
        for scored in scorecard:
            ids = [o.check.id for o in scored.checks]
            assert len(ids) == len(set(ids))
        assert [o.check.id for o in list(scorecard)[0].checks] == [
            o.check.id for o in list(scorecard)[1].checks
        ]


class TestScore:
    """Tests for the score entry point."""

    def test_empty_registry_is_used(self, manifests, documents):
        """An empty registry passed in is not replaced by the built-in checks."""
        scorecard = score(documents(manifests.pod()), registry=CheckRegistry())

        assert len(scorecard) == 1
        assert list(scorecard.outcomes()) == []

    def test_default_registry(self, manifests, documents):
        scorecard = score(documents(manifests.pod()))

        assert scorecard.get("Pod", "web").outcome_for("container-image-tag") is not None

    def test_null_policy_types_do_not_abort(self, manifests, documents):
        """A policy with ``policyTypes: null`` is scored like one without policyTypes."""
        policy = manifests.network_policy()
        policy["spec"]["policyTypes"] = None

        scorecard = score(documents(manifests.pod(labels={"app": "web"}), policy))

        outcome = scorecard.get("NetworkPolicy", "web").outcome_for("networkpolicy-targets-pod")
        assert outcome.grade == Grade.ALL_OK
