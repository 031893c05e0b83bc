"""Unit tests for readiness and liveness probe checks."""

from kube_score.checks.probes import pod_probes
from kube_score.models import Grade


def probed(manifests, **container_overrides):
    container = manifests.container(**container_overrides)
    for key, value in list(container_overrides.items()):
        if value is None:
            del container[key]
    return manifests.workload("Deployment", containers=[container])


class TestPodProbes:
    """Tests for the pod-probes check."""

    def test_not_targeted_by_service(self, manifests, decode, build_index):
        """Pods without a service are not probed."""
        deployment = probed(manifests, readinessProbe=None, livenessProbe=None)

        result = pod_probes(decode(deployment), build_index(deployment))

        assert result.grade == Grade.ALL_OK
        assert result.comments[0].summary == "The pod is not targeted by a service, skipping probe checks."

    def test_external_name_service_does_not_count(self, manifests, decode, build_index):
        deployment = probed(manifests, readinessProbe=None)
        service = manifests.service(type="ExternalName", external_name="x.example.com", selector={"app": "web"})

        result = pod_probes(decode(deployment), build_index(deployment, service))

        assert result.grade == Grade.ALL_OK

    def test_distinct_probes(self, manifests, decode, build_index):
        deployment = probed(manifests)
        service = manifests.service(selector={"app": "web"})

        result = pod_probes(decode(deployment), build_index(deployment, service))

        assert result.grade == Grade.ALL_OK
        assert result.comments == []

    def test_missing_readiness(self, manifests, decode, build_index):
        deployment = probed(manifests, readinessProbe=None)
        service = manifests.service(selector={"app": "web"})

        result = pod_probes(decode(deployment), build_index(deployment, service))

        assert result.grade == Grade.CRITICAL
        assert result.comments[0].summary == "Container is missing a readinessProbe"

    def test_missing_liveness(self, manifests, decode, build_index):
        deployment = probed(manifests, livenessProbe=None)
        service = manifests.service(selector={"app": "web"})

        result = pod_probes(decode(deployment), build_index(deployment, service))

        assert result.grade == Grade.WARNING
        assert result.comments[0].summary == "Container is missing a livenessProbe"

    def test_identical_probes(self, manifests, decode, build_index):
        probe = {"httpGet": {"path": "/healthz", "port": 8080}}
        deployment = probed(manifests, readinessProbe=probe, livenessProbe=dict(probe))
        service = manifests.service(selector={"app": "web"})

        result = pod_probes(decode(deployment), build_index(deployment, service))

        assert result.grade == Grade.CRITICAL
        assert result.comments[0].summary == "Container has the same readiness and liveness probe"
