"""Shared fixtures: an in-memory object store holding a small Knative app."""

import pytest

from knative_dashboard.clients.memory import InMemoryDashboardClient, ObjectStoreState
from knative_dashboard.config import KnativeDashboardConfig
from knative_dashboard.domains.serving.plugin import KnativePlugin

SERVING = "serving.knative.dev/v1"


@pytest.fixture
def hello_service() -> dict:
    """Service 'hello' splitting traffic between a pinned and the latest revision."""
    return {
        "apiVersion": SERVING,
        "kind": "Service",
        "metadata": {
            "name": "hello",
            "namespace": "default",
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "generation": 2,
            "managedFields": [{"manager": "kn", "operation": "Update"}],
        },
        "spec": {
            "template": {
                "metadata": {"name": "hello-v2"},
                "spec": {"containers": [{"image": "gcr.io/knative/hello:v2"}]},
            },
            "traffic": [
                {"revisionName": "hello-v1", "percent": 20},
                {"latestRevision": True, "percent": 80},
            ],
        },
        "status": {
            "url": "http://hello.default.example.com",
            "address": {"url": "http://hello.default.svc.cluster.local"},
            "latestCreatedRevisionName": "hello-v2",
            "latestReadyRevisionName": "hello-v2",
            "conditions": [{"type": "Ready", "status": "True"}],
        },
    }


@pytest.fixture
def hello_configuration() -> dict:
    """Configuration 'hello' owned by the Service of the same name."""
    return {
        "apiVersion": SERVING,
        "kind": "Configuration",
        "metadata": {
            "name": "hello",
            "namespace": "default",
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "labels": {"serving.knative.dev/service": "hello"},
            "ownerReferences": [{"apiVersion": SERVING, "kind": "Service", "name": "hello", "controller": True}],
        },
        "spec": {
            "template": {
                "metadata": {"name": "hello-v2"},
                "spec": {"containers": [{"image": "gcr.io/knative/hello:v2"}]},
            },
        },
        "status": {
            "latestCreatedRevisionName": "hello-v2",
            "latestReadyRevisionName": "hello-v2",
            "conditions": [{"type": "Ready", "status": "True"}],
        },
    }


def _revision(name: str, generation: str) -> dict:
    return {
        "apiVersion": SERVING,
        "kind": "Revision",
        "metadata": {
            "name": name,
            "namespace": "default",
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "labels": {
                "serving.knative.dev/service": "hello",
                "serving.knative.dev/configuration": "hello",
                "serving.knative.dev/configurationGeneration": generation,
            },
            "ownerReferences": [
                {"apiVersion": SERVING, "kind": "Configuration", "name": "hello", "controller": True}
            ],
        },
        "spec": {
            "containerConcurrency": 0,
            "timeoutSeconds": 300,
            "containers": [{"image": f"gcr.io/knative/hello:{name.rsplit('-', 1)[-1]}"}],
        },
        "status": {
            "imageDigest": "gcr.io/knative/hello@sha256:abc",
            "conditions": [
                {"type": "Ready", "status": "True"},
                {"type": "Active", "status": "False", "reason": "NoTraffic", "message": "scaled to zero"},
            ],
        },
    }


@pytest.fixture
def hello_revisions() -> list[dict]:
    """Both revisions of 'hello', oldest first."""
    return [_revision("hello-v1", "1"), _revision("hello-v2", "2")]


@pytest.fixture
def hello_route() -> dict:
    """Route 'hello' sending everything to the Configuration."""
    return {
        "apiVersion": SERVING,
        "kind": "Route",
        "metadata": {
            "name": "hello",
            "namespace": "default",
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "labels": {"serving.knative.dev/service": "hello"},
        },
        "spec": {
            "traffic": [
                {"configurationName": "hello", "percent": 90},
                {"revisionName": "ghost-00001", "percent": 10},
            ],
        },
        "status": {
            "url": "http://hello.default.example.com",
            "conditions": [{"type": "Ready", "status": "Unknown"}],
        },
    }


@pytest.fixture
def hello_pod() -> dict:
    """Pod backing revision hello-v2."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": "hello-v2-deployment-7d9f-abcde",
            "namespace": "default",
            "labels": {"serving.knative.dev/revision": "hello-v2"},
        },
        "spec": {"containers": [{"name": "user-container"}, {"name": "queue-proxy"}]},
        "status": {
            "phase": "Running",
            "containerStatuses": [
                {"name": "user-container", "ready": True},
                {"name": "queue-proxy", "ready": False},
            ],
        },
    }


@pytest.fixture
def store(
    hello_service: dict,
    hello_configuration: dict,
    hello_revisions: list[dict],
    hello_route: dict,
    hello_pod: dict,
) -> InMemoryDashboardClient:
    """In-memory store with the 'hello' app in the default namespace."""
    state = ObjectStoreState()
    for document in [hello_service, hello_configuration, *hello_revisions, hello_route, hello_pod]:
        state.add(document)
    return InMemoryDashboardClient(state)


@pytest.fixture
def config() -> KnativeDashboardConfig:
    """Default config that ignores any local .env file."""
    return KnativeDashboardConfig(_env_file=None)


@pytest.fixture
def plugin(store: InMemoryDashboardClient, config: KnativeDashboardConfig) -> KnativePlugin:
    """Knative plugin wired to the in-memory store."""
    return KnativePlugin(store, config)
