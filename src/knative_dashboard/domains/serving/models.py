"""Pydantic models for Knative Serving resources.

Documents from the object store are parsed into these models for
rendering. Unknown fields are kept, so ``document()`` reproduces what the
store returned.
"""

from __future__ import annotations

from pydantic import Field

from knative_dashboard.domains.serving.crds import ServingKind
from knative_dashboard.models.common import (
    Condition,
    KubeModel,
    KubernetesObject,
    ObjectMeta,
    find_condition,
)
from knative_dashboard.utils.labels import KnativeLabels


class Container(KubeModel):
    """Container in a revision template or pod."""

    name: str | None = None
    image: str | None = None


class RevisionSpec(KubeModel):
    containers: list[Container] = Field(default_factory=list)
    container_concurrency: int | None = Field(None, alias="containerConcurrency")
    timeout_seconds: int | None = Field(None, alias="timeoutSeconds")

    @property
    def image(self) -> str | None:
        """Image of the first container."""
        return self.containers[0].image if self.containers else None


class RevisionTemplate(KubeModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: RevisionSpec = Field(default_factory=RevisionSpec)


class TrafficTarget(KubeModel):
    """One entry of a traffic split."""

    configuration_name: str | None = Field(None, alias="configurationName")
    revision_name: str | None = Field(None, alias="revisionName")
    latest_revision: bool | None = Field(None, alias="latestRevision")
    percent: int | None = None
    tag: str | None = None
    url: str | None = None


class Addressable(KubeModel):
    url: str | None = None


class ServingStatus(KubeModel):
    """Status block shared by Services, Configurations, Routes and Revisions."""

    observed_generation: int | None = Field(None, alias="observedGeneration")
    conditions: list[Condition] = Field(default_factory=list)
    url: str | None = None
    address: Addressable | None = None
    latest_created_revision_name: str | None = Field(None, alias="latestCreatedRevisionName")
    latest_ready_revision_name: str | None = Field(None, alias="latestReadyRevisionName")
    traffic: list[TrafficTarget] = Field(default_factory=list)
    image_digest: str | None = Field(None, alias="imageDigest")


class ServingObject(KubernetesObject):
    """Knative Serving resource with a status block."""

    status: ServingStatus = Field(default_factory=ServingStatus)

    def ready_condition(self) -> Condition | None:
        return find_condition(self.status.conditions, "Ready")


class ServiceSpec(KubeModel):
    template: RevisionTemplate = Field(default_factory=RevisionTemplate)
    traffic: list[TrafficTarget] = Field(default_factory=list)


class Service(ServingObject):
    kind: str = ServingKind.SERVICE.value
    spec: ServiceSpec = Field(default_factory=ServiceSpec)


class ConfigurationSpec(KubeModel):
    template: RevisionTemplate = Field(default_factory=RevisionTemplate)


class Configuration(ServingObject):
    kind: str = ServingKind.CONFIGURATION.value
    spec: ConfigurationSpec = Field(default_factory=ConfigurationSpec)


class Revision(ServingObject):
    kind: str = ServingKind.REVISION.value
    spec: RevisionSpec = Field(default_factory=RevisionSpec)

    @property
    def generation(self) -> int:
        """Configuration generation that produced this revision, -1 if unknown."""
        return KnativeLabels.generation(self.metadata.labels)

    @property
    def configuration_name(self) -> str | None:
        return self.metadata.labels.get(KnativeLabels.CONFIGURATION)


class RouteSpec(KubeModel):
    traffic: list[TrafficTarget] = Field(default_factory=list)


class Route(ServingObject):
    kind: str = ServingKind.ROUTE.value
    spec: RouteSpec = Field(default_factory=RouteSpec)


class ContainerStatus(KubeModel):
    name: str | None = None
    ready: bool = False
    restart_count: int = Field(0, alias="restartCount")


class PodSpec(KubeModel):
    containers: list[Container] = Field(default_factory=list)


class PodStatus(KubeModel):
    phase: str | None = None
    container_statuses: list[ContainerStatus] = Field(default_factory=list, alias="containerStatuses")


class Pod(KubernetesObject):
    kind: str = "Pod"
    spec: PodSpec = Field(default_factory=PodSpec)
    status: PodStatus = Field(default_factory=PodStatus)

    @property
    def ready_summary(self) -> str:
        """Ready containers over total containers, e.g. '1/2'."""
        statuses = self.status.container_statuses
        ready = sum(1 for s in statuses if s.ready)
        total = len(statuses) or len(self.spec.containers)
        return f"{ready}/{total}"
