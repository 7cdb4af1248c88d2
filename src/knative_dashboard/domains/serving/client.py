"""Knative Serving client operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from knative_dashboard.domains.serving.crds import SERVING_V1, ServingKind
from knative_dashboard.domains.serving.models import (
    Configuration,
    Pod,
    Revision,
    Route,
    Service,
)
from knative_dashboard.models.common import KubernetesObject, ResourceIdentity
from knative_dashboard.utils.errors import MutationError, NotFoundError
from knative_dashboard.utils.labels import KnativeLabels

if TYPE_CHECKING:
    from knative_dashboard.clients.base import DashboardClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=KubernetesObject)

# Label that links a revision to each kind that can own it.
REVISION_OWNER_LABELS: dict[ServingKind, str] = {
    ServingKind.SERVICE: KnativeLabels.SERVICE,
    ServingKind.CONFIGURATION: KnativeLabels.CONFIGURATION,
}


def _by_name(obj: KubernetesObject) -> str:
    return obj.metadata.name or ""


class ServingClient:
    """Client for Knative Serving resources.

    The object store does not guarantee any ordering, so every list
    operation sorts its result. All operations are scoped to the namespace
    passed in by the caller.
    """

    def __init__(self, dashboard: DashboardClient) -> None:
        self._dashboard = dashboard

    def _list(
        self,
        model: type[T],
        kind: str,
        namespace: str,
        selector: dict[str, str] | None = None,
        api_version: str = SERVING_V1,
    ) -> list[T]:
        key = ResourceIdentity(api_version=api_version, kind=kind, namespace=namespace)
        documents = self._dashboard.list(key, selector)
        logger.debug(f"Listed {len(documents)} {kind} objects in {namespace} (selector={selector})")
        return [model.model_validate(doc) for doc in documents]

    def _get(self, model: type[T], kind: str, name: str, namespace: str) -> T:
        key = ResourceIdentity(api_version=SERVING_V1, kind=kind, namespace=namespace, name=name)
        document = self._dashboard.get(key)
        if not document:
            raise NotFoundError(kind, name, namespace)
        return model.model_validate(document)

    # Services

    def list_services(self, namespace: str) -> list[Service]:
        """List Services sorted by name."""
        services = self._list(Service, ServingKind.SERVICE.value, namespace)
        return sorted(services, key=_by_name)

    def get_service(self, name: str, namespace: str) -> Service:
        """Get a Service by name.

        Raises:
            NotFoundError: If the Service does not exist.
        """
        return self._get(Service, ServingKind.SERVICE.value, name, namespace)

    # Configurations

    def list_configurations(self, namespace: str) -> list[Configuration]:
        """List Configurations sorted by name."""
        configurations = self._list(Configuration, ServingKind.CONFIGURATION.value, namespace)
        return sorted(configurations, key=_by_name)

    def get_configuration(self, name: str, namespace: str) -> Configuration:
        """Get a Configuration by name."""
        return self._get(Configuration, ServingKind.CONFIGURATION.value, name, namespace)

    # Routes

    def list_routes(self, namespace: str) -> list[Route]:
        """List Routes sorted by name."""
        routes = self._list(Route, ServingKind.ROUTE.value, namespace)
        return sorted(routes, key=_by_name)

    def get_route(self, name: str, namespace: str) -> Route:
        """Get a Route by name."""
        return self._get(Route, ServingKind.ROUTE.value, name, namespace)

    # Revisions

    def get_revision(self, name: str, namespace: str) -> Revision:
        """Get a Revision by name."""
        return self._get(Revision, ServingKind.REVISION.value, name, namespace)

    def list_revisions(self, owner_kind: ServingKind, owner_name: str, namespace: str) -> list[Revision]:
        """List the Revisions of a Service or Configuration, newest generation first.

        Revisions without a parsable generation label sort last.
        """
        label = REVISION_OWNER_LABELS.get(owner_kind)
        if label is None:
            raise ValueError(f"{owner_kind.value} does not own Revisions")

        revisions = self._list(
            Revision,
            ServingKind.REVISION.value,
            namespace,
            selector={label: owner_name},
        )
        return sorted(revisions, key=lambda r: r.generation, reverse=True)

    def revision_configurations(self, namespace: str) -> dict[str, str]:
        """Map each Revision name in the namespace to its Configuration name."""
        result = {}
        for revision in self._list(Revision, ServingKind.REVISION.value, namespace):
            configuration = revision.configuration_name
            if revision.metadata.name and configuration:
                result[revision.metadata.name] = configuration
        return result

    # Pods

    def list_pods(self, revision_name: str, namespace: str) -> list[Pod]:
        """List the Pods backing a Revision sorted by name."""
        pods = self._list(
            Pod,
            "Pod",
            namespace,
            selector={KnativeLabels.REVISION: revision_name},
            api_version="v1",
        )
        return sorted(pods, key=_by_name)

    # Mutations

    def update(self, namespace: str, document: dict[str, Any]) -> None:
        """Create or update an object in the store.

        Raises:
            MutationError: If the store rejects the document.
        """
        kind = document.get("kind")
        name = (document.get("metadata") or {}).get("name")
        try:
            self._dashboard.update(namespace, document)
        except Exception as e:
            logger.error(f"Failed to update {kind} {namespace}/{name}: {e}")
            raise MutationError(f"Failed to update {kind} '{name}': {e}") from e
        logger.info(f"Updated {kind} {namespace}/{name}")
