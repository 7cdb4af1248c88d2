"""Dashboard client backed by a live Kubernetes cluster."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kubernetes import client, config  # type: ignore[import-untyped]
from kubernetes.config.config_exception import ConfigException  # type: ignore[import-untyped]
from kubernetes.dynamic import DynamicClient  # type: ignore[import-untyped]
from kubernetes.dynamic.exceptions import (  # type: ignore[import-untyped]
    DynamicApiError,
    NotFoundError as DynamicNotFoundError,
    ResourceNotFoundError,
)

from knative_dashboard.clients.memory import SentEvent
from knative_dashboard.config import KnativeDashboardConfig, get_config
from knative_dashboard.utils.errors import KnativeError
from knative_dashboard.utils.labels import KnativeLabels

if TYPE_CHECKING:
    from knative_dashboard.models.common import ResourceIdentity

logger = logging.getLogger(__name__)


class K8sDashboardClient:
    """Reads and writes objects through the Kubernetes dynamic client.

    There is no dashboard to deliver events to when running against a
    cluster directly, so sent events are logged and kept in ``events``.
    """

    def __init__(self, config_obj: KnativeDashboardConfig | None = None) -> None:
        self._config = config_obj or get_config()
        self._api_client: client.ApiClient | None = None
        self._dynamic_client: DynamicClient | None = None
        self._resource_cache: dict[str, Any] = {}
        self.events: list[SentEvent] = []

    @property
    def is_connected(self) -> bool:
        return self._dynamic_client is not None

    @property
    def dynamic(self) -> DynamicClient:
        """Get the dynamic client.

        Raises:
            RuntimeError: If the client is not connected.
        """
        if self._dynamic_client is None:
            raise RuntimeError("Not connected to Kubernetes. Call connect() first.")
        return self._dynamic_client

    def connect(self) -> None:
        """Load cluster credentials and create the API clients."""
        try:
            config.load_kube_config(
                config_file=str(self._config.kubeconfig_path) if self._config.kubeconfig_path else None,
                context=self._config.kubeconfig_context,
            )
            logger.info("Loaded kubeconfig credentials")
        except ConfigException:
            config.load_incluster_config()
            logger.info("Loaded in-cluster credentials")

        self._api_client = client.ApiClient()
        self._dynamic_client = DynamicClient(self._api_client)

    def disconnect(self) -> None:
        """Release the API clients."""
        if self._api_client is not None:
            self._api_client.close()
        self._api_client = None
        self._dynamic_client = None
        self._resource_cache.clear()

    def _resource(self, api_version: str, kind: str) -> Any:
        cache_key = f"{api_version}/{kind}"
        if cache_key not in self._resource_cache:
            try:
                self._resource_cache[cache_key] = self.dynamic.resources.get(api_version=api_version, kind=kind)
            except ResourceNotFoundError as e:
                raise KnativeError(f"Resource type {api_version}/{kind} is not available in the cluster") from e
        return self._resource_cache[cache_key]

    def get(self, key: ResourceIdentity) -> dict[str, Any] | None:
        resource = self._resource(key.api_version, key.kind or "")
        try:
            obj = resource.get(name=key.name, namespace=key.namespace)
        except DynamicNotFoundError:
            return None
        except DynamicApiError as e:
            raise KnativeError(f"Failed to get {key.kind} '{key.name}': {e.summary()}") from e
        return obj.to_dict()

    def list(
        self, key: ResourceIdentity, selector: dict[str, str] | None = None
    ) -> list[dict[str, Any]]:
        resource = self._resource(key.api_version, key.kind or "")
        label_selector = KnativeLabels.filter_selector(**selector) if selector else None
        try:
            result = resource.get(namespace=key.namespace, label_selector=label_selector)
        except DynamicApiError as e:
            raise KnativeError(f"Failed to list {key.kind}: {e.summary()}") from e
        return list(result.to_dict().get("items") or [])

    def update(self, namespace: str, document: dict[str, Any]) -> None:
        """Apply the document with server-side apply."""
        resource = self._resource(document.get("apiVersion", ""), document.get("kind", ""))
        name = (document.get("metadata") or {}).get("name")
        self.dynamic.server_side_apply(
            resource,
            body=document,
            name=name,
            namespace=namespace,
            field_manager=self._config.field_manager,
            force_conflicts=True,
        )
        logger.info(f"Applied {document.get('kind')} {namespace}/{name}")

    def send_event(self, client_id: str, event_type: str, payload: dict[str, Any]) -> None:
        self.events.append(SentEvent(client_id, event_type, payload))
        logger.info(f"Event {event_type} for client {client_id}: {payload}")
