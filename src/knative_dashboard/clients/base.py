"""Object store interface the dashboard host provides to plugins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from knative_dashboard.models.common import ResourceIdentity


CONTENT_PATH_EVENT = "event.octant.dev/contentPath"


@dataclass(frozen=True)
class CRDDefinition:
    """Identifies a Kubernetes resource type."""

    group: str
    version: str
    plural: str
    kind: str

    @property
    def api_version(self) -> str:
        """Return the apiVersion string, e.g. 'serving.knative.dev/v1'."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


@runtime_checkable
class DashboardClient(Protocol):
    """Capabilities the dashboard host exposes to a plugin.

    ``get`` and ``list`` read from the host's object store, ``update``
    creates or updates an object, and ``send_event`` pushes an event to a
    single connected dashboard client.
    """

    def get(self, key: ResourceIdentity) -> dict[str, Any] | None:
        """Return the object matching a fully specified key, or None."""
        ...

    def list(
        self, key: ResourceIdentity, selector: dict[str, str] | None = None
    ) -> list[dict[str, Any]]:
        """Return the objects of a kind in a namespace, filtered by labels."""
        ...

    def update(self, namespace: str, document: dict[str, Any]) -> None:
        """Create or update an object from its full document."""
        ...

    def send_event(self, client_id: str, event_type: str, payload: dict[str, Any]) -> None:
        """Send an event to one dashboard client."""
        ...
