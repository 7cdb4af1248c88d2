"""In-memory dashboard client.

Keeps objects in a dictionary instead of talking to a cluster. Updates and
sent events are recorded so callers can inspect what the plugin did.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from knative_dashboard.models.common import ResourceIdentity

logger = logging.getLogger(__name__)


@dataclass
class SentEvent:
    """An event sent to a dashboard client."""

    client_id: str
    event_type: str
    payload: dict[str, Any]


@dataclass
class ObjectStoreState:
    """Objects held by the in-memory store, keyed by (apiVersion, kind)."""

    objects: dict[tuple[str, str], list[dict[str, Any]]] = field(default_factory=dict)

    def add(self, document: dict[str, Any]) -> None:
        """Add or replace an object."""
        key = (document.get("apiVersion", ""), document.get("kind", ""))
        bucket = self.objects.setdefault(key, [])
        metadata = document.get("metadata") or {}
        for i, existing in enumerate(bucket):
            existing_meta = existing.get("metadata") or {}
            if existing_meta.get("name") == metadata.get("name") and existing_meta.get(
                "namespace"
            ) == metadata.get("namespace"):
                bucket[i] = document
                return
        bucket.append(document)


def _matches(document: dict[str, Any], key: ResourceIdentity, selector: dict[str, str] | None) -> bool:
    metadata = document.get("metadata") or {}
    if key.namespace and metadata.get("namespace") != key.namespace:
        return False
    if key.name and metadata.get("name") != key.name:
        return False
    labels = metadata.get("labels") or {}
    for label, value in (selector or {}).items():
        if labels.get(label) != value:
            return False
    return True


class InMemoryDashboardClient:
    """Dashboard client backed by an ObjectStoreState."""

    def __init__(self, state: ObjectStoreState | None = None) -> None:
        self._state = state or ObjectStoreState()
        self.updates: list[tuple[str, dict[str, Any]]] = []
        self.events: list[SentEvent] = []
        self.update_error: Exception | None = None

    @property
    def state(self) -> ObjectStoreState:
        return self._state

    def get(self, key: ResourceIdentity) -> dict[str, Any] | None:
        for document in self._state.objects.get((key.api_version, key.kind or ""), []):
            if _matches(document, key, None):
                return copy.deepcopy(document)
        return None

    def list(
        self, key: ResourceIdentity, selector: dict[str, str] | None = None
    ) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(document)
            for document in self._state.objects.get((key.api_version, key.kind or ""), [])
            if _matches(document, key, selector)
        ]

    def update(self, namespace: str, document: dict[str, Any]) -> None:
        if self.update_error is not None:
            raise self.update_error
        stored = copy.deepcopy(document)
        stored.setdefault("metadata", {}).setdefault("namespace", namespace)
        self.updates.append((namespace, copy.deepcopy(document)))
        self._state.add(stored)
        logger.debug(f"Stored {document.get('kind')} {stored['metadata'].get('name')}")

    def send_event(self, client_id: str, event_type: str, payload: dict[str, Any]) -> None:
        self.events.append(SentEvent(client_id, event_type, copy.deepcopy(payload)))
