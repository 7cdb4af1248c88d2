"""Common Pydantic models shared across Kubernetes resources."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class KubeModel(BaseModel):
    """Base for models parsed from Kubernetes JSON documents.

    Fields are declared in snake_case with camelCase aliases, and unknown
    fields are kept so a parsed object can be written back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class NodeStatus(IntEnum):
    """Status indicator attached to rendered components."""

    OK = 1
    WARNING = 2
    ERROR = 3


class ResourceIdentity(BaseModel):
    """Identity of a resource or collection of resources.

    Without ``kind`` the identity denotes the plugin root; without ``name``
    it denotes every resource of that kind.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_version: str = Field(..., alias="apiVersion", description="API version")
    kind: str | None = Field(None, description="Resource kind")
    namespace: str | None = Field(None, description="Resource namespace")
    name: str | None = Field(None, description="Resource name")

    def to_dict(self) -> dict[str, Any]:
        """Return the identity in the host's camelCase shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class OwnerReference(KubeModel):
    """Kubernetes owner reference."""

    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    name: str = ""
    uid: str | None = None
    controller: bool = False


class ObjectMeta(KubeModel):
    """Kubernetes object metadata."""

    name: str = ""
    namespace: str | None = None
    uid: str | None = None
    generation: int | None = None
    creation_timestamp: str | None = Field(None, alias="creationTimestamp")
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    owner_references: list[OwnerReference] = Field(default_factory=list, alias="ownerReferences")

    def creation_epoch(self) -> int:
        """Return the creation time as whole seconds since the epoch.

        Objects without a (parsable) creation timestamp report 0.
        """
        return parse_timestamp(self.creation_timestamp)


class Condition(KubeModel):
    """Kubernetes-style condition."""

    type: str = Field(..., description="Condition type")
    status: str = Field("Unknown", description="Condition status (True, False, Unknown)")
    reason: str | None = Field(None, description="Machine-readable reason")
    message: str | None = Field(None, description="Human-readable message")
    last_transition_time: str | None = Field(None, alias="lastTransitionTime")

    @property
    def node_status(self) -> NodeStatus:
        """Map the condition status onto a component status indicator."""
        if self.status == "True":
            return NodeStatus.OK
        if self.status == "False":
            return NodeStatus.ERROR
        return NodeStatus.WARNING


class KubernetesObject(KubeModel):
    """Any Kubernetes object with standard type and object metadata."""

    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    def document(self) -> dict[str, Any]:
        """Return the object as the JSON document it was parsed from."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


def find_condition(conditions: list[Condition] | None, type_: str) -> Condition | None:
    """Return the condition of the given type, if present."""
    for condition in conditions or []:
        if condition.type == type_:
            return condition
    return None


def parse_timestamp(value: str | None) -> int:
    """Parse an RFC 3339 timestamp into epoch seconds, 0 when absent."""
    if not value:
        return 0
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())
