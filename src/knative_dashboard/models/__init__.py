"""Shared models."""

from knative_dashboard.models.common import (
    Condition,
    KubeModel,
    KubernetesObject,
    NodeStatus,
    ObjectMeta,
    OwnerReference,
    ResourceIdentity,
    find_condition,
    parse_timestamp,
)

__all__ = [
    "Condition",
    "KubeModel",
    "KubernetesObject",
    "NodeStatus",
    "ObjectMeta",
    "OwnerReference",
    "ResourceIdentity",
    "find_condition",
    "parse_timestamp",
]
