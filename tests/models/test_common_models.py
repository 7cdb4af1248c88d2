"""Tests for shared Kubernetes models."""

import pytest

from knative_dashboard.domains.serving.models import Revision, Service
from knative_dashboard.models.common import (
    Condition,
    NodeStatus,
    ObjectMeta,
    ResourceIdentity,
    find_condition,
    parse_timestamp,
)


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-01T00:00:00Z", 1704067200),
            ("2024-01-01T01:00:00+01:00", 1704067200),
            ("2024-01-01T00:00:00", 1704067200),
            ("1970-01-01T00:00:00Z", 0),
            (None, 0),
            ("", 0),
            ("yesterday", 0),
        ],
    )
    def test_parse(self, value: str | None, expected: int) -> None:
        """Verify RFC 3339 parsing with 0 for absent or invalid values."""
        assert parse_timestamp(value) == expected

    def test_creation_epoch(self) -> None:
        """Verify object metadata exposes its creation time in epoch seconds."""
        meta = ObjectMeta.model_validate({"name": "a", "creationTimestamp": "2024-01-01T00:00:00Z"})

        assert meta.creation_epoch() == 1704067200


class TestCondition:
    """Tests for Condition."""

    @pytest.mark.parametrize(
        ("status", "expected"),
        [("True", NodeStatus.OK), ("False", NodeStatus.ERROR), ("Unknown", NodeStatus.WARNING)],
    )
    def test_node_status(self, status: str, expected: NodeStatus) -> None:
        """Verify condition status maps onto component status."""
        assert Condition(type="Ready", status=status).node_status == expected

    def test_find_condition(self) -> None:
        """Verify conditions are found by type."""
        conditions = [Condition(type="Active", status="False"), Condition(type="Ready", status="True")]

        found = find_condition(conditions, "Ready")

        assert found is not None and found.status == "True"
        assert find_condition(conditions, "Missing") is None
        assert find_condition(None, "Ready") is None


class TestKubernetesObject:
    """Tests for object parsing and serialization."""

    def test_document_keeps_unknown_fields(self) -> None:
        """Verify fields the model does not declare survive a round trip."""
        document = {
            "apiVersion": "serving.knative.dev/v1",
            "kind": "Service",
            "metadata": {"name": "hello", "namespace": "default", "resourceVersion": "42"},
            "spec": {"template": {"spec": {"containers": [{"image": "img", "ports": [{"containerPort": 8080}]}]}}},
        }

        assert Service.model_validate(document).document() == document

    def test_identity_to_dict(self) -> None:
        """Verify identities serialize with camelCase keys and no empty fields."""
        identity = ResourceIdentity(api_version="serving.knative.dev/v1", kind="Route")

        assert identity.to_dict() == {"apiVersion": "serving.knative.dev/v1", "kind": "Route"}

    def test_revision_labels(self) -> None:
        """Verify revision generation and configuration come from labels."""
        revision = Revision.model_validate(
            {
                "metadata": {
                    "name": "hello-v1",
                    "labels": {
                        "serving.knative.dev/configuration": "hello",
                        "serving.knative.dev/configurationGeneration": "7",
                    },
                }
            }
        )

        assert revision.generation == 7
        assert revision.configuration_name == "hello"
        assert revision.kind == "Revision"
