"""CRD definitions for Knative Serving resources."""

from enum import Enum

from knative_dashboard.clients.base import CRDDefinition

SERVING_V1 = "serving.knative.dev/v1"


class ServingKind(str, Enum):
    """Kinds of Knative Serving resources this plugin renders."""

    SERVICE = "Service"
    CONFIGURATION = "Configuration"
    REVISION = "Revision"
    ROUTE = "Route"


class ServingCRDs:
    """Knative Serving CRD definitions."""

    SERVICE = CRDDefinition(
        group="serving.knative.dev",
        version="v1",
        plural="services",
        kind=ServingKind.SERVICE.value,
    )

    CONFIGURATION = CRDDefinition(
        group="serving.knative.dev",
        version="v1",
        plural="configurations",
        kind=ServingKind.CONFIGURATION.value,
    )

    REVISION = CRDDefinition(
        group="serving.knative.dev",
        version="v1",
        plural="revisions",
        kind=ServingKind.REVISION.value,
    )

    ROUTE = CRDDefinition(
        group="serving.knative.dev",
        version="v1",
        plural="routes",
        kind=ServingKind.ROUTE.value,
    )

    @classmethod
    def all_crds(cls) -> list[CRDDefinition]:
        """Return all Knative Serving CRD definitions."""
        return [cls.SERVICE, cls.CONFIGURATION, cls.REVISION, cls.ROUTE]
