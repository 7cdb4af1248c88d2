"""Serving domain - Knative Services, Configurations, Revisions and Routes.

Import the client, views and plugin from their modules; this package only
exposes the kinds and models so the linker can depend on it.
"""

from knative_dashboard.domains.serving.crds import SERVING_V1, ServingCRDs, ServingKind

__all__ = [
    "SERVING_V1",
    "ServingCRDs",
    "ServingKind",
]
