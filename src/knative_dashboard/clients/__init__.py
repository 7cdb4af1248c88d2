"""Object store clients."""

from knative_dashboard.clients.base import CONTENT_PATH_EVENT, CRDDefinition, DashboardClient
from knative_dashboard.clients.memory import InMemoryDashboardClient, ObjectStoreState, SentEvent

__all__ = [
    "CONTENT_PATH_EVENT",
    "CRDDefinition",
    "DashboardClient",
    "InMemoryDashboardClient",
    "ObjectStoreState",
    "SentEvent",
]
