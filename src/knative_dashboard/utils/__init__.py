"""Utility functions and helpers for the Knative dashboard plugin."""

from knative_dashboard.utils.errors import (
    KnativeError,
    LinkError,
    MutationError,
    NotFoundError,
    OperationNotAllowedError,
    ValidationError,
)
from knative_dashboard.utils.labels import KnativeLabels

__all__ = [
    # Errors
    "KnativeError",
    "NotFoundError",
    "ValidationError",
    "OperationNotAllowedError",
    "MutationError",
    "LinkError",
    # Labels
    "KnativeLabels",
]
