"""Exception types raised by the Knative dashboard plugin."""


class KnativeError(Exception):
    """Base class for all plugin errors."""


class NotFoundError(KnativeError):
    """A requested resource does not exist in the object store."""

    def __init__(self, kind: str, name: str, namespace: str | None = None) -> None:
        self.kind = kind
        self.name = name
        self.namespace = namespace
        if namespace:
            message = f"{kind} '{name}' not found in namespace '{namespace}'"
        else:
            message = f"{kind} '{name}' not found"
        super().__init__(message)


class ValidationError(KnativeError):
    """An action payload is missing fields or cannot be parsed."""


class OperationNotAllowedError(KnativeError):
    """A mutating operation was refused by the current configuration."""


class MutationError(KnativeError):
    """The object store rejected an update."""


class LinkError(KnativeError, ValueError):
    """A resource reference cannot be turned into a content path."""
