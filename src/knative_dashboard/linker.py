"""Map resource identities to plugin content paths.

The templates here are the inverse of the route table registered by the
plugin: any path produced by ``Linker.link`` resolves back to a handler
whose parameters describe the same resource.
"""

from __future__ import annotations

from knative_dashboard.domains.serving.crds import SERVING_V1, ServingKind
from knative_dashboard.models.common import ResourceIdentity
from knative_dashboard.utils.errors import LinkError

COLLECTION_SEGMENTS: dict[ServingKind, str] = {
    ServingKind.SERVICE: "services",
    ServingKind.CONFIGURATION: "configurations",
    ServingKind.ROUTE: "routes",
}

# Kinds allowed to appear as the context of a Revision path.
REVISION_OWNERS = frozenset({ServingKind.SERVICE, ServingKind.CONFIGURATION})

NEW_RESOURCE_NAME = "_new"


def ref(kind: ServingKind | str | None = None, name: str | None = None) -> ResourceIdentity:
    """Build a Knative Serving identity, e.g. ``ref(ServingKind.SERVICE, "hello")``."""
    kind_value = kind.value if isinstance(kind, ServingKind) else kind
    return ResourceIdentity(api_version=SERVING_V1, kind=kind_value, name=name)


def _serving_kind(kind: str) -> ServingKind:
    try:
        return ServingKind(kind)
    except ValueError:
        raise LinkError(f"No content path for kind '{kind}'") from None


class Linker:
    """Turns (reference, context) pairs into content paths under a root."""

    def __init__(self, root_path: str = "") -> None:
        self._root = root_path.rstrip("/")

    @property
    def root_path(self) -> str:
        return self._root

    def __call__(self, reference: ResourceIdentity, context: ResourceIdentity | None = None) -> str:
        return self.link(reference, context)

    def link(self, reference: ResourceIdentity, context: ResourceIdentity | None = None) -> str:
        """Return the content path for a resource or collection.

        Args:
            reference: The resource to link to. Without a kind this is the
                plugin root, without a name the collection of that kind.
            context: Owning Service or Configuration, required for Revisions
                and rejected for every other kind.

        Raises:
            LinkError: If the reference cannot be expressed as a path.
        """
        if reference.kind is None:
            if context is not None:
                raise LinkError("The plugin root cannot have a context")
            return self._root or "/"

        kind = _serving_kind(reference.kind)
        if kind is ServingKind.REVISION:
            if context is None or context.kind is None or not context.name:
                raise LinkError("Revision paths require a named Service or Configuration context")
            owner = _serving_kind(context.kind)
            if owner not in REVISION_OWNERS:
                raise LinkError(f"A {owner.value} cannot own a Revision")
            segments = [COLLECTION_SEGMENTS[owner], context.name, "revisions"]
        else:
            if context is not None:
                raise LinkError(f"A {kind.value} cannot be linked within a context")
            segments = [COLLECTION_SEGMENTS[kind]]

        if reference.name:
            segments.append(reference.name)
        return f"{self._root}/" + "/".join(segments)

    def relative(self, path: str) -> str:
        """Strip the root prefix from a path produced by ``link``."""
        if self._root and (path == self._root or path.startswith(self._root + "/")):
            path = path[len(self._root) :]
        return path or "/"
