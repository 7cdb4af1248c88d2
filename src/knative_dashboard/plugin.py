"""Plugin interface for dashboard plugins.

This module defines the plugin base class and metadata that plugins use to
integrate with the dashboard host via pluggy hooks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from knative_dashboard.hooks import hookimpl
from knative_dashboard.models.common import ResourceIdentity

if TYPE_CHECKING:
    from knative_dashboard.clients.base import CRDDefinition, DashboardClient
    from knative_dashboard.components import ContentResponse, Navigation
    from knative_dashboard.models.requests import ActionRequest, ContentRequest


@dataclass
class PluginMetadata:
    """Metadata describing a dashboard plugin."""

    name: str
    """Unique plugin name; module plugins receive content paths under it."""

    version: str
    """Plugin version following semver, e.g., '1.0.0'."""

    description: str
    """Human-readable description of what this plugin provides."""

    requires_crds: list[str] = field(default_factory=list)
    """Kinds that must be readable for the plugin to function."""


@dataclass
class Capabilities:
    """What a plugin asks the host to route to it."""

    action_names: list[str] = field(default_factory=list)
    """Actions the plugin handles."""

    is_module: bool = False
    """Whether the plugin renders content paths and contributes navigation."""


class BasePlugin:
    """Base implementation of a dashboard plugin with common functionality.

    Plugins extend this class to get default implementations of the hook
    methods. All hook methods are decorated with @hookimpl to register them
    with pluggy.
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @hookimpl
    def dashboard_get_plugin_metadata(self) -> PluginMetadata:
        """Return plugin metadata."""
        return self._metadata

    @hookimpl
    def dashboard_get_capabilities(self) -> Capabilities:
        """Return plugin capabilities. Override in subclass."""
        return Capabilities()

    @hookimpl
    def dashboard_get_crd_definitions(self) -> list[CRDDefinition]:
        """Return CRD definitions. Override in subclass."""
        return []

    @hookimpl
    def dashboard_navigation(self) -> Navigation | None:
        """Return the navigation tree. Override in subclass."""
        return None

    @hookimpl
    def dashboard_content(self, request: ContentRequest) -> ContentResponse | None:
        """Render a content path. Override in subclass."""
        return None

    @hookimpl
    def dashboard_action(self, request: ActionRequest) -> None:
        """Handle an action. Override in subclass."""

    @hookimpl
    def dashboard_health_check(self, dashboard: DashboardClient) -> tuple[bool, str]:
        """Check plugin health by verifying required CRDs are readable.

        Default implementation lists every kind named in
        metadata.requires_crds.
        """
        if not self._metadata.requires_crds:
            return True, "No CRD requirements"

        crd_map = {crd.kind: crd for crd in self.dashboard_get_crd_definitions()}

        missing_crds = []
        for crd_kind in self._metadata.requires_crds:
            if crd_kind not in crd_map:
                missing_crds.append(crd_kind)
                continue

            crd = crd_map[crd_kind]
            try:
                dashboard.list(ResourceIdentity(api_version=crd.api_version, kind=crd.kind))
            except Exception:
                missing_crds.append(crd_kind)

        if missing_crds:
            return False, f"Missing CRDs: {', '.join(missing_crds)}"

        return True, "All required CRDs available"
