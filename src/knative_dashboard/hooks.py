"""Hook specifications for dashboard plugins.

The dashboard host talks to plugins only through these hooks, invoked by
the PluginManager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from knative_dashboard.clients.base import CRDDefinition, DashboardClient
    from knative_dashboard.components import ContentResponse, Navigation
    from knative_dashboard.models.requests import ActionRequest, ContentRequest
    from knative_dashboard.plugin import Capabilities, PluginMetadata

PROJECT_NAME = "knative_dashboard"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DashboardHookSpec:
    """Hooks a dashboard plugin may implement."""

    @hookspec
    def dashboard_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return metadata identifying the plugin."""

    @hookspec
    def dashboard_get_capabilities(self) -> Capabilities:  # type: ignore[empty-body]
        """Return the actions the plugin handles and whether it owns content paths."""

    @hookspec
    def dashboard_get_crd_definitions(self) -> list[CRDDefinition]:  # type: ignore[empty-body]
        """Return the resource types the plugin reads."""

    @hookspec
    def dashboard_health_check(self, dashboard: DashboardClient) -> tuple[bool, str]:  # type: ignore[empty-body]
        """Check whether the plugin can work against the given store."""

    @hookspec
    def dashboard_navigation(self) -> Navigation | None:
        """Return the plugin's navigation tree, if it is a module."""

    @hookspec(firstresult=True)
    def dashboard_content(self, request: ContentRequest) -> ContentResponse | None:
        """Render the page for a content path."""

    @hookspec
    def dashboard_action(self, request: ActionRequest) -> None:
        """Handle an action; plugins ignore actions they do not know."""
