"""Plugin manager using pluggy.

This module provides the PluginManager class that registers plugins and
routes host requests (content, actions, navigation) to them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy

from knative_dashboard.hooks import PROJECT_NAME, DashboardHookSpec
from knative_dashboard.utils.errors import NotFoundError

if TYPE_CHECKING:
    from knative_dashboard.clients.base import CRDDefinition, DashboardClient
    from knative_dashboard.components import ContentResponse, Navigation
    from knative_dashboard.models.requests import ActionRequest, ContentRequest
    from knative_dashboard.plugin import PluginMetadata

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin registration and request routing.

    Content requests go to the single module plugin they are addressed to.
    Actions go to every plugin that lists the action in its capabilities.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DashboardHookSpec)
        self._registered_plugins: dict[str, Any] = {}
        self._healthy_plugins: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        """Get the pluggy hook caller for invoking hooks."""
        return self._pm.hook

    @property
    def registered_plugins(self) -> dict[str, Any]:
        """Get all registered plugins by name."""
        return self._registered_plugins

    @property
    def healthy_plugins(self) -> dict[str, Any]:
        """Get plugins that passed health checks."""
        return self._healthy_plugins

    def register_plugin(self, plugin: Any, name: str | None = None) -> str:
        """Register a plugin instance.

        Args:
            plugin: Plugin instance implementing hook methods.
            name: Optional name for the plugin. If not provided,
                  will try to get from plugin metadata.

        Returns:
            The name used to register the plugin.
        """
        if name is None:
            if hasattr(plugin, "dashboard_get_plugin_metadata"):
                name = plugin.dashboard_get_plugin_metadata().name
            else:
                name = type(plugin).__name__

        self._pm.register(plugin, name=name)
        self._registered_plugins[name] = plugin
        logger.debug(f"Registered plugin: {name}")
        return name

    def unregister_plugin(self, name: str) -> None:
        """Unregister a plugin by name."""
        if name in self._registered_plugins:
            plugin = self._registered_plugins.pop(name)
            self._pm.unregister(plugin)
            self._healthy_plugins.pop(name, None)
            logger.debug(f"Unregistered plugin: {name}")

    def get_all_metadata(self) -> list[PluginMetadata]:
        """Collect metadata from all registered plugins."""
        results = self.hook.dashboard_get_plugin_metadata()
        return [meta for meta in results if meta is not None]

    def get_all_crd_definitions(self) -> list[CRDDefinition]:
        """Collect CRD definitions from all plugins."""
        all_crds: list[CRDDefinition] = []
        for crd_list in self.hook.dashboard_get_crd_definitions():
            if crd_list:
                all_crds.extend(crd_list)
        return all_crds

    def navigation(self) -> list[Navigation]:
        """Collect navigation trees from module plugins."""
        return [nav for nav in self.hook.dashboard_navigation() if nav is not None]

    def _others(self, names: set[str]) -> list[Any]:
        return [p for n, p in self._registered_plugins.items() if n not in names]

    def handle_content(self, plugin_name: str, request: ContentRequest) -> ContentResponse:
        """Render a content path with the named module plugin.

        Raises:
            NotFoundError: If no plugin is registered under that name.
        """
        if plugin_name not in self._registered_plugins:
            raise NotFoundError("Plugin", plugin_name)

        caller = self._pm.subset_hook_caller("dashboard_content", remove_plugins=self._others({plugin_name}))
        logger.debug(f"Content request for {plugin_name}: {request.content_path!r}")
        return caller(request=request)

    def action_handlers(self, action_name: str) -> set[str]:
        """Return the names of plugins that declare the given action."""
        handlers = set()
        for name, plugin in self._registered_plugins.items():
            if not hasattr(plugin, "dashboard_get_capabilities"):
                continue
            if action_name in plugin.dashboard_get_capabilities().action_names:
                handlers.add(name)
        return handlers

    def handle_action(self, request: ActionRequest) -> set[str]:
        """Deliver an action to every plugin that declares it.

        Returns:
            Names of the plugins the action was delivered to.
        """
        handlers = self.action_handlers(request.action_name)
        if not handlers:
            logger.debug(f"No plugin handles action {request.action_name}")
            return handlers

        caller = self._pm.subset_hook_caller("dashboard_action", remove_plugins=self._others(handlers))
        caller(request=request)
        logger.info(f"Action {request.action_name} handled by {', '.join(sorted(handlers))}")
        return handlers

    def run_health_checks(self, dashboard: DashboardClient) -> dict[str, tuple[bool, str]]:
        """Run health checks on all registered plugins.

        Updates the healthy_plugins dict with plugins that pass.

        Returns:
            Dictionary mapping plugin names to (healthy, message) tuples.
        """
        results: dict[str, tuple[bool, str]] = {}
        self._healthy_plugins.clear()

        for name, plugin in self._registered_plugins.items():
            try:
                if hasattr(plugin, "dashboard_health_check"):
                    is_healthy, message = plugin.dashboard_health_check(dashboard=dashboard)
                else:
                    is_healthy, message = True, "No health check defined"

                results[name] = (is_healthy, message)

                if is_healthy:
                    self._healthy_plugins[name] = plugin
                    logger.info(f"Plugin {name} health check passed: {message}")
                else:
                    logger.warning(f"Plugin {name} unavailable: {message}")
            except Exception as e:
                results[name] = (False, f"Health check error: {e}")
                logger.warning(f"Plugin {name} health check failed with error: {e}")

        return results
