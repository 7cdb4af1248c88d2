"""Plugin registration for Knative Serving."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from knative_dashboard import __version__
from knative_dashboard.components import ContentResponse, Navigation
from knative_dashboard.config import KnativeDashboardConfig, get_config
from knative_dashboard.domains.serving.actions import ActionDispatcher
from knative_dashboard.domains.serving.client import ServingClient
from knative_dashboard.domains.serving.crds import ServingCRDs, ServingKind
from knative_dashboard.domains.serving.views import ServingViews
from knative_dashboard.hooks import hookimpl
from knative_dashboard.linker import Linker
from knative_dashboard.plugin import BasePlugin, Capabilities, PluginMetadata
from knative_dashboard.router import Router
from knative_dashboard.utils.errors import NotFoundError

if TYPE_CHECKING:
    from knative_dashboard.clients.base import CRDDefinition, DashboardClient
    from knative_dashboard.models.requests import ActionRequest, ContentRequest

logger = logging.getLogger(__name__)


def build_router(views: ServingViews) -> Router:
    """Build the route table. Literal routes precede the parameter routes they overlap."""
    router = Router()
    router.add("/", views.overview, name="overview")
    router.add("/services", views.service_listing, name="service-listing")
    router.add("/services/_new", views.new_service_form, name="new-service-form")
    router.add("/services/:serviceName", views.service_detail, name="service-detail")
    router.add("/services/:serviceName/revisions", views.redirect_to_owner, name="redirect-to-service")
    router.add(
        "/services/:serviceName/revisions/:revisionName",
        views.revision_detail,
        name="revision-detail",
    )
    router.add("/configurations", views.configuration_listing, name="configuration-listing")
    router.add(
        "/configurations/:configurationName",
        views.configuration_detail,
        name="configuration-detail",
    )
    router.add(
        "/configurations/:configurationName/revisions",
        views.redirect_to_owner,
        name="redirect-to-configuration",
    )
    router.add(
        "/configurations/:configurationName/revisions/:revisionName",
        views.revision_detail,
        name="revision-detail",
    )
    router.add("/routes", views.route_listing, name="route-listing")
    router.add("/routes/:routeName", views.route_detail, name="route-detail")
    router.freeze()
    return router


class KnativePlugin(BasePlugin):
    """Dashboard module for Knative Serving.

    Renders Services, Configurations, Routes and Revisions of the selected
    namespace and handles the edit, create and navigation actions their
    pages submit. The selected namespace is the only state the plugin
    keeps, and ``set_namespace`` is the only way to change it.
    """

    def __init__(self, dashboard: DashboardClient, config: KnativeDashboardConfig | None = None) -> None:
        self._config = config or get_config()
        super().__init__(
            PluginMetadata(
                name=self._config.plugin_name,
                version=__version__,
                description="Knative plugin for Octant",
                requires_crds=[kind.value for kind in ServingKind],
            )
        )
        self._namespace = self._config.default_namespace

        self.linker = Linker(self._config.root_path)
        self.client = ServingClient(dashboard)
        self.views = ServingViews(self.client, self.linker, dashboard)
        self.actions = ActionDispatcher(self.client, dashboard, self.linker, self._config)
        self.router = build_router(self.views)

    @property
    def namespace(self) -> str:
        return self._namespace

    def set_namespace(self, namespace: str) -> None:
        logger.info(f"Namespace changed from {self._namespace} to {namespace}")
        self._namespace = namespace

    def render(self, request: ContentRequest) -> ContentResponse:
        """Render the page for the request's content path.

        The empty path is the overview. Unknown paths and missing resources
        render an inline message instead of raising.
        """
        path = request.content_path
        if path == "":
            handler, params = self.views.overview, {}
        else:
            match = self.router.resolve(self.linker.relative(path))
            if match is None:
                return self.views.not_found(path)
            handler, params = match.handler, match.params

        try:
            return handler(request, self._namespace, params)
        except NotFoundError as e:
            return self.views.missing_resource(e)

    @hookimpl
    def dashboard_get_capabilities(self) -> Capabilities:
        return Capabilities(action_names=self.actions.action_names, is_module=True)

    @hookimpl
    def dashboard_get_crd_definitions(self) -> list[CRDDefinition]:
        return ServingCRDs.all_crds()

    @hookimpl
    def dashboard_navigation(self) -> Navigation:
        nav = Navigation(title="Knative", path=self._config.plugin_name, icon_name="cloud")
        nav.add("Services", "services")
        nav.add("Configurations", "configurations")
        nav.add("Routes", "routes")
        return nav

    @hookimpl
    def dashboard_content(self, request: ContentRequest) -> ContentResponse:
        return self.render(request)

    @hookimpl
    def dashboard_action(self, request: ActionRequest) -> None:
        self.actions.dispatch(request.action_name, request.payload, self)


def create_plugin(dashboard: DashboardClient, config: KnativeDashboardConfig | None = None) -> KnativePlugin:
    """Factory function for plugin creation."""
    return KnativePlugin(dashboard, config)
