"""Page handlers for Knative Serving content paths.

Each handler receives the content request, the session namespace and the
parameters the router extracted from the path, and returns a
ContentResponse with a breadcrumb title built from linker paths.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from knative_dashboard.components import (
    Component,
    ContentResponse,
    Form,
    FormField,
    Link,
    ListView,
    Text,
)
from knative_dashboard.domains.serving import summaries
from knative_dashboard.domains.serving.actions import ActionName, send_content_path
from knative_dashboard.domains.serving.crds import ServingKind
from knative_dashboard.linker import ref

if TYPE_CHECKING:
    from knative_dashboard.clients.base import DashboardClient
    from knative_dashboard.domains.serving.client import ServingClient
    from knative_dashboard.linker import Linker
    from knative_dashboard.models.common import ResourceIdentity
    from knative_dashboard.models.requests import ContentRequest
    from knative_dashboard.utils.errors import NotFoundError

logger = logging.getLogger(__name__)

ROOT_TITLE = "Knative"


class ServingViews:
    """Builds the pages of the plugin."""

    def __init__(self, client: ServingClient, linker: Linker, dashboard: DashboardClient) -> None:
        self._client = client
        self._linker = linker
        self._dashboard = dashboard

    # Breadcrumbs

    def _root_link(self) -> Link:
        return Link(value=ROOT_TITLE, ref=self._linker(ref()))

    def _collection_link(self, kind: ServingKind, title: str) -> Link:
        return Link(value=title, ref=self._linker(ref(kind)))

    def _breadcrumbs(self, kind: ServingKind, title: str, *tail: Component) -> list[Component]:
        return [self._root_link(), self._collection_link(kind, title), *tail]

    @staticmethod
    def _listing(title: list[Component], *items: Component) -> ContentResponse:
        return ContentResponse(title=title, body=[ListView(items=list(items), title=title)])

    # Overview and listings

    def overview(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        title: list[Component] = [Text(value=ROOT_TITLE)]
        body = ListView(
            items=[
                summaries.service_table(self._client.list_services(namespace), self._linker),
                summaries.configuration_table(self._client.list_configurations(namespace), self._linker),
                summaries.route_table(self._client.list_routes(namespace), self._linker),
            ],
            title=title,
        )
        return ContentResponse(
            title=title,
            body=[body],
            button_group=summaries.new_service_button_group(self._linker, request.client_id),
        )

    def service_listing(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        title: list[Component] = [self._root_link(), Text(value="Services")]
        response = self._listing(
            title, summaries.service_table(self._client.list_services(namespace), self._linker)
        )
        response.button_group = summaries.new_service_button_group(self._linker, request.client_id)
        return response

    def configuration_listing(
        self, request: ContentRequest, namespace: str, params: dict[str, str]
    ) -> ContentResponse:
        title: list[Component] = [self._root_link(), Text(value="Configurations")]
        return self._listing(
            title,
            summaries.configuration_table(self._client.list_configurations(namespace), self._linker),
        )

    def route_listing(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        title: list[Component] = [self._root_link(), Text(value="Routes")]
        return self._listing(title, summaries.route_table(self._client.list_routes(namespace), self._linker))

    def new_service_form(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        title = self._breadcrumbs(ServingKind.SERVICE, "Services", Text(value="New Service"))
        form = Form(
            action=ActionName.NEW_SERVICE.value,
            fields=[
                FormField(type="text", name="name", label="Name"),
                FormField(type="text", name="revisionName", label="Revision Name", placeholder="generated"),
                FormField(type="text", name="image", label="Image"),
                FormField(type="hidden", name="clientID", label="", value=request.client_id),
            ],
            submit_label="Create",
            title=title,
        )
        return ContentResponse(title=title, body=[form])

    # Details

    def service_detail(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        name = params["serviceName"]
        service = self._client.get_service(name, namespace)
        revisions = self._client.list_revisions(ServingKind.SERVICE, name, namespace)
        return ContentResponse(
            title=self._breadcrumbs(ServingKind.SERVICE, "Services", Text(value=name)),
            body=[
                summaries.service_summary(service, revisions, self._linker),
                summaries.metadata_summary(service, self._linker),
                summaries.yaml_editor(service),
            ],
            button_group=summaries.delete_button_group(ServingKind.SERVICE.value, name, namespace),
        )

    def configuration_detail(
        self, request: ContentRequest, namespace: str, params: dict[str, str]
    ) -> ContentResponse:
        name = params["configurationName"]
        configuration = self._client.get_configuration(name, namespace)
        revisions = self._client.list_revisions(ServingKind.CONFIGURATION, name, namespace)
        return ContentResponse(
            title=self._breadcrumbs(ServingKind.CONFIGURATION, "Configurations", Text(value=name)),
            body=[
                summaries.configuration_summary(configuration, revisions, self._linker),
                summaries.metadata_summary(configuration, self._linker),
                summaries.yaml_editor(configuration),
            ],
            button_group=summaries.delete_button_group(ServingKind.CONFIGURATION.value, name, namespace),
        )

    def route_detail(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        name = params["routeName"]
        route = self._client.get_route(name, namespace)
        owners = self._client.revision_configurations(namespace)
        return ContentResponse(
            title=self._breadcrumbs(ServingKind.ROUTE, "Routes", Text(value=name)),
            body=[
                summaries.route_summary(route, self._linker, owners),
                summaries.metadata_summary(route, self._linker),
                summaries.yaml_editor(route),
            ],
            button_group=summaries.delete_button_group(ServingKind.ROUTE.value, name, namespace),
        )

    def _revision_owner(self, params: dict[str, str]) -> tuple[ServingKind, str, ResourceIdentity]:
        if params.get("serviceName"):
            kind, title, name = ServingKind.SERVICE, "Services", params["serviceName"]
        elif params.get("configurationName"):
            kind, title, name = ServingKind.CONFIGURATION, "Configurations", params["configurationName"]
        else:
            raise KeyError("Revision routes carry a serviceName or configurationName")
        return kind, title, ref(kind, name)

    def revision_detail(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        name = params["revisionName"]
        owner_kind, owner_title, owner = self._revision_owner(params)
        revision = self._client.get_revision(name, namespace)
        pods = self._client.list_pods(name, namespace)

        title = self._breadcrumbs(
            owner_kind,
            owner_title,
            Link(value=owner.name or "", ref=self._linker(owner)),
            Link(value="Revisions", ref=self._linker(ref(ServingKind.REVISION), owner)),
            Text(value=name),
        )
        return ContentResponse(
            title=title,
            body=[
                summaries.revision_summary(revision, pods),
                summaries.metadata_summary(revision, self._linker),
                summaries.yaml_editor(revision),
            ],
            button_group=summaries.delete_button_group(ServingKind.REVISION.value, name, namespace),
        )

    # Redirects

    def redirect_to_owner(self, request: ContentRequest, namespace: str, params: dict[str, str]) -> ContentResponse:
        """Revision collections have no page of their own; show the owner instead."""
        _, _, owner = self._revision_owner(params)
        send_content_path(self._dashboard, request.client_id, self._linker(owner))
        return ContentResponse()

    # Fallbacks

    @staticmethod
    def not_found(content_path: str) -> ContentResponse:
        message = Text(value=f"Not Found - {content_path}")
        return ContentResponse(title=[message], body=[message])

    def missing_resource(self, error: NotFoundError) -> ContentResponse:
        logger.warning(str(error))
        title: list[Component] = [self._root_link(), Text(value=error.name)]
        return ContentResponse(title=title, body=[Text(value=str(error))])
