"""Handlers for actions the dashboard sends to the plugin.

Every action payload is validated before anything is mutated, so a bad
payload leaves both the session and the object store untouched.
"""

from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from knative_dashboard.clients.base import CONTENT_PATH_EVENT
from knative_dashboard.domains.serving.crds import SERVING_V1, ServingKind
from knative_dashboard.linker import ref
from knative_dashboard.utils.documents import load_document
from knative_dashboard.utils.errors import OperationNotAllowedError, ValidationError

if TYPE_CHECKING:
    from knative_dashboard.clients.base import DashboardClient
    from knative_dashboard.config import KnativeDashboardConfig
    from knative_dashboard.domains.serving.client import ServingClient
    from knative_dashboard.linker import Linker

logger = logging.getLogger(__name__)


class ActionName(str, Enum):
    """Actions this plugin handles."""

    SET_NAMESPACE = "action.octant.dev/setNamespace"
    EDIT_SERVICE = "knative.dev/editService"
    EDIT_CONFIGURATION = "knative.dev/editConfiguration"
    NEW_SERVICE = "knative.dev/newService"
    SET_CONTENT_PATH = "knative.dev/setContentPath"


# Handled by the dashboard itself; the plugin only builds buttons for it.
DELETE_OBJECT_ACTION = "action.octant.dev/deleteObject"


class ActionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SetNamespacePayload(ActionPayload):
    namespace: str = Field(..., min_length=1)


class EditPayload(ActionPayload):
    revision_name: str | None = Field(None, alias="revisionName")
    image: str = Field(..., min_length=1)

    @field_validator("revision_name")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        return value or None


class EditServicePayload(EditPayload):
    service: str


class EditConfigurationPayload(EditPayload):
    configuration: str


class NewServicePayload(EditPayload):
    name: str = Field(..., min_length=1)
    client_id: str = Field(..., alias="clientID")


class SetContentPathPayload(ActionPayload):
    client_id: str = Field(..., alias="clientID")
    content_path: str = Field(..., alias="contentPath")


P = TypeVar("P", bound=ActionPayload)


def parse_payload(model: type[P], payload: dict[str, Any] | None) -> P:
    """Validate an action payload.

    Raises:
        ValidationError: If required fields are missing or invalid.
    """
    try:
        return model.model_validate(payload or {})
    except pydantic.ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ValidationError(f"Invalid {model.__name__}: {fields}") from e


def send_content_path(dashboard: DashboardClient, client_id: str, content_path: str) -> None:
    """Ask a dashboard client to navigate to a content path."""
    dashboard.send_event(client_id, CONTENT_PATH_EVENT, {"contentPath": content_path})
    logger.info(f"Sent client {client_id} to {content_path}")


def apply_edit(document: dict[str, Any], revision_name: str | None, image: str) -> dict[str, Any]:
    """Return a copy of a Service or Configuration document with edits applied.

    Server-managed ``metadata.managedFields`` is dropped. The revision
    template is named ``<name>-<revision_name>``, or left for the server to
    name when no revision name is given. The first container gets ``image``.

    Raises:
        ValidationError: If the document lacks a name or a container.
    """
    document = copy.deepcopy(document)

    metadata = document.get("metadata")
    if not isinstance(metadata, dict) or not metadata.get("name"):
        raise ValidationError("Document has no metadata.name")

    template = (document.get("spec") or {}).get("template")
    if not isinstance(template, dict):
        raise ValidationError(f"{metadata['name']} has no spec.template")

    containers = (template.get("spec") or {}).get("containers")
    if not containers or not isinstance(containers[0], dict):
        raise ValidationError(f"{metadata['name']} has no containers to update")

    metadata.pop("managedFields", None)

    if not isinstance(template.get("metadata"), dict):
        template["metadata"] = {}
    if revision_name:
        template["metadata"]["name"] = f"{metadata['name']}-{revision_name}"
    else:
        template["metadata"].pop("name", None)

    containers[0]["image"] = image
    return document


def new_service_document(namespace: str, payload: NewServicePayload) -> dict[str, Any]:
    """Build the minimal Service document for the new service form."""
    template_metadata: dict[str, Any] = {}
    if payload.revision_name:
        template_metadata["name"] = payload.revision_name

    return {
        "apiVersion": SERVING_V1,
        "kind": ServingKind.SERVICE.value,
        "metadata": {
            "namespace": namespace,
            "name": payload.name,
        },
        "spec": {
            "template": {
                "metadata": template_metadata,
                "spec": {
                    "containers": [{"image": payload.image}],
                },
            },
        },
    }


class Session(Protocol):
    """Plugin state an action may read or change."""

    @property
    def namespace(self) -> str: ...

    def set_namespace(self, namespace: str) -> None: ...


class ActionDispatcher:
    """Turns action requests into store updates and navigation events."""

    def __init__(
        self,
        client: ServingClient,
        dashboard: DashboardClient,
        linker: Linker,
        config: KnativeDashboardConfig,
    ) -> None:
        self._client = client
        self._dashboard = dashboard
        self._linker = linker
        self._config = config
        self._handlers = {
            ActionName.SET_NAMESPACE.value: self.set_namespace,
            ActionName.EDIT_SERVICE.value: self.edit_service,
            ActionName.EDIT_CONFIGURATION.value: self.edit_configuration,
            ActionName.NEW_SERVICE.value: self.new_service,
            ActionName.SET_CONTENT_PATH.value: self.set_content_path,
        }

    @property
    def action_names(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, action_name: str, payload: dict[str, Any] | None, session: Session) -> None:
        """Run the handler for ``action_name``; unknown actions are ignored."""
        handler = self._handlers.get(action_name)
        if handler is None:
            logger.debug(f"Ignoring unknown action {action_name}")
            return
        handler(payload, session)

    def _check_allowed(self, operation: str) -> None:
        allowed, reason = self._config.is_operation_allowed(operation)
        if not allowed:
            logger.warning(reason)
            raise OperationNotAllowedError(reason)

    def set_namespace(self, payload: dict[str, Any] | None, session: Session) -> None:
        request = parse_payload(SetNamespacePayload, payload)
        session.set_namespace(request.namespace)

    def edit_service(self, payload: dict[str, Any] | None, session: Session) -> None:
        request = parse_payload(EditServicePayload, payload)
        self._edit(load_document(request.service, "service"), request, session)

    def edit_configuration(self, payload: dict[str, Any] | None, session: Session) -> None:
        request = parse_payload(EditConfigurationPayload, payload)
        self._edit(load_document(request.configuration, "configuration"), request, session)

    def _edit(self, document: dict[str, Any], request: EditPayload, session: Session) -> None:
        self._check_allowed("update")
        edited = apply_edit(document, request.revision_name, request.image)
        metadata = edited["metadata"]
        namespace = metadata.setdefault("namespace", session.namespace)
        self._client.update(namespace, edited)

    def new_service(self, payload: dict[str, Any] | None, session: Session) -> None:
        """Create a Service and send the requesting client to its page.

        The navigation event is only sent once the store accepted the
        update; a rejected update raises MutationError instead.
        """
        request = parse_payload(NewServicePayload, payload)
        self._check_allowed("create")

        namespace = session.namespace
        self._client.update(namespace, new_service_document(namespace, request))

        content_path = self._linker.link(ref(ServingKind.SERVICE, request.name))
        send_content_path(self._dashboard, request.client_id, content_path)

    def set_content_path(self, payload: dict[str, Any] | None, session: Session) -> None:  # noqa: ARG002
        request = parse_payload(SetContentPathPayload, payload)
        send_content_path(self._dashboard, request.client_id, request.content_path)
