"""Component builders for Knative Serving resources.

Tables for listings and summary layouts for detail pages. Cross
references are built with the linker so every link resolves back to a
plugin route.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from knative_dashboard.components import (
    Button,
    ButtonGroup,
    Component,
    Confirmation,
    Editor,
    FlexLayout,
    FlexLayoutItem,
    Form,
    FormField,
    GridAction,
    GridActions,
    Labels,
    Link,
    ListView,
    Summary,
    SummarySection,
    Table,
    Text,
    Timestamp,
)
from knative_dashboard.domains.serving.actions import DELETE_OBJECT_ACTION, ActionName
from knative_dashboard.domains.serving.crds import SERVING_V1, ServingKind
from knative_dashboard.linker import COLLECTION_SEGMENTS, ref
from knative_dashboard.models.common import (
    Condition,
    KubernetesObject,
    NodeStatus,
    ResourceIdentity,
    find_condition,
)
from knative_dashboard.utils.documents import dump_document

if TYPE_CHECKING:
    from knative_dashboard.domains.serving.models import (
        Configuration,
        Pod,
        Revision,
        Route,
        Service,
        ServingObject,
        TrafficTarget,
    )
    from knative_dashboard.linker import Linker

UNKNOWN = "<unknown>"
NOT_FOUND = "<not found>"

# Placeholder configuration segment for revisions whose owner is unknown.
UNKNOWN_CONFIGURATION = "_"


def _title(text: str) -> list[Component]:
    return [Text(value=text)]


def age(obj: KubernetesObject) -> Timestamp:
    return Timestamp(timestamp=obj.metadata.creation_epoch())


def url_link(url: str | None, placeholder: str = UNKNOWN) -> Component:
    if not url:
        return Text(value=placeholder)
    return Link(value=url, ref=url)


def condition_detail(condition: Condition | None) -> Text:
    """Describe a condition in one line."""
    if condition is None:
        return Text(value=UNKNOWN)
    text = f"{condition.type}: {condition.status}"
    if condition.reason:
        text += f" ({condition.reason})"
    if condition.message:
        text += f" - {condition.message}"
    return Text(value=text)


def condition_status(obj: ServingObject, type_: str = "Ready") -> Component:
    condition = find_condition(obj.status.conditions, type_)
    if condition is None:
        return Text(value=UNKNOWN)
    return Text(value=condition.status if not condition.message else f"{condition.status} - {condition.message}")


def status_link(obj: ServingObject, path: str) -> Link:
    """Link to a resource, annotated with its Ready condition."""
    ready = obj.ready_condition()
    return Link(
        value=obj.metadata.name,
        ref=path,
        status=ready.node_status if ready else NodeStatus.WARNING,
        status_detail=condition_detail(ready),
    )


def revision_link(name: str | None, linker: Linker, context: ResourceIdentity) -> Component:
    if not name:
        return Text(value=UNKNOWN)
    return Link(value=name, ref=linker(ref(ServingKind.REVISION, name), context))


def delete_confirmation(kind: str, name: str) -> Confirmation:
    return Confirmation(
        title=f"Delete {kind}",
        body=(
            f"Are you sure you want to delete *{kind}* **{name}**? "
            "This action is permanent and cannot be recovered."
        ),
    )


def delete_payload(kind: str, name: str, namespace: str) -> dict[str, str]:
    return {
        "action": DELETE_OBJECT_ACTION,
        "apiVersion": SERVING_V1,
        "kind": kind,
        "namespace": namespace,
        "name": name,
    }


def delete_button_group(kind: str, name: str, namespace: str) -> ButtonGroup:
    """Delete button shown on detail pages."""
    return ButtonGroup(
        buttons=[
            Button(
                name="Delete",
                payload=delete_payload(kind, name, namespace),
                confirmation=delete_confirmation(kind, name),
            )
        ]
    )


def delete_grid_action(obj: KubernetesObject) -> GridActions:
    """Delete action shown on each listing row."""
    payload = delete_payload(obj.kind, obj.metadata.name, obj.metadata.namespace or "")
    payload.pop("action")
    return GridActions(
        actions=[
            GridAction(
                name="Delete",
                action_path=DELETE_OBJECT_ACTION,
                payload=payload,
                confirmation=delete_confirmation(obj.kind, obj.metadata.name),
            )
        ]
    )


def new_service_button_group(linker: Linker, client_id: str) -> ButtonGroup:
    return ButtonGroup(
        buttons=[
            Button(
                name="New Service",
                payload={
                    "action": ActionName.SET_CONTENT_PATH.value,
                    "clientID": client_id,
                    "contentPath": linker(ref(ServingKind.SERVICE, "_new")),
                },
            )
        ]
    )


# Listings


def service_table(services: list[Service], linker: Linker, title: str = "Services") -> Table:
    rows = []
    for service in services:
        name = service.metadata.name
        context = ref(ServingKind.SERVICE, name)
        rows.append(
            {
                "_action": delete_grid_action(service),
                "Name": status_link(service, linker(context)),
                "URL": url_link(service.status.url, NOT_FOUND),
                "Latest Created": revision_link(service.status.latest_created_revision_name, linker, context),
                "Latest Ready": revision_link(service.status.latest_ready_revision_name, linker, context),
                "Age": age(service),
            }
        )
    return Table(
        columns=Table.columns_for("Name", "URL", "Latest Created", "Latest Ready", "Age"),
        rows=rows,
        empty_content="There are no services!",
        title=_title(title),
    )


def configuration_table(
    configurations: list[Configuration], linker: Linker, title: str = "Configurations"
) -> Table:
    rows = []
    for configuration in configurations:
        name = configuration.metadata.name
        context = ref(ServingKind.CONFIGURATION, name)
        status = configuration.status
        rows.append(
            {
                "_action": delete_grid_action(configuration),
                "Name": status_link(configuration, linker(context)),
                "Latest Created": revision_link(status.latest_created_revision_name, linker, context),
                "Latest Ready": revision_link(status.latest_ready_revision_name, linker, context),
                "Age": age(configuration),
            }
        )
    return Table(
        columns=Table.columns_for("Name", "Latest Created", "Latest Ready", "Age"),
        rows=rows,
        empty_content="There are no configurations!",
        title=_title(title),
    )


def route_table(routes: list[Route], linker: Linker, title: str = "Routes") -> Table:
    rows = []
    for route in routes:
        rows.append(
            {
                "_action": delete_grid_action(route),
                "Name": status_link(route, linker(ref(ServingKind.ROUTE, route.metadata.name))),
                "URL": url_link(route.status.url, NOT_FOUND),
                "Age": age(route),
            }
        )
    return Table(
        columns=Table.columns_for("Name", "URL", "Age"),
        rows=rows,
        empty_content="There are no routes!",
        title=_title(title),
    )


def revision_table(revisions: list[Revision], linker: Linker, context: ResourceIdentity) -> Table:
    """Revisions of a Service or Configuration, linked under their owner."""
    rows = []
    for revision in revisions:
        name = revision.metadata.name
        generation = revision.generation
        rows.append(
            {
                "_action": delete_grid_action(revision),
                "Name": status_link(revision, linker(ref(ServingKind.REVISION, name), context)),
                "Generation": Text(value=str(generation) if generation >= 0 else UNKNOWN),
                "Image": Text(value=revision.spec.image or UNKNOWN),
                "Age": age(revision),
            }
        )
    return Table(
        columns=Table.columns_for("Name", "Generation", "Image", "Age"),
        rows=rows,
        empty_content="There are no revisions!",
        title=_title("Revisions"),
    )


def pod_table(pods: list[Pod]) -> Table:
    rows = [
        {
            "Name": Text(value=pod.metadata.name),
            "Phase": Text(value=pod.status.phase or UNKNOWN),
            "Ready": Text(value=pod.ready_summary),
            "Age": age(pod),
        }
        for pod in pods
    ]
    return Table(
        columns=Table.columns_for("Name", "Phase", "Ready", "Age"),
        rows=rows,
        empty_content="There are no pods!",
        title=_title("Pods"),
    )


def traffic_table(
    targets: list[TrafficTarget],
    linker: Linker,
    revision_configurations: dict[str, str] | None = None,
    title: str = "Traffic Policy",
) -> Table:
    """Traffic split table.

    A target naming neither a configuration nor a revision follows the
    latest ready revision.
    """
    revision_configurations = revision_configurations or {}
    rows = []
    for target in targets:
        type_ = "Latest Revision"
        name: Component = Text(value="n/a")
        if target.configuration_name:
            type_ = ServingKind.CONFIGURATION.value
            name = Link(
                value=target.configuration_name,
                ref=linker(ref(ServingKind.CONFIGURATION, target.configuration_name)),
            )
        elif target.revision_name:
            type_ = ServingKind.REVISION.value
            owner = revision_configurations.get(target.revision_name, UNKNOWN_CONFIGURATION)
            name = revision_link(target.revision_name, linker, ref(ServingKind.CONFIGURATION, owner))

        percent = f"{target.percent}%" if target.percent is not None else UNKNOWN
        rows.append({"Name": name, "Type": Text(value=type_), "Percent": Text(value=percent)})

    return Table(
        columns=Table.columns_for("Name", "Type", "Percent"),
        rows=rows,
        empty_content="There are no traffic rules!",
        title=_title(title),
    )


# Detail summaries


def revision_suffix(obj: Service | Configuration) -> str:
    """Revision name from the template with the '<name>-' prefix removed."""
    template_name = obj.spec.template.metadata.name
    prefix = f"{obj.metadata.name}-"
    if template_name.startswith(prefix):
        return template_name[len(prefix) :]
    return template_name


def edit_form(obj: Service | Configuration, action: ActionName, document_field: str) -> Form:
    """Form that submits an edit action for a Service or Configuration."""
    return Form(
        action=action.value,
        fields=[
            FormField(
                type="text",
                name="revisionName",
                label="Revision Name",
                value=revision_suffix(obj),
                placeholder="generated",
            ),
            FormField(
                type="text",
                name="image",
                label="Image",
                value=obj.spec.template.spec.image or "",
            ),
            FormField(
                type="hidden",
                name=document_field,
                label="",
                value=dump_document(obj.document()),
            ),
        ],
        submit_label="Update",
        title=_title("Edit"),
    )


def _status_summary(obj: ServingObject, linker: Linker, context: ResourceIdentity, urls: bool) -> Summary:
    status = obj.status
    sections = [SummarySection(header="Ready", content=condition_status(obj))]
    if urls:
        address = status.address.url if status.address else None
        sections.append(SummarySection(header="Address", content=url_link(address)))
        sections.append(SummarySection(header="URL", content=url_link(status.url)))
    sections.append(
        SummarySection(
            header="Latest Created Revision",
            content=revision_link(status.latest_created_revision_name, linker, context),
        )
    )
    sections.append(
        SummarySection(
            header="Latest Ready Revision",
            content=revision_link(status.latest_ready_revision_name, linker, context),
        )
    )
    return Summary(sections=sections, title=_title("Status"))


def service_summary(service: Service, revisions: list[Revision], linker: Linker) -> FlexLayout:
    context = ref(ServingKind.SERVICE, service.metadata.name)
    traffic = service.status.traffic or service.spec.traffic
    return FlexLayout(
        sections=[
            [
                FlexLayoutItem(view=_status_summary(service, linker, context, urls=True), width=12),
                FlexLayoutItem(view=edit_form(service, ActionName.EDIT_SERVICE, "service"), width=12),
            ],
            [FlexLayoutItem(view=traffic_table(traffic, linker, _owned(revisions, service)))],
            [FlexLayoutItem(view=revision_table(revisions, linker, context))],
        ],
        title=_title("Summary"),
        accessor="summary",
    )


def _owned(revisions: list[Revision], owner: Service) -> dict[str, str]:
    # A Service's revisions all belong to the Configuration of the same name.
    return {r.metadata.name: r.configuration_name or owner.metadata.name for r in revisions}


def configuration_summary(
    configuration: Configuration, revisions: list[Revision], linker: Linker
) -> FlexLayout:
    context = ref(ServingKind.CONFIGURATION, configuration.metadata.name)
    return FlexLayout(
        sections=[
            [
                FlexLayoutItem(view=_status_summary(configuration, linker, context, urls=False), width=12),
                FlexLayoutItem(
                    view=edit_form(configuration, ActionName.EDIT_CONFIGURATION, "configuration"),
                    width=12,
                ),
            ],
            [FlexLayoutItem(view=revision_table(revisions, linker, context))],
        ],
        title=_title("Summary"),
        accessor="summary",
    )


def revision_summary(revision: Revision, pods: list[Pod]) -> FlexLayout:
    spec = revision.spec
    status = revision.status
    concurrency = str(spec.container_concurrency) if spec.container_concurrency is not None else UNKNOWN
    timeout = f"{spec.timeout_seconds}s" if spec.timeout_seconds is not None else UNKNOWN
    summary = Summary(
        sections=[
            SummarySection(header="Image", content=Text(value=spec.image or UNKNOWN)),
            SummarySection(header="Image Digest", content=Text(value=status.image_digest or UNKNOWN)),
            SummarySection(header="Container Concurrency", content=Text(value=concurrency)),
            SummarySection(header="Timeout", content=Text(value=timeout)),
            SummarySection(header="Ready", content=condition_status(revision)),
            SummarySection(header="Active", content=condition_status(revision, "Active")),
        ],
        title=_title("Status"),
    )
    return FlexLayout(
        sections=[
            [FlexLayoutItem(view=summary)],
            [FlexLayoutItem(view=pod_table(pods))],
        ],
        title=_title("Summary"),
        accessor="summary",
    )


def route_summary(route: Route, linker: Linker, revision_configurations: dict[str, str]) -> FlexLayout:
    status = route.status
    address = status.address.url if status.address else None
    summary = Summary(
        sections=[
            SummarySection(header="Ready", content=condition_status(route)),
            SummarySection(header="Address", content=url_link(address)),
            SummarySection(header="URL", content=url_link(status.url)),
        ],
        title=_title("Status"),
    )
    return FlexLayout(
        sections=[
            [
                FlexLayoutItem(view=traffic_table(route.spec.traffic, linker, revision_configurations), width=12),
                FlexLayoutItem(view=summary, width=12),
            ],
        ],
        title=_title("Summary"),
        accessor="summary",
    )


def _owner_component(owner_kind: str, owner_name: str, linker: Linker) -> Component:
    try:
        kind = ServingKind(owner_kind)
    except ValueError:
        return Text(value=f"{owner_kind} {owner_name}")
    if kind not in COLLECTION_SEGMENTS:
        return Text(value=f"{owner_kind} {owner_name}")
    return Link(value=f"{owner_kind} {owner_name}", ref=linker(ref(kind, owner_name)))


def metadata_summary(obj: KubernetesObject, linker: Linker) -> Summary:
    """Age, labels, annotations and owners of any object."""
    metadata = obj.metadata
    sections = [SummarySection(header="Age", content=age(obj))]
    if metadata.labels:
        sections.append(SummarySection(header="Labels", content=Labels(labels=metadata.labels)))
    if metadata.annotations:
        sections.append(SummarySection(header="Annotations", content=Labels(labels=metadata.annotations)))
    if metadata.owner_references:
        owners = [_owner_component(o.kind, o.name, linker) for o in metadata.owner_references]
        sections.append(SummarySection(header="Controlled By", content=ListView(items=owners)))
    return Summary(sections=sections, title=_title("Metadata"), accessor="metadata")


def yaml_editor(obj: KubernetesObject) -> Editor:
    """Editable YAML view of the full document."""
    return Editor(
        value=dump_document(obj.document()),
        read_only=False,
        object_metadata={
            "apiVersion": obj.api_version,
            "kind": obj.kind,
            "namespace": obj.metadata.namespace or "",
            "name": obj.metadata.name or "",
        },
        title=_title("YAML"),
        accessor="yaml",
    )
