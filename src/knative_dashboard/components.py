"""View-model components rendered by the dashboard host.

Each component serializes to the host's JSON shape::

    {"metadata": {"type": "text", "title": [...], "accessor": "..."},
     "config": {"value": "..."}}

Only the data contract lives here; the host decides how things look.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from knative_dashboard.models.common import NodeStatus


def _serialize(value: Any) -> Any:
    if isinstance(value, Component):
        return value.to_component()
    if isinstance(value, BaseModel):
        return {
            info.alias or name: _serialize(getattr(value, name))
            for name, info in type(value).model_fields.items()
            if getattr(value, name) is not None
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class Component(BaseModel):
    """Base for all components."""

    model_config = ConfigDict(populate_by_name=True)

    component_type: ClassVar[str] = ""

    title: list[Component] = Field(default_factory=list, exclude=True)
    accessor: str | None = Field(None, exclude=True)

    def config(self) -> dict[str, Any]:
        """Return the component's config block."""
        return {
            info.alias or name: _serialize(getattr(self, name))
            for name, info in type(self).model_fields.items()
            if not info.exclude and getattr(self, name) is not None
        }

    def to_component(self) -> dict[str, Any]:
        """Return the component in the host's JSON shape."""
        metadata: dict[str, Any] = {"type": self.component_type}
        if self.title:
            metadata["title"] = [t.to_component() for t in self.title]
        if self.accessor:
            metadata["accessor"] = self.accessor
        return {"metadata": metadata, "config": self.config()}


class Text(Component):
    component_type: ClassVar[str] = "text"

    value: str


class Link(Component):
    component_type: ClassVar[str] = "link"

    value: str
    ref: str
    status: NodeStatus | None = None
    status_detail: Component | None = Field(None, alias="statusDetail")


class Timestamp(Component):
    """Point in time as whole seconds since the epoch; the host renders the age."""

    component_type: ClassVar[str] = "timestamp"

    timestamp: int


class Labels(Component):
    component_type: ClassVar[str] = "labels"

    labels: dict[str, str] = Field(default_factory=dict)


class TableColumn(BaseModel):
    name: str
    accessor: str


class Table(Component):
    component_type: ClassVar[str] = "table"

    columns: list[TableColumn]
    rows: list[dict[str, Component]] = Field(default_factory=list)
    empty_content: str = Field("", alias="emptyContent")
    loading: bool = False
    filters: dict[str, Any] = Field(default_factory=dict)

    @staticmethod
    def columns_for(*names: str) -> list[TableColumn]:
        """Build columns whose accessor equals their name."""
        return [TableColumn(name=name, accessor=name) for name in names]


class SummarySection(BaseModel):
    header: str
    content: Component


class Summary(Component):
    component_type: ClassVar[str] = "summary"

    sections: list[SummarySection] = Field(default_factory=list)


class FlexLayoutItem(BaseModel):
    view: Component
    width: int = 24


class FlexLayout(Component):
    component_type: ClassVar[str] = "flexlayout"

    sections: list[list[FlexLayoutItem]] = Field(default_factory=list)


class ListView(Component):
    component_type: ClassVar[str] = "list"

    items: list[Component] = Field(default_factory=list)


class Confirmation(BaseModel):
    title: str
    body: str


class Button(BaseModel):
    name: str
    payload: dict[str, Any]
    confirmation: Confirmation | None = None


class ButtonGroup(Component):
    component_type: ClassVar[str] = "buttonGroup"

    buttons: list[Button] = Field(default_factory=list)


class GridAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    action_path: str = Field(..., alias="actionPath")
    payload: dict[str, Any]
    confirmation: Confirmation | None = None
    type: str = "danger"


class GridActions(Component):
    component_type: ClassVar[str] = "gridActions"

    actions: list[GridAction] = Field(default_factory=list)


class Editor(Component):
    component_type: ClassVar[str] = "editor"

    value: str
    read_only: bool = Field(False, alias="readOnly")
    object_metadata: dict[str, str] = Field(default_factory=dict, alias="metadata")


class FormField(BaseModel):
    type: str
    name: str
    label: str
    value: Any = None
    placeholder: str | None = None


class Form(Component):
    """Form whose submission is delivered to the plugin as an action."""

    component_type: ClassVar[str] = "form"

    action: str
    fields: list[FormField] = Field(default_factory=list)
    submit_label: str = Field("Submit", alias="submitLabel")


class ContentResponse(BaseModel):
    """A rendered page: breadcrumb title, body components and buttons."""

    model_config = ConfigDict(populate_by_name=True)

    title: list[Component] = Field(default_factory=list)
    body: list[Component] = Field(default_factory=list)
    button_group: ButtonGroup | None = Field(None, alias="buttonGroup")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "title": [c.to_component() for c in self.title],
            "body": [c.to_component() for c in self.body],
        }
        if self.button_group is not None:
            result["buttonGroup"] = self.button_group.to_component()
        return result


class Navigation(BaseModel):
    """Entry in the host's navigation tree."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    path: str
    icon_name: str | None = Field(None, alias="iconName")
    children: list[Navigation] = Field(default_factory=list)

    def add(self, title: str, path: str, icon_name: str | None = None) -> Navigation:
        child = Navigation(title=title, path=f"{self.path}/{path}", icon_name=icon_name)
        self.children.append(child)
        return child

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
