"""Tests for component serialization."""

from knative_dashboard.components import (
    Button,
    ButtonGroup,
    Confirmation,
    ContentResponse,
    Editor,
    GridAction,
    GridActions,
    Link,
    Navigation,
    Table,
    Text,
    Timestamp,
)
from knative_dashboard.models.common import NodeStatus


class TestComponent:
    """Tests for the component JSON shape."""

    def test_text(self) -> None:
        """Verify a text component serializes type and value."""
        assert Text(value="hi").to_component() == {
            "metadata": {"type": "text"},
            "config": {"value": "hi"},
        }

    def test_title_and_accessor_go_in_metadata(self) -> None:
        """Verify title and accessor are metadata, not config."""
        component = Timestamp(timestamp=0, title=[Text(value="Age")], accessor="age")

        assert component.to_component() == {
            "metadata": {
                "type": "timestamp",
                "title": [{"metadata": {"type": "text"}, "config": {"value": "Age"}}],
                "accessor": "age",
            },
            "config": {"timestamp": 0},
        }

    def test_link_status_uses_aliases(self) -> None:
        """Verify nested components and enum values are serialized."""
        link = Link(value="hello", ref="/services/hello", status=NodeStatus.ERROR, status_detail=Text(value="x"))

        assert link.config() == {
            "value": "hello",
            "ref": "/services/hello",
            "status": 3,
            "statusDetail": {"metadata": {"type": "text"}, "config": {"value": "x"}},
        }

    def test_unset_optionals_are_omitted(self) -> None:
        """Verify None fields are left out of the config."""
        assert Link(value="a", ref="/a").config() == {"value": "a", "ref": "/a"}

    def test_table(self) -> None:
        """Verify columns, rows and the empty message serialize."""
        table = Table(
            columns=Table.columns_for("Name"),
            rows=[{"Name": Text(value="a")}],
            empty_content="Nothing here",
        )

        assert table.config() == {
            "columns": [{"name": "Name", "accessor": "Name"}],
            "rows": [{"Name": {"metadata": {"type": "text"}, "config": {"value": "a"}}}],
            "emptyContent": "Nothing here",
            "loading": False,
            "filters": {},
        }

    def test_grid_actions(self) -> None:
        """Verify grid actions carry their action path and confirmation."""
        actions = GridActions(
            actions=[
                GridAction(
                    name="Delete",
                    action_path="action.octant.dev/deleteObject",
                    payload={"name": "a"},
                    confirmation=Confirmation(title="t", body="b"),
                )
            ]
        )

        assert actions.to_component()["config"]["actions"] == [
            {
                "name": "Delete",
                "actionPath": "action.octant.dev/deleteObject",
                "payload": {"name": "a"},
                "confirmation": {"title": "t", "body": "b"},
                "type": "danger",
            }
        ]

    def test_editor_metadata_alias(self) -> None:
        """Verify the editor's object metadata is exposed as 'metadata'."""
        editor = Editor(value="---\n", object_metadata={"kind": "Service"})

        assert editor.config() == {"value": "---\n", "readOnly": False, "metadata": {"kind": "Service"}}


class TestContentResponse:
    """Tests for ContentResponse."""

    def test_to_dict_without_buttons(self) -> None:
        """Verify the button group is omitted when absent."""
        response = ContentResponse(title=[Text(value="t")], body=[Text(value="b")])

        assert response.to_dict() == {
            "title": [{"metadata": {"type": "text"}, "config": {"value": "t"}}],
            "body": [{"metadata": {"type": "text"}, "config": {"value": "b"}}],
        }

    def test_to_dict_with_buttons(self) -> None:
        """Verify the button group is serialized as a component."""
        response = ContentResponse(button_group=ButtonGroup(buttons=[Button(name="Go", payload={"a": 1})]))

        assert response.to_dict()["buttonGroup"] == {
            "metadata": {"type": "buttonGroup"},
            "config": {"buttons": [{"name": "Go", "payload": {"a": 1}}]},
        }

    def test_empty_response(self) -> None:
        """Verify an empty response has no title or body."""
        assert ContentResponse().to_dict() == {"title": [], "body": []}


class TestNavigation:
    """Tests for Navigation."""

    def test_children_are_nested_under_parent_path(self) -> None:
        """Verify child paths are built from the parent path."""
        nav = Navigation(title="Knative", path="knative", icon_name="cloud")
        nav.add("Services", "services")

        assert nav.to_dict() == {
            "title": "Knative",
            "path": "knative",
            "iconName": "cloud",
            "children": [{"title": "Services", "path": "knative/services", "children": []}],
        }
