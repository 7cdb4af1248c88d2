"""Requests the dashboard host sends to a plugin."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentRequest(BaseModel):
    """Request to render the page at a content path."""

    model_config = ConfigDict(populate_by_name=True)

    content_path: str = Field("", alias="contentPath", description="Path relative to the plugin")
    client_id: str = Field("", alias="clientID", description="Dashboard client asking for the page")


class ActionRequest(BaseModel):
    """Request to perform a named action."""

    model_config = ConfigDict(populate_by_name=True)

    action_name: str = Field(..., alias="actionName")
    payload: dict[str, Any] = Field(default_factory=dict)
