"""Pydantic schemas for the Facebook login settings API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class FacebookAuthSettings(BaseModel):
    """The persisted Facebook login settings record."""

    app_id: str = Field(default="", description="Facebook App ID")
    app_secret: str = Field(default="", description="Facebook App Secret")
    graph_version: str = Field(
        default="",
        description="Facebook Graph API version without the leading 'v', e.g. 2.8",
    )
    post_login_path: str = Field(
        default="user",
        description="Path to redirect to after login, or <front> for the front page",
    )
    redirect_user_form: bool = Field(
        default=False,
        description="Redirect new users to the user form after account creation",
    )
    disable_admin_login: bool = Field(
        default=False,
        description="Reject Facebook login for the site administrator account",
    )
    disabled_roles: list[str] = Field(
        default_factory=list,
        description="Role ids for which Facebook login is rejected",
    )

    @field_validator("disabled_roles", mode="before")
    @classmethod
    def empty_when_none(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("disabled_roles")
    @classmethod
    def normalize_roles(cls, value: list[str]) -> list[str]:
        return sorted(set(value))


class FormField(BaseModel):
    """Description of a single form element."""

    name: str
    type: Literal["textfield", "checkbox", "checkboxes"]
    title: str
    description: str | None = None
    required: bool = False
    disabled: bool = False
    default_value: Any = None
    options: dict[str, str] | None = Field(
        default=None,
        description="Selectable options (value -> label) for checkboxes",
    )


class FormSection(BaseModel):
    """A collapsible group of form elements."""

    key: str
    title: str
    description: str | None = None
    open: bool = True
    fields: list[FormField]

    def field(self, name: str) -> FormField:
        """Look up a field in this section by name."""
        for form_field in self.fields:
            if form_field.name == name:
                return form_field
        raise KeyError(name)


class SettingsFormResponse(BaseModel):
    """Form description for rendering the settings page."""

    form_id: str
    config_names: list[str]
    sections: list[FormSection]

    def field(self, name: str) -> FormField:
        """Look up a field in any section by name."""
        for section in self.sections:
            try:
                return section.field(name)
            except KeyError:
                continue
        raise KeyError(name)


class SettingsSubmitResponse(BaseModel):
    """Response after saving the settings."""

    settings: FacebookAuthSettings
    message: str = Field(default="The configuration options have been saved.")


class SettingsErrorResponse(BaseModel):
    """Body returned when a submission fails validation."""

    message: str
    errors: dict[str, list[str]] = Field(
        description="Error messages keyed by field name"
    )
