"""Facebook login settings form.

The form is split into two pure steps so it can be used without any
particular rendering layer:

- :func:`describe_form` turns the current settings, request context and
  role list into a form description.
- :func:`validate_submission` turns a submitted key/value map into a
  validated settings record, or raises :class:`FormValidationError`.

:class:`FacebookAuthSettingsForm` wires both steps to the configuration
store and the role listing.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Mapping
from typing import Any

from social_auth_facebook.core.logging import get_logger
from social_auth_facebook.forms.exceptions import (
    FieldValidationError,
    FormValidationError,
)
from social_auth_facebook.schemas.settings import (
    FacebookAuthSettings,
    FormField,
    FormSection,
    SettingsFormResponse,
)
from social_auth_facebook.services.config_store import Config, ConfigStore
from social_auth_facebook.services.request_context import RequestContext
from social_auth_facebook.services.roles import BUILTIN_ROLES, RoleService

logger = get_logger(__name__)

FORM_ID = "social_auth_facebook_form"
CONFIG_NAME = "social_auth_facebook.settings"

OAUTH_CALLBACK_PATH = "/user/login/facebook/callback"
FACEBOOK_APPS_URL = "https://developers.facebook.com/apps"
FACEBOOK_CHANGELOG_URL = "https://developers.facebook.com/docs/apps/changelog"

GRAPH_VERSION_PATTERN = re.compile(r"^[2-9]\.[0-9]{1,2}$")

SETTINGS_KEYS = list(FacebookAuthSettings.model_fields)

# Editable text fields that must not be empty, with their titles
REQUIRED_FIELDS = {
    "app_id": "Application ID",
    "app_secret": "App Secret",
    "graph_version": "Facebook Graph API version",
    "post_login_path": "Post login path",
}

INVALID_VERSION_MESSAGE = (
    "Invalid API version. The syntax for API version is for example 2.8"
)
ILLEGAL_CHOICE_MESSAGE = "An illegal choice has been detected."
NO_ROLES_MESSAGE = "No roles found."
SAVED_MESSAGE = "The configuration options have been saved."

_TRUE_STRINGS = {"1", "true", "on", "yes"}


def is_valid_graph_version(value: str) -> bool:
    """Check a Graph API version string such as ``2.8``."""
    return GRAPH_VERSION_PATTERN.fullmatch(value) is not None


def oauth_redirect_url(context: RequestContext) -> str:
    """The URL Facebook redirects back to after authorization."""
    return context.base_url + OAUTH_CALLBACK_PATH


def selectable_roles(roles: Mapping[str, str]) -> dict[str, str]:
    """Roles that may be excluded from Facebook login, with escaped labels."""
    return {
        role_id: html.escape(label)
        for role_id, label in roles.items()
        if role_id not in BUILTIN_ROLES
    }


def describe_form(
    record: FacebookAuthSettings,
    context: RequestContext,
    roles: Mapping[str, str],
) -> SettingsFormResponse:
    """Build the settings form description.

    Args:
        record: Current settings (defaults when nothing was saved yet).
        context: Current request context, used for the read-only values
            that are copied into the Facebook App dashboard.
        roles: All roles on the site (role id -> label).

    Returns:
        The form description with its two sections.
    """
    fb_settings = FormSection(
        key="fb_settings",
        title="Facebook App settings",
        description=(
            f"You need to first create a Facebook App at {FACEBOOK_APPS_URL}"
        ),
        fields=[
            FormField(
                name="app_id",
                type="textfield",
                title=REQUIRED_FIELDS["app_id"],
                required=True,
                default_value=record.app_id,
                description=(
                    "Copy the App ID of your Facebook App here. This value "
                    "can be found from your App Dashboard."
                ),
            ),
            FormField(
                name="app_secret",
                type="textfield",
                title=REQUIRED_FIELDS["app_secret"],
                required=True,
                default_value=record.app_secret,
                description=(
                    "Copy the App Secret of your Facebook App here. This "
                    "value can be found from your App Dashboard."
                ),
            ),
            FormField(
                name="graph_version",
                type="textfield",
                title=REQUIRED_FIELDS["graph_version"],
                required=True,
                default_value=record.graph_version,
                description=(
                    "Copy the API Version of your Facebook App here. This "
                    "value can be found from your App Dashboard. More "
                    "information on API versions can be found at "
                    f"{FACEBOOK_CHANGELOG_URL}"
                ),
            ),
            FormField(
                name="oauth_redirect_url",
                type="textfield",
                title="Valid OAuth redirect URIs",
                disabled=True,
                default_value=oauth_redirect_url(context),
                description=(
                    "Copy this value to Valid OAuth redirect URIs field of "
                    "your Facebook App settings."
                ),
            ),
            FormField(
                name="app_domains",
                type="textfield",
                title="App Domains",
                disabled=True,
                default_value=context.get_host(),
                description=(
                    "Copy this value to App Domains field of your Facebook "
                    "App settings."
                ),
            ),
            FormField(
                name="site_url",
                type="textfield",
                title="Site URL",
                disabled=True,
                default_value=context.base_url,
                description=(
                    "Copy this value to Site URL field of your Facebook App "
                    "settings."
                ),
            ),
        ],
    )

    options = selectable_roles(roles)
    disabled_roles = FormField(
        name="disabled_roles",
        type="checkboxes",
        title="Disable FB login for the following roles",
        options=options,
        default_value=list(record.disabled_roles),
    )
    if not options:
        disabled_roles.description = NO_ROLES_MESSAGE

    module_settings = FormSection(
        key="module_settings",
        title="Simple FB Connect configurations",
        description=(
            "These settings allow you to configure how Simple FB Connect "
            "module behaves on your site"
        ),
        fields=[
            FormField(
                name="post_login_path",
                type="textfield",
                title=REQUIRED_FIELDS["post_login_path"],
                required=True,
                default_value=record.post_login_path,
                description=(
                    "Path where the user should be redirected after "
                    "successful login. Use <front> to redirect user to your "
                    "front page."
                ),
            ),
            FormField(
                name="redirect_user_form",
                type="checkbox",
                title="Redirect new users to user form",
                default_value=record.redirect_user_form,
                description=(
                    "If you check this, new users are redirected to the user "
                    "form after the user is created. This is useful if you "
                    "want to encourage users to fill in additional user "
                    "fields."
                ),
            ),
            FormField(
                name="disable_admin_login",
                type="checkbox",
                title="Disable FB login for administrator",
                default_value=record.disable_admin_login,
                description=(
                    "Disabling FB login for administrator (user 1) can help "
                    "protect your site if a security vulnerability is ever "
                    "discovered in Facebook PHP SDK or this module."
                ),
            ),
            disabled_roles,
        ],
    )

    return SettingsFormResponse(
        form_id=FORM_ID,
        config_names=[CONFIG_NAME],
        sections=[fb_settings, module_settings],
    )


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _to_role_ids(value: Any) -> list[str] | None:
    """Read checkbox values as a list of role ids.

    Accepts a list of ids or a mapping of id -> id / 0 where falsy values
    mean unchecked. Returns None for anything else.
    """
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [
            str(key)
            for key, checked in value.items()
            if checked not in (None, 0, "0", False, "")
        ]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value if item not in (None, "")]
    return None


def validate_submission(
    values: Mapping[str, Any],
    allowed_roles: Iterable[str] | None = None,
) -> FacebookAuthSettings:
    """Validate a submitted settings map.

    Required fields are checked first; the Graph API version is only
    checked once every required field has a value. Text values are saved
    exactly as submitted, surrounding whitespace included.

    Args:
        values: Submitted values keyed by field name. Unknown keys,
            including the read-only display fields, are ignored.
        allowed_roles: Role ids that may be selected in
            ``disabled_roles``. No check is made when omitted.

    Returns:
        The validated settings record.

    Raises:
        FormValidationError: If any field is invalid.
    """
    errors: list[FieldValidationError] = []

    text: dict[str, str] = {}
    for key, title in REQUIRED_FIELDS.items():
        value = values.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            errors.append(FieldValidationError(key, f"{title} must be text."))
            continue
        if not value.strip():
            errors.append(FieldValidationError(key, f"{title} field is required."))
        text[key] = value

    role_ids = _to_role_ids(values.get("disabled_roles"))
    if role_ids is None:
        errors.append(FieldValidationError("disabled_roles", ILLEGAL_CHOICE_MESSAGE))
        role_ids = []
    elif allowed_roles is not None:
        allowed = set(allowed_roles)
        if any(role_id not in allowed for role_id in role_ids):
            errors.append(
                FieldValidationError("disabled_roles", ILLEGAL_CHOICE_MESSAGE)
            )

    if errors:
        raise FormValidationError(errors)

    if not is_valid_graph_version(text["graph_version"]):
        raise FormValidationError(
            [FieldValidationError("graph_version", INVALID_VERSION_MESSAGE)]
        )

    return FacebookAuthSettings(
        app_id=text["app_id"],
        app_secret=text["app_secret"],
        graph_version=text["graph_version"],
        post_login_path=text["post_login_path"],
        redirect_user_form=_to_bool(values.get("redirect_user_form")),
        disable_admin_login=_to_bool(values.get("disable_admin_login")),
        disabled_roles=role_ids,
    )


def record_from_config(config: Config) -> FacebookAuthSettings:
    """Read the settings record from a config object, filling in defaults."""
    data = {
        key: config.get(key)
        for key in SETTINGS_KEYS
        if config.get(key) is not None
    }
    return FacebookAuthSettings.model_validate(data)


class FacebookAuthSettingsForm:
    """Configures the Facebook social login settings."""

    def __init__(
        self,
        config_store: ConfigStore,
        request_context: RequestContext,
        role_provider: RoleService,
    ):
        self.config_store = config_store
        self.request_context = request_context
        self.role_provider = role_provider

    @property
    def form_id(self) -> str:
        return FORM_ID

    def editable_config_names(self) -> list[str]:
        return [CONFIG_NAME]

    async def load_settings(self) -> FacebookAuthSettings:
        """Current settings, or defaults when none were saved."""
        config = await self.config_store.get_editable(CONFIG_NAME)
        return record_from_config(config)

    async def build_form(self) -> SettingsFormResponse:
        record = await self.load_settings()
        roles = await self.role_provider.list_roles()
        return describe_form(record, self.request_context, roles)

    async def validate_form(self, values: Mapping[str, Any]) -> FacebookAuthSettings:
        """Validate a submission against the roles currently defined.

        Raises:
            FormValidationError: If any field is invalid.
        """
        roles = await self.role_provider.list_roles()
        try:
            return validate_submission(values, allowed_roles=selectable_roles(roles))
        except FormValidationError as e:
            logger.info(
                "facebook_settings_validation_failed",
                fields=sorted(e.by_field()),
            )
            raise

    async def submit_form(self, values: Mapping[str, Any]) -> FacebookAuthSettings:
        """Validate a submission and save it.

        Every field is written to the config object before a single save,
        so a failed validation leaves the stored settings untouched.

        Raises:
            FormValidationError: If any field is invalid.
            StoreWriteError: If the settings cannot be persisted.
        """
        record = await self.validate_form(values)

        config = await self.config_store.get_editable(CONFIG_NAME)
        (
            config.set("app_id", record.app_id)
            .set("app_secret", record.app_secret)
            .set("graph_version", record.graph_version)
            .set("post_login_path", record.post_login_path)
            .set("redirect_user_form", record.redirect_user_form)
            .set("disable_admin_login", record.disable_admin_login)
            .set("disabled_roles", record.disabled_roles)
        )
        await config.save()

        logger.info(
            "facebook_settings_saved",
            graph_version=record.graph_version,
            disabled_roles=record.disabled_roles,
        )
        return record
