"""Tests for the Facebook login settings form."""

from __future__ import annotations

import pytest

from social_auth_facebook.forms import (
    FormValidationError,
    describe_form,
    validate_submission,
)
from social_auth_facebook.forms.facebook_settings import (
    CONFIG_NAME,
    FORM_ID,
    ILLEGAL_CHOICE_MESSAGE,
    INVALID_VERSION_MESSAGE,
    NO_ROLES_MESSAGE,
    is_valid_graph_version,
    selectable_roles,
)
from social_auth_facebook.schemas.settings import FacebookAuthSettings
from social_auth_facebook.services.request_context import RequestContext


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def context() -> RequestContext:
    return RequestContext(host="example.com", base_url="https://example.com")


@pytest.fixture
def valid_values() -> dict:
    return {
        "app_id": "1234567890",
        "app_secret": "s3cr3t",
        "graph_version": "2.8",
        "post_login_path": "<front>",
        "redirect_user_form": True,
        "disable_admin_login": False,
        "disabled_roles": ["editor"],
    }


SITE_ROLES = {
    "anonymous": "Anonymous user",
    "authenticated": "Authenticated user",
    "editor": "Content <editor>",
    "administrator": "Administrator",
}


# =============================================================================
# Graph API version
# =============================================================================


class TestGraphVersion:
    """Tests for the Graph API version format."""

    @pytest.mark.parametrize("value", ["2.8", "2.88", "9.0", "3.10"])
    def test_accepts(self, value):
        assert is_valid_graph_version(value)

    @pytest.mark.parametrize(
        "value", ["v2.8", "1.5", "2.", "2", "10.0", "2.888", "2,8", " 2.8", ""]
    )
    def test_rejects(self, value):
        assert not is_valid_graph_version(value)


# =============================================================================
# Validation
# =============================================================================


class TestValidateSubmission:
    """Tests for validate_submission."""

    def test_valid_submission(self, valid_values):
        record = validate_submission(valid_values)

        assert record == FacebookAuthSettings(**valid_values)

    def test_invalid_version_reports_one_error(self, valid_values):
        valid_values["graph_version"] = "v2.8"

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert exc_info.value.by_field() == {
            "graph_version": [INVALID_VERSION_MESSAGE]
        }

    def test_required_fields(self, valid_values):
        valid_values["app_id"] = ""
        valid_values["app_secret"] = "   "
        del valid_values["post_login_path"]

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        errors = exc_info.value.by_field()
        assert set(errors) == {"app_id", "app_secret", "post_login_path"}
        assert errors["app_id"] == ["Application ID field is required."]

    def test_empty_version_is_required_error_only(self, valid_values):
        valid_values["graph_version"] = ""

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert exc_info.value.by_field() == {
            "graph_version": ["Facebook Graph API version field is required."]
        }

    @pytest.mark.parametrize("version", [" 2.8", "2.8 ", "2.8\n", " 2.8 "])
    def test_padded_version_rejected(self, valid_values, version):
        valid_values["graph_version"] = version

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert exc_info.value.by_field() == {
            "graph_version": [INVALID_VERSION_MESSAGE]
        }

    def test_text_values_kept_as_submitted(self, valid_values):
        valid_values["app_id"] = "  abc  "
        valid_values["post_login_path"] = " node/1"

        record = validate_submission(valid_values)

        assert record.app_id == "  abc  "
        assert record.post_login_path == " node/1"

    def test_whitespace_only_is_required_error(self, valid_values):
        valid_values["app_secret"] = " \t "

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert exc_info.value.by_field() == {
            "app_secret": ["App Secret field is required."]
        }

    def test_numeric_version_rejected(self, valid_values):
        valid_values["graph_version"] = 2.10

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert exc_info.value.by_field() == {
            "graph_version": ["Facebook Graph API version must be text."]
        }

    def test_non_string_text_field_rejected(self, valid_values):
        valid_values["app_id"] = {"x": 1}

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert exc_info.value.by_field() == {
            "app_id": ["Application ID must be text."]
        }

    def test_display_fields_are_ignored(self, valid_values):
        valid_values["oauth_redirect_url"] = "https://evil.example/callback"
        valid_values["site_url"] = "https://evil.example"

        record = validate_submission(valid_values)

        assert "oauth_redirect_url" not in record.model_dump()
        assert "site_url" not in record.model_dump()

    def test_checkbox_values(self, valid_values):
        valid_values["redirect_user_form"] = "0"
        valid_values["disable_admin_login"] = "on"

        record = validate_submission(valid_values)

        assert record.redirect_user_form is False
        assert record.disable_admin_login is True

    def test_missing_checkboxes_default_to_false(self, valid_values):
        del valid_values["redirect_user_form"]
        del valid_values["disable_admin_login"]

        record = validate_submission(valid_values)

        assert record.redirect_user_form is False
        assert record.disable_admin_login is False

    def test_disabled_roles_mapping(self, valid_values):
        valid_values["disabled_roles"] = {
            "editor": "editor",
            "administrator": 0,
            "moderator": "moderator",
        }

        record = validate_submission(valid_values)

        assert record.disabled_roles == ["editor", "moderator"]

    def test_disabled_roles_absent_and_empty_match(self, valid_values):
        del valid_values["disabled_roles"]
        absent = validate_submission(valid_values)

        valid_values["disabled_roles"] = []
        empty = validate_submission(valid_values)

        assert absent.disabled_roles == empty.disabled_roles == []

    def test_disabled_roles_deduplicated(self, valid_values):
        valid_values["disabled_roles"] = ["editor", "editor", "administrator"]

        record = validate_submission(valid_values)

        assert record.disabled_roles == ["administrator", "editor"]

    def test_disabled_roles_illegal_choice(self, valid_values):
        valid_values["disabled_roles"] = ["editor", "anonymous"]

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(
                valid_values, allowed_roles=selectable_roles(SITE_ROLES)
            )

        assert exc_info.value.by_field() == {
            "disabled_roles": [ILLEGAL_CHOICE_MESSAGE]
        }

    def test_disabled_roles_wrong_type(self, valid_values):
        valid_values["disabled_roles"] = 42

        with pytest.raises(FormValidationError) as exc_info:
            validate_submission(valid_values)

        assert "disabled_roles" in exc_info.value.by_field()


# =============================================================================
# Form description
# =============================================================================


class TestDescribeForm:
    """Tests for describe_form."""

    def test_sections(self, context):
        form = describe_form(FacebookAuthSettings(), context, SITE_ROLES)

        assert form.form_id == FORM_ID
        assert form.config_names == [CONFIG_NAME]
        assert [section.key for section in form.sections] == [
            "fb_settings",
            "module_settings",
        ]
        assert [f.name for f in form.sections[0].fields] == [
            "app_id",
            "app_secret",
            "graph_version",
            "oauth_redirect_url",
            "app_domains",
            "site_url",
        ]
        assert [f.name for f in form.sections[1].fields] == [
            "post_login_path",
            "redirect_user_form",
            "disable_admin_login",
            "disabled_roles",
        ]

    def test_required_and_read_only_fields(self, context):
        form = describe_form(FacebookAuthSettings(), context, SITE_ROLES)

        for name in ("app_id", "app_secret", "graph_version", "post_login_path"):
            assert form.field(name).required is True
        for name in ("oauth_redirect_url", "app_domains", "site_url"):
            assert form.field(name).disabled is True
        assert form.field("redirect_user_form").type == "checkbox"

    def test_current_values(self, context):
        record = FacebookAuthSettings(
            app_id="abc",
            app_secret="xyz",
            graph_version="2.12",
            post_login_path="node/1",
            disable_admin_login=True,
            disabled_roles=["editor"],
        )

        form = describe_form(record, context, SITE_ROLES)

        assert form.field("app_id").default_value == "abc"
        assert form.field("graph_version").default_value == "2.12"
        assert form.field("post_login_path").default_value == "node/1"
        assert form.field("disable_admin_login").default_value is True
        assert form.field("redirect_user_form").default_value is False
        assert form.field("disabled_roles").default_value == ["editor"]

    def test_computed_fields_follow_context(self, context):
        form = describe_form(FacebookAuthSettings(), context, SITE_ROLES)

        assert (
            form.field("oauth_redirect_url").default_value
            == "https://example.com/user/login/facebook/callback"
        )
        assert form.field("app_domains").default_value == "example.com"
        assert form.field("site_url").default_value == "https://example.com"

        other = RequestContext.from_base_url("http://localhost:8080/site/")
        form = describe_form(FacebookAuthSettings(), other, SITE_ROLES)

        assert (
            form.field("oauth_redirect_url").default_value
            == "http://localhost:8080/site/user/login/facebook/callback"
        )
        assert form.field("app_domains").default_value == "localhost"

    def test_builtin_roles_excluded(self, context):
        form = describe_form(FacebookAuthSettings(), context, SITE_ROLES)
        options = form.field("disabled_roles").options

        assert "anonymous" not in options
        assert "authenticated" not in options
        assert list(options) == ["editor", "administrator"]
        assert form.field("disabled_roles").description is None

    def test_role_labels_escaped(self, context):
        form = describe_form(FacebookAuthSettings(), context, SITE_ROLES)

        assert form.field("disabled_roles").options["editor"] == (
            "Content &lt;editor&gt;"
        )

    def test_no_roles_found(self, context):
        form = describe_form(FacebookAuthSettings(), context, {})
        field = form.field("disabled_roles")

        assert field.description == NO_ROLES_MESSAGE
        assert field.options == {}

    def test_only_builtin_roles(self, context):
        roles = {
            "anonymous": "Anonymous user",
            "authenticated": "Authenticated user",
        }

        form = describe_form(FacebookAuthSettings(), context, roles)

        assert form.field("disabled_roles").description == NO_ROLES_MESSAGE

    def test_unknown_field(self, context):
        form = describe_form(FacebookAuthSettings(), context, SITE_ROLES)

        with pytest.raises(KeyError):
            form.field("missing")
