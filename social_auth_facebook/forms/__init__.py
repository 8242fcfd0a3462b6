"""Administrative settings forms."""

from social_auth_facebook.forms.exceptions import (
    FieldValidationError,
    FormValidationError,
    SettingsFormError,
)
from social_auth_facebook.forms.facebook_settings import (
    CONFIG_NAME,
    FORM_ID,
    FacebookAuthSettingsForm,
    describe_form,
    validate_submission,
)

__all__ = [
    "CONFIG_NAME",
    "FORM_ID",
    "FacebookAuthSettingsForm",
    "FieldValidationError",
    "FormValidationError",
    "SettingsFormError",
    "describe_form",
    "validate_submission",
]
