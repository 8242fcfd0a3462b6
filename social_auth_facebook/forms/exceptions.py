"""Settings form exceptions."""

from __future__ import annotations


class SettingsFormError(Exception):
    """Base exception for settings form errors."""

    pass


class FieldValidationError(SettingsFormError):
    """A submitted value is invalid for one form field."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class FormValidationError(SettingsFormError):
    """A submission failed validation.

    Attributes:
        errors: Field-level errors in the order they were found.
    """

    def __init__(self, errors: list[FieldValidationError]):
        self.errors = errors
        super().__init__(
            "Form validation failed: "
            + ", ".join(error.field for error in errors)
        )

    def by_field(self) -> dict[str, list[str]]:
        """Group error messages by field name."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped
