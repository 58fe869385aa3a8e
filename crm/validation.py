"""
Client-side form validation results.

Forms only check required fields; everything else is validated by the
remote service. These small classes collect the per-field messages so a
dialog can show all of them at once.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FieldIssue:
    """One missing or invalid form field.

    Attributes:
        field: Payload key of the field, e.g. ``"scheduled_date"``
        message: Text shown to the user
    """

    field: str
    message: str


@dataclass
class ValidationResult:
    """Issues found on one form, in the order they were found."""

    errors: List[FieldIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.append(FieldIssue(field_name, message))

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.errors]

    @property
    def first_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


__all__ = ["FieldIssue", "ValidationResult"]
