"""
Error kinds reported by validation.

Validation never raises these itself. They are carried as values inside
a ValidationResult and only raised when the caller asks for it with
``ValidationResult.raise_for_error()``.
"""

from typing import Optional

__all__ = [
    'ValidationError',
    'FieldValidationError',
    'ArgumentParseError',
    'InvalidSourceError',
    'MalformedRuleSourceError',
]


class ValidationError(Exception):
    """Base error for all validation failures."""

    kind = 'validation'

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        return self.message


class FieldValidationError(ValidationError):
    """A field's value did not satisfy a check."""

    kind = 'field'

    def __init__(self, field: str):
        super().__init__(f'{field} did not pass validation', field=field)


class ArgumentParseError(ValidationError):
    """A rule clause carried an argument its constructor could not parse."""

    kind = 'argument'

    def __init__(self, field: str, detail: str):
        super().__init__(
            f'rule for {field} received parsing error - {detail}',
            field=field,
        )
        self.detail = detail


class InvalidSourceError(ValidationError):
    """The value submitted for record validation is not a record."""

    kind = 'invalid_source'


class MalformedRuleSourceError(ValidationError):
    """An encoded rule string could not be decoded."""

    kind = 'malformed_rule_source'
