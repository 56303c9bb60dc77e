"""
Validator tree and orchestrator.

FieldSet holds an ordered list of entries (field bindings, nested
FieldSets and deferred errors) and evaluates them in insertion order,
stopping at the first failure. Validator is the top-level entry object
that owns a root FieldSet and the registry used for rule strings.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Union

from .checks import Check, ValidationResult
from .errors import ValidationError
from .parser import parse_rule


@dataclass(frozen=True)
class Field:
    """A (name, value, check) binding ready for evaluation."""
    name: str
    value: Any
    check: Check


@dataclass(frozen=True)
class DeferredError:
    """
    An error found while building the tree, reported at evaluation time.

    Lets construction always succeed: record and rule-source problems go
    through the same ``validate()`` call as ordinary field failures.
    """
    error: ValidationError


Entry = Union[Field, 'FieldSet', DeferredError]


class FieldSet:
    """
    An ordered, composable group of entries.

    Usage:
        fields = FieldSet("signup")
        fields.add(Field("age", 21, gt(18)), Field("email", addr, email()))
        fields.add(other_field_set)
        result = fields.validate()
    """

    def __init__(self, name: str = 'default'):
        self.name = name
        self.entries: List[Entry] = []

    def add(self, entry: Entry, *entries: Entry) -> 'FieldSet':
        for item in (entry,) + entries:
            if not isinstance(item, (Field, FieldSet, DeferredError)):
                raise TypeError(
                    f'cannot add {type(item).__name__} to a FieldSet; '
                    'expected Field, FieldSet or DeferredError'
                )
            self.entries.append(item)
        return self

    def validate(self) -> ValidationResult:
        """Evaluate entries in order; return the first failure or success."""
        for entry in self.entries:
            if isinstance(entry, Field):
                result = entry.check.evaluate(entry.name, entry.value)
            elif isinstance(entry, FieldSet):
                result = entry.validate()
            else:
                result = ValidationResult.fail(entry.error)
            if not result.passed:
                return result
        return ValidationResult.ok()

    def __len__(self) -> int:
        return len(self.entries)


class Validator:
    """
    Validate field values against checks and rule strings.

    Usage:
        from fieldgate import Validator, gt

        v = Validator("signup")
        v.add_field("username", "hello1", "alphanum | minlen(5) | maxlen(10)")
        v.add_field("age", 21, gt(18))

        result = v.validate()
        if not result:
            print(result.error)

    Args:
        name: Name used in logs.
        registry: CheckRegistry for rule strings. Defaults to the
            process-wide default registry.
    """

    def __init__(self, name: str = 'validation', registry=None):
        self.name = name
        self.registry = registry
        self.logger = logging.getLogger(self.__class__.__name__)
        self._fields = FieldSet(name)

    def add(self, entry: Entry, *entries: Entry) -> 'Validator':
        """Add one or more entries in call order."""
        self._fields.add(entry, *entries)
        return self

    def add_field(self, name: str, value: Any, rule: Union[str, Check]) -> 'Validator':
        """
        Bind a field to a rule string or a check.

        A rule string is parsed with this validator's registry and
        contributes one binding per resolved clause.
        """
        if isinstance(rule, Check):
            self._fields.add(Field(name, value, rule))
            return self
        for check in parse_rule(rule, self.registry):
            self._fields.add(Field(name, value, check))
        return self

    def add_fields(self, fields: List[Entry]) -> 'Validator':
        """Add multiple entries at once."""
        for entry in fields:
            self._fields.add(entry)
        return self

    @property
    def field_count(self) -> int:
        return len(self._fields)

    def validate(self) -> ValidationResult:
        """
        Run every entry in registration order.

        Returns the first failure, or a passing result if all entries pass
        (including when nothing was added).
        """
        result = self._fields.validate()
        if not result.passed:
            self.logger.debug("%s: %s", self.name, result.error)
        return result
