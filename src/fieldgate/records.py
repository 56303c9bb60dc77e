"""
Record-driven validation.

Records are dataclass instances. A field carries its rule expression in
its metadata under ``RULES_KEY``; ``rule_field`` is a shorthand for
declaring one:

    @dataclass
    class Signup:
        username: str = rule_field("alphanum | minlen(5) | maxlen(10)")
        age: int = rule_field("gte(18)", default=0)

Only public fields (names not starting with an underscore) are examined.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Tuple

import pandas as pd

from .checks import ValidationResult
from .errors import InvalidSourceError
from .parser import parse_rule
from .validator import DeferredError, Field, FieldSet

RULES_KEY = 'rules'


@dataclass(frozen=True)
class RecordField:
    """One public field of a record: name, current value and rule text."""
    name: str
    value: Any
    rules: str = ''


def rule_field(rules: str, **kwargs) -> Any:
    """``dataclasses.field`` with ``rules`` stored in the field metadata."""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[RULES_KEY] = rules
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(source: Any) -> bool:
    return dataclasses.is_dataclass(source) and not isinstance(source, type)


def record_fields(source: Any) -> List[RecordField]:
    """
    Enumerate the public fields of a dataclass instance.

    Raises:
        InvalidSourceError: If ``source`` is not a dataclass instance.
    """
    if not is_record(source):
        raise InvalidSourceError(
            f'source must be a dataclass instance, got {type(source).__name__}'
        )
    return [
        RecordField(
            name=f.name,
            value=getattr(source, f.name),
            rules=str(f.metadata.get(RULES_KEY, '') or ''),
        )
        for f in dataclasses.fields(source)
        if not f.name.startswith('_')
    ]


def record_values(source: Any) -> List[Tuple[str, Any]]:
    """
    (name, value) pairs for a dataclass instance, mapping or Series row.

    Raises:
        InvalidSourceError: For any other kind of value.
    """
    if is_record(source):
        return [(f.name, f.value) for f in record_fields(source)]
    if isinstance(source, pd.Series):
        return [(str(k), v) for k, v in source.items()]
    if isinstance(source, Mapping):
        return [(str(k), v) for k, v in source.items()]
    raise InvalidSourceError(
        f'source must be a dataclass instance, mapping or Series, got {type(source).__name__}'
    )


def from_record(source: Any, registry=None) -> FieldSet:
    """
    Build a FieldSet from a record's rule annotations.

    Never raises: an invalid source becomes a DeferredError that
    ``validate()`` reports before any field is examined.
    """
    fields = FieldSet(type(source).__name__)
    try:
        described = record_fields(source)
    except InvalidSourceError as exc:
        return fields.add(DeferredError(exc))

    for record_field in described:
        for check in parse_rule(record_field.rules, registry):
            fields.add(Field(record_field.name, record_field.value, check))
    return fields


def validate_record(source: Any, registry=None) -> ValidationResult:
    """Validate a record against its field rules; first failure wins."""
    return from_record(source, registry).validate()
