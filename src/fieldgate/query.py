"""
Encoded-rule validation.

Rules can arrive as a URL-encoded query string whose keys name fields
and whose values are rule expressions:

    Url=url&Username=alphanum|minlen(5)|maxlen(10)

A key may repeat; each of its values is parsed on its own and all the
resulting checks apply. Fields not named in the query are not checked.
"""

import re
from typing import Any, List, Tuple
from urllib.parse import parse_qsl

from .checks import ValidationResult
from .errors import InvalidSourceError, MalformedRuleSourceError
from .parser import parse_rule
from .records import record_values
from .validator import DeferredError, Field, FieldSet

_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def decode_rule_source(query: str) -> List[Tuple[str, str]]:
    """
    Decode ``query`` into (field, rule) pairs, in query order.

    Raises:
        MalformedRuleSourceError: On invalid percent escapes or ``;``
            separators.
    """
    if not isinstance(query, str):
        raise MalformedRuleSourceError(
            f'rule source must be a string, got {type(query).__name__}'
        )
    if ';' in query:
        raise MalformedRuleSourceError('invalid semicolon separator in rule source')
    bad = _BAD_ESCAPE.search(query)
    if bad:
        raise MalformedRuleSourceError(
            f'invalid URL escape {query[bad.start():bad.start() + 3]!r} in rule source'
        )
    return [(key, value) for key, value in parse_qsl(query, keep_blank_values=True) if key]


def from_query(source: Any, query: str, registry=None) -> FieldSet:
    """
    Build a FieldSet for the fields of ``source`` named in ``query``.

    Never raises: a malformed query or an invalid source becomes a
    DeferredError reported by ``validate()``.
    """
    fields = FieldSet(type(source).__name__)
    try:
        pairs = decode_rule_source(query)
        values = record_values(source)
    except (MalformedRuleSourceError, InvalidSourceError) as exc:
        return fields.add(DeferredError(exc))

    for name, value in values:
        for key, rule in pairs:
            if key != name:
                continue
            for check in parse_rule(rule, registry):
                fields.add(Field(name, value, check))
    return fields


def validate_query(source: Any, query: str, registry=None) -> ValidationResult:
    """Validate ``source`` against the rules encoded in ``query``."""
    return from_query(source, query, registry).validate()
