"""
Check definitions.

A check is a named, callable predicate over a field's name and value.
Calling it returns a ValidationResult: pass, or fail with an error that
names the field. Checks are stateless once built and close over whatever
configuration they were constructed with (threshold, pattern, allowed
values).

The constructors in this module build checks programmatically. Rule
strings reach the same constructors through the token table in
``fieldgate.builtins``.
"""

import operator
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from .errors import ArgumentParseError, FieldValidationError, ValidationError
from .values import (
    elements,
    is_sequence,
    is_zero,
    length_of,
    numeric_form,
    string_form,
    values_equal,
)

REGEX_EMAIL = r'^([a-zA-Z0-9_\.+-]+)@([\da-zA-Z\.-]+)\.([a-zA-Z\.]{2,6})$'
REGEX_HEX_COLOR = r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$'
REGEX_URL = r'^(https?:\/\/)?([\da-z\.-]+)\.([a-z\.]{2,6})([\/\w \.-]*)\/?$'
REGEX_IP = (
    r'^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$'
)
REGEX_NUM = r'^[1-9]\d*(\.\d+)?$'
REGEX_ALPHA = r'^[a-zA-Z]*$'


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of evaluating a check, a binding or a whole tree."""
    passed: bool
    error: Optional[ValidationError] = None

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(passed=True)

    @classmethod
    def fail(cls, error: ValidationError) -> 'ValidationResult':
        return cls(passed=False, error=error)

    @property
    def field(self) -> Optional[str]:
        return self.error.field if self.error is not None else None

    @property
    def severity(self) -> str:
        return 'PASS' if self.passed else 'FAIL'

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        return self.passed


class Check(ABC):
    """Base class for all checks."""

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def evaluate(self, field: str, value: Any) -> ValidationResult:
        """Run this check against one field value."""
        ...

    def __call__(self, field: str, value: Any) -> ValidationResult:
        return self.evaluate(field, value)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name}>'


class PredicateCheck(Check):
    """
    Pass when ``predicate(value)`` is true.

    Args:
        predicate: Function of the field value returning a bool.
        name: Name used for reporting, e.g. ``gt(18)``.
    """

    def __init__(self, predicate: Callable[[Any], bool], name: str):
        super().__init__(name)
        self.predicate = predicate

    def evaluate(self, field: str, value: Any) -> ValidationResult:
        if self.predicate(value):
            return ValidationResult.ok()
        return ValidationResult.fail(FieldValidationError(field))


class ChainCheck(Check):
    """
    Run several checks in order and stop at the first failure.

    This is what a ``|``-chained rule expression evaluates to: every
    clause must pass.
    """

    def __init__(self, checks: Sequence[Check], name: Optional[str] = None):
        super().__init__(name or ' | '.join(c.name for c in checks))
        self.checks = list(checks)

    def evaluate(self, field: str, value: Any) -> ValidationResult:
        for check in self.checks:
            result = check.evaluate(field, value)
            if not result.passed:
                return result
        return ValidationResult.ok()


class EachCheck(Check):
    """
    The value must be a sequence and every element must pass every check.

    Args:
        checks: Checks applied to each element, in order.
    """

    def __init__(self, checks: Sequence[Check], name: Optional[str] = None):
        inner = ' | '.join(c.name for c in checks)
        super().__init__(name or f'each({inner})')
        self.checks = list(checks)

    def evaluate(self, field: str, value: Any) -> ValidationResult:
        if not is_sequence(value):
            return ValidationResult.fail(FieldValidationError(field))
        for item in elements(value):
            for check in self.checks:
                result = check.evaluate(field, item)
                if not result.passed:
                    return result
        return ValidationResult.ok()


class ErrorCheck(Check):
    """
    Always fails with a parse error.

    Built in place of a check whose rule argument could not be parsed,
    so validation still completes with a definite outcome.
    """

    def __init__(self, detail: str, name: str = 'error'):
        super().__init__(name)
        self.detail = detail

    def evaluate(self, field: str, value: Any) -> ValidationResult:
        return ValidationResult.fail(ArgumentParseError(field, self.detail))


# --- Constructors -------------------------------------------------------------

def nonzero() -> Check:
    return PredicateCheck(lambda v: not is_zero(v), 'nonzero')


def matches(pattern: str, name: Optional[str] = None) -> Check:
    """
    Pass when the value's string form matches ``pattern``.

    The pattern is searched, not anchored; use ``^`` and ``$`` to match
    the whole value. An invalid pattern yields an ErrorCheck.
    """
    label = name or f'matches({pattern})'
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        return ErrorCheck(f'invalid pattern {pattern!r}: {exc}', name=label)

    def _match(value: Any) -> bool:
        text = string_form(value)
        return text is not None and compiled.search(text) is not None

    return PredicateCheck(_match, label)


def email() -> Check:
    return matches(REGEX_EMAIL, name='email')


def url() -> Check:
    return matches(REGEX_URL, name='url')


def ip() -> Check:
    return matches(REGEX_IP, name='ip')


def hexcolor() -> Check:
    return matches(REGEX_HEX_COLOR, name='hexcolor')


def alpha() -> Check:
    return matches(REGEX_ALPHA, name='alpha')


def num() -> Check:
    return matches(REGEX_NUM, name='num')


def alphanum() -> Check:
    """At least one letter and at least one digit."""
    return ChainCheck([matches('[a-zA-Z]+'), matches('[0-9]+')], name='alphanum')


def _numerical(op: Callable[[float, float], bool], symbol: str, n: Any) -> Check:
    threshold = numeric_form(n)
    if threshold is None:
        return ErrorCheck(f'{n!r} is not a number', name=f'{symbol}({n})')

    def _compare(value: Any) -> bool:
        number = numeric_form(value)
        return number is not None and op(number, threshold)

    return PredicateCheck(_compare, f'{symbol}({n})')


def gt(n: Any) -> Check:
    return _numerical(operator.gt, 'gt', n)


def gte(n: Any) -> Check:
    return _numerical(operator.ge, 'gte', n)


def lt(n: Any) -> Check:
    return _numerical(operator.lt, 'lt', n)


def lte(n: Any) -> Check:
    return _numerical(operator.le, 'lte', n)


def lat() -> Check:
    """Latitude: numeric value in [-90, 90]."""
    return ChainCheck([lte(90.0), gte(-90.0)], name='lat')


def lon() -> Check:
    """Longitude: numeric value in [-180, 180]."""
    return ChainCheck([lte(180.0), gte(-180.0)], name='lon')


def eq(expected: Any) -> Check:
    """Type-aware equality; ``eq('1')`` does not pass for the number 1."""
    return PredicateCheck(lambda v: values_equal(expected, v), f'eq({expected!r})')


def in_(items: Iterable[Any]) -> Check:
    allowed = list(items)
    return PredicateCheck(
        lambda v: any(values_equal(e, v) for e in allowed),
        f'in({allowed!r})',
    )


def not_in(items: Iterable[Any]) -> Check:
    denied = list(items)
    return PredicateCheck(
        lambda v: not any(values_equal(e, v) for e in denied),
        f'notin({denied!r})',
    )


def _length(op: Callable[[int, int], bool], symbol: str, n: int) -> Check:
    def _compare(value: Any) -> bool:
        size = length_of(value)
        return size is not None and op(size, n)

    return PredicateCheck(_compare, f'{symbol}({n})')


def length(n: int) -> Check:
    return _length(operator.eq, 'len', n)


def min_len(n: int) -> Check:
    return _length(operator.ge, 'minlen', n)


def max_len(n: int) -> Check:
    return _length(operator.le, 'maxlen', n)


def each(*checks: Check) -> Check:
    return EachCheck(checks)


def chain(*checks: Check) -> Check:
    return ChainCheck(checks)
