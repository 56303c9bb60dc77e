"""
Value description helpers.

Every primitive check looks at a field value through one of these
functions: zero-ness, string form, numeric form, length, sequence-ness
and equality. Checks never branch on concrete host types themselves.
"""

import dataclasses
import math
from collections.abc import Mapping, Set, Sized
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

import pandas as pd
from pandas.api import types as ptypes


def is_zero(value: Any) -> bool:
    """
    Return True if ``value`` is the zero value for its type.

    None, NaN/NA, False, numeric zero, empty strings and empty containers
    are zero. A dataclass instance is zero when every one of its fields is.
    """
    if value is None:
        return True
    if ptypes.is_scalar(value) and pd.isna(value):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(
            is_zero(getattr(value, f.name))
            for f in dataclasses.fields(value)
        )
    if ptypes.is_bool(value):
        return not value
    if ptypes.is_number(value):
        return value == 0
    if isinstance(value, (str, bytes, bytearray)):
        return len(value) == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def string_form(value: Any) -> Optional[str]:
    """Return the text a pattern check matches against, or None."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8', errors='replace')
    if ptypes.is_bool(value):
        return None
    if ptypes.is_number(value) and not pd.isna(value):
        return str(value)
    return None


def numeric_form(value: Any) -> Optional[float]:
    """
    Return ``value`` as a float if it is a real number.

    Booleans, NaN and numeric-looking strings have no numeric form.
    """
    if ptypes.is_bool(value) or not ptypes.is_number(value):
        return None
    if isinstance(value, complex):
        return None
    try:
        number = float(value)
    except OverflowError:
        # ints beyond float range map to +/-inf
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def length_of(value: Any) -> Optional[int]:
    """Length of strings, sequences and mappings; None for everything else."""
    if value is None or isinstance(value, type):
        return None
    if isinstance(value, Sized):
        return len(value)
    return None


def is_sequence(value: Any) -> bool:
    """True for ordered, list-like values (lists, tuples, arrays, Series)."""
    if isinstance(value, (str, bytes, bytearray, Mapping, Set)):
        return False
    return ptypes.is_list_like(value) and isinstance(value, Sized)


def elements(value: Any) -> List[Any]:
    """Elements of a sequence value, as plain Python objects where possible."""
    if isinstance(value, pd.Series):
        return value.tolist()
    return list(value)


def values_equal(expected: Any, actual: Any) -> bool:
    """
    Type-aware equality.

    Numbers compare numerically across int, float, Decimal and numpy
    scalars. Booleans only equal booleans, and text never equals a number.
    """
    if ptypes.is_bool(expected) or ptypes.is_bool(actual):
        if not (ptypes.is_bool(expected) and ptypes.is_bool(actual)):
            return False
        return bool(expected) == bool(actual)

    expected_num = ptypes.is_number(expected)
    actual_num = ptypes.is_number(actual)
    if expected_num or actual_num:
        if not (expected_num and actual_num):
            return False
        return bool(expected == actual)

    if isinstance(expected, str) or isinstance(actual, str):
        return isinstance(expected, str) and isinstance(actual, str) and expected == actual

    try:
        return bool(expected == actual)
    except (TypeError, ValueError):
        # Array-valued comparisons have no single truth value.
        return False


def coerce_literal(text: str, like: Any) -> Any:
    """
    Convert a literal from a rule string to the kind of ``like``.

    Returns ``text`` unchanged for string values, a number for numeric
    values and a bool for boolean values. A literal that cannot take the
    value's kind is returned as-is and will not compare equal.
    """
    if ptypes.is_bool(like):
        lowered = text.strip().lower()
        if lowered in ('true', '1'):
            return True
        if lowered in ('false', '0'):
            return False
        return text
    if ptypes.is_number(like):
        return parse_number(text, default=text)
    return text


def parse_number(text: str, default: Any = None) -> Any:
    """Parse ``text`` as an int when integral, else as a float."""
    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(Decimal(stripped))
    except (InvalidOperation, ValueError):
        return default
