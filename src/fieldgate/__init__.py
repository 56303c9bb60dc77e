"""
fieldgate: declarative field validation.

Rules are short text expressions ("alphanum | minlen(5) | maxlen(10)")
attached to record fields, passed in a query string, or mapped onto
DataFrame columns. Validation stops at the first failing field.
"""

from .checks import (
    Check,
    ChainCheck,
    EachCheck,
    ErrorCheck,
    PredicateCheck,
    ValidationResult,
    alpha,
    alphanum,
    chain,
    each,
    email,
    eq,
    gt,
    gte,
    hexcolor,
    in_,
    ip,
    lat,
    length,
    lon,
    lt,
    lte,
    matches,
    max_len,
    min_len,
    nonzero,
    not_in,
    num,
    url,
)
from .errors import (
    ArgumentParseError,
    FieldValidationError,
    InvalidSourceError,
    MalformedRuleSourceError,
    ValidationError,
)
from .frame import FrameValidator, validate_frame
from .parser import compile_rule, parse_rule
from .query import from_query, validate_query
from .records import RULES_KEY, from_record, rule_field, validate_record
from .registry import CheckRegistry, default_registry, register_token
from .report import RowFailure, ValidationReport
from .validator import DeferredError, Field, FieldSet, Validator

__version__ = '0.1.0'
