"""
Rule expression parser.

A rule expression is one or more clauses joined by ``|``. Each clause is
``token`` or ``token(argument)``:

    "alphanum | minlen(5) | maxlen(10)"
    "each( gt(18) | lt(35) )"

The delimiter only splits at parenthesis depth zero, so the nested
expression inside ``each(...)`` reaches the ``each`` constructor intact
and is parsed again from there. Clauses combine with AND semantics in
the order they are written.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from .checks import ChainCheck, Check

DELIMITER = '|'

logger = logging.getLogger(__name__)


def _class_end(text: str, start: int) -> int:
    """Index of the ``]`` closing the character class at ``start``, or -1."""
    i = start + 1
    # a leading ']' (or '^]') is a literal member of the class
    if text[i:i + 1] == '^':
        i += 1
    if text[i:i + 1] == ']':
        i += 1
    while i < len(text):
        if text[i] == '\\':
            i += 2
            continue
        if text[i] == ']':
            return i
        i += 1
    return -1


def _structural(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (index, char) for characters that carry rule structure.

    Characters escaped with ``\\`` and characters inside a closed regex
    character class (``[...]``) are skipped, so patterns such as
    ``matches([(])`` or ``matches(^\\($)`` do not unbalance the parens.
    """
    i = 0
    while i < len(text):
        char = text[i]
        if char == '\\':
            i += 2
            continue
        if char == '[':
            end = _class_end(text, i)
            if end != -1:
                i = end + 1
                continue
        yield i, char
        i += 1


def split_clauses(rule: str) -> List[str]:
    """
    Split ``rule`` on top-level delimiters and trim each clause.

    A ``)`` without a matching ``(`` is ignored for depth tracking.
    Empty clauses are dropped.
    """
    clauses = []
    depth = 0
    start = 0
    for i, char in _structural(rule):
        if char == '(':
            depth += 1
        elif char == ')' and depth > 0:
            depth -= 1
        elif char == DELIMITER and depth == 0:
            clauses.append(rule[start:i])
            start = i + 1
    clauses.append(rule[start:])
    return [c.strip() for c in clauses if c.strip()]


def _open_paren(clause: str) -> int:
    return next((i for i, char in _structural(clause) if char == '('), -1)


def clause_token(clause: str) -> str:
    """Text before the first ``(``, or the whole clause."""
    start = _open_paren(clause)
    if start == -1:
        return clause.strip()
    return clause[:start].strip()


def clause_argument(clause: str) -> str:
    """
    Text between the first ``(`` and the last ``)``.

    Escaped parens and parens inside ``[...]`` do not count as markers.
    Empty when either marker is missing or the markers are inverted.
    """
    start = _open_paren(clause)
    end = max((i for i, char in _structural(clause) if char == ')'), default=-1)
    if start == -1 or end == -1 or start > end:
        return ''
    return clause[start + 1:end].strip()


def parse_rule(rule: str, registry=None) -> List[Check]:
    """
    Parse a rule expression into checks, in written order.

    Clauses whose token is not registered are skipped.

    Args:
        rule: The rule expression.
        registry: CheckRegistry to resolve tokens against. Defaults to
            the process-wide default registry.
    """
    if registry is None:
        from .registry import default_registry
        registry = default_registry()

    result: List[Check] = []
    for clause in split_clauses(rule or ''):
        token = clause_token(clause)
        check = registry.resolve(token, clause_argument(clause))
        if check is None:
            logger.debug("Skipping clause %r: no check for token %r", clause, token)
            continue
        result.append(check)
    return result


def compile_rule(rule: str, registry=None, name: Optional[str] = None) -> Check:
    """Parse ``rule`` and fold the clauses into a single chained check."""
    return ChainCheck(parse_rule(rule, registry), name=name or (rule or '').strip())
