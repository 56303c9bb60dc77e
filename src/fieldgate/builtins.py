"""
Built-in token vocabulary.

Each constructor receives the raw argument text of a clause (empty when
the clause has no parentheses) and returns a Check. Arguments that cannot
be parsed produce an ErrorCheck instead of raising.
"""

from typing import Any, Callable, List

from . import checks
from .checks import Check, ErrorCheck, PredicateCheck
from .parser import parse_rule
from .values import coerce_literal, values_equal


def _no_argument(build: Callable[[], Check]) -> Callable[[str], Check]:
    return lambda arg: build()


def _numeric(build: Callable[[float], Check], token: str) -> Callable[[str], Check]:
    def constructor(arg: str) -> Check:
        try:
            n = float(arg)
        except ValueError:
            return ErrorCheck(f'could not parse {arg!r} as a number', name=f'{token}({arg})')
        check = build(n)
        check.name = f'{token}({arg})'
        return check
    return constructor


def _integer(build: Callable[[int], Check], token: str) -> Callable[[str], Check]:
    def constructor(arg: str) -> Check:
        try:
            n = int(arg)
        except ValueError:
            return ErrorCheck(f'could not parse {arg!r} as an integer', name=f'{token}({arg})')
        return build(n)
    return constructor


def _literal_matches(literal: str, value: Any) -> bool:
    return values_equal(coerce_literal(literal, value), value)


def _split_list(arg: str) -> List[str]:
    return [item.strip() for item in arg.split(',')]


def eq_literal(arg: str) -> Check:
    """``eq(x)``: compare against ``x`` coerced to the value's kind."""
    return PredicateCheck(lambda v: _literal_matches(arg, v), f'eq({arg})')


def in_literal(arg: str) -> Check:
    items = _split_list(arg)
    return PredicateCheck(
        lambda v: any(_literal_matches(i, v) for i in items),
        f'in({arg})',
    )


def notin_literal(arg: str) -> Check:
    items = _split_list(arg)
    return PredicateCheck(
        lambda v: not any(_literal_matches(i, v) for i in items),
        f'notin({arg})',
    )


def install_builtins(registry) -> None:
    """Register the built-in vocabulary on ``registry``."""
    registry.register('nonzero', _no_argument(checks.nonzero))
    registry.register('email', _no_argument(checks.email))
    registry.register('hexcolor', _no_argument(checks.hexcolor))
    registry.register('url', _no_argument(checks.url))
    registry.register('ip', _no_argument(checks.ip))
    registry.register('alpha', _no_argument(checks.alpha))
    registry.register('num', _no_argument(checks.num))
    registry.register('alphanum', _no_argument(checks.alphanum))
    registry.register('lat', _no_argument(checks.lat))
    registry.register('lon', _no_argument(checks.lon))

    registry.register('gt', _numeric(checks.gt, 'gt'))
    registry.register('gte', _numeric(checks.gte, 'gte'))
    registry.register('lt', _numeric(checks.lt, 'lt'))
    registry.register('lte', _numeric(checks.lte, 'lte'))

    registry.register('len', _integer(checks.length, 'len'))
    registry.register('minlen', _integer(checks.min_len, 'minlen'))
    registry.register('maxlen', _integer(checks.max_len, 'maxlen'))

    registry.register('matches', checks.matches)
    registry.register('match', checks.matches)
    registry.register('eq', eq_literal)
    registry.register('in', in_literal)
    registry.register('notin', notin_literal)

    # each() re-parses its argument against the registry it was installed on
    registry.register('each', lambda arg: checks.each(*parse_rule(arg, registry)))
