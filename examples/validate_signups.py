#!/usr/bin/env python3
"""
Example: Validate signup records with field rules.

Declares rules on a dataclass, validates a few records, then applies
the same kind of rules from a query string and a custom token.

Usage:
    python examples/validate_signups.py
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

# Allow imports from src/
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from fieldgate import (
    matches,
    register_token,
    rule_field,
    validate_query,
    validate_record,
)


@dataclass
class Signup:
    username: str = rule_field('alphanum | minlen(5) | maxlen(15)', default='')
    email: str = rule_field('nonzero | email', default='')
    website: str = rule_field('url', default='http://example.com')
    day_of_week: int = rule_field('gte(0) | lt(7)', default=0)
    tennis_score: str = rule_field('in(love,15,30,40)', default='love')
    ages: List[int] = rule_field('each( gt(18) | lt(35) )', default_factory=list)
    password: str = rule_field('pword', default='')


SIGNUPS = [
    Signup('logan12345', 'logan@example.com', ages=[19, 24], password='aB3def'),
    Signup('hello', 'hello@example.com'),
    Signup('gator99', 'gator@example', day_of_week=3),
    Signup('gator99', 'gator@example.com', ages=[19, 40]),
    Signup('gator99', 'gator@example.com', password='ASDF12345'),
]


def run(title: str) -> None:
    print(f"\n--- {title} ---")
    for signup in SIGNUPS:
        result = validate_record(signup)
        status = 'PASS' if result else f'FAIL  {result.error}'
        print(f"  {signup.username:<12} {status}")


def main():
    logging.basicConfig(level=logging.INFO, format='%(name)s %(levelname)s %(message)s')

    # 'pword' is unknown at this point, so its clause is skipped
    run("Built-in rules")

    register_token('pword', lambda arg: matches(r'^(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).{4,8}$'))
    run("After registering 'pword'")

    print("\n--- Rules from a query string ---")
    query = 'website=url&username=alphanum|minlen(5)|maxlen(10)'
    for signup in SIGNUPS[:2]:
        result = validate_query(signup, query)
        print(f"  {signup.username:<12} {'PASS' if result else result.error}")

    print("\n--- Malformed query string ---")
    print(f"  {validate_query(SIGNUPS[0], 'website=%zz').error}")
    print()


if __name__ == '__main__':
    main()
