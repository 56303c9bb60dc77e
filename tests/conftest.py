"""Shared test fixtures and path setup."""
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

# Add src/ to sys.path so tests can import fieldgate without installing
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import pytest
import pandas as pd

from fieldgate import CheckRegistry, rule_field


# --- Record fixtures ---

@dataclass
class Required:
    required: str = rule_field('nonzero', default='')


@dataclass
class Contact:
    email: str = rule_field('email', default='')
    hex_color: str = rule_field('hexcolor', default='')


@dataclass
class Listing:
    url: str = rule_field('url', default='')
    username: str = rule_field('alphanum | minlen(5) | maxlen(10)', default='')


@dataclass
class Numbers:
    age: int = rule_field('gt(18)', default=0)
    count: int = rule_field('gte(100)', default=0)
    ratio: float = rule_field('lt(19.9)', default=0.0)
    limit: int = rule_field('lte(18)', default=0)


@dataclass
class Ages:
    ages: List[int] = rule_field('each(gt(18))', default_factory=list)


@dataclass
class Position:
    lat: float = rule_field('lat', default=0.0)
    lon: float = rule_field('lon', default=0.0)


@dataclass
class Equality:
    code: str = rule_field('eq(abc123)', default='')
    text_one: str = rule_field('eq(1)', default='')
    int_one: int = rule_field('eq(1)', default=0)


@dataclass
class Plain:
    name: str = ''
    score: int = 0


@pytest.fixture
def registry():
    """Isolated registry with the built-in vocabulary."""
    return CheckRegistry.with_builtins('test')


@pytest.fixture
def valid_records():
    return [
        Required('a'),
        Contact('loganjspears@gmail.com', '#ffffff'),
        Contact('loganjspears@gmail.com', '#FFFFFF'),
        Listing('http://www.google.com', 'logan12345'),
        Numbers(19, 400, -10.0, 18),
        Ages([19, 20, 21]),
        Position(0.0, 0.0),
        Position(90.0, -180.0),
        Equality('abc123', '1', 1),
    ]


@pytest.fixture
def invalid_records():
    return [
        Required(''),
        Contact('loganjspears@gmail', '#ffffff'),
        Contact('loganjspears@gmail.com', '#fhffff'),
        Listing('http://google', 'logan12345'),
        Listing('http://www.google.com', 'log1'),
        Listing('http://www.google.com', 'logan100101001100101001'),
        Numbers(14, 400, -10.0, 18),
        Numbers(19, 99, -10.0, 18),
        Numbers(19, 400, 19.90000001, 18),
        Numbers(19, 400, -10.0, 19),
        Ages([19, 20, 10]),
        Position(90.1, -180.0),
        Position(90.0, -180.1),
    ]


# --- DataFrame fixtures ---

@pytest.fixture
def clean_df():
    """DataFrame whose rows all pass the signup rules."""
    return pd.DataFrame({
        'id': [1, 2, 3, 4, 5],
        'username': ['alpha1', 'bravo22', 'charlie3', 'delta44', 'echo555'],
        'score': [85, 92, 78, 95, 88],
        'email': ['a@test.com', 'b@test.com', 'c@test.com', 'd@test.com', 'e@test.com'],
    })


@pytest.fixture
def messy_df():
    """DataFrame with one failing field in rows 1, 3 and 4."""
    return pd.DataFrame({
        'id': [1, 2, 3, 4, 5],
        'username': ['alpha1', 'bravo22', 'charlie3', 'delta', 'echo555'],
        'score': [85, 120, 78, 95, 90],
        'email': ['a@test.com', 'b@test.com', 'c@test.com', 'd@test.com', None],
    })


@pytest.fixture
def signup_rules():
    return {
        'id': 'nonzero',
        'username': 'alphanum | minlen(5) | maxlen(10)',
        'score': 'gte(0) | lte(100)',
        'email': 'nonzero | email',
    }


@pytest.fixture
def coordinates_df():
    return pd.DataFrame({
        'place': ['Honshu, Japan', 'Los Angeles, CA', 'Lima, Peru'],
        'latitude': [35.68, 34.05, -12.05],
        'longitude': [139.69, -118.24, -77.04],
        'magnitude': [7.1, 5.5, 4.8],
    })
