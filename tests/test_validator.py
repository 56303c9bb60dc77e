"""
Tests for the FieldSet tree and the Validator orchestrator.
"""

import pytest

from fieldgate import (
    ArgumentParseError,
    DeferredError,
    Field,
    FieldSet,
    FieldValidationError,
    InvalidSourceError,
    PredicateCheck,
    Validator,
    each,
    email,
    gt,
    lt,
    nonzero,
)


class TestFieldSet:

    def test_empty_set_passes(self):
        assert FieldSet().validate().passed is True

    def test_all_pass(self):
        fs = FieldSet('clean')
        fs.add(Field('age', 21, gt(18)), Field('email', 'a@test.com', email()))
        assert fs.validate().passed is True
        assert len(fs) == 2

    def test_first_failure_wins(self):
        fs = FieldSet('messy')
        fs.add(Field('name', 'Alpha', nonzero()))     # passes
        fs.add(Field('age', 12, gt(18)))              # fails
        fs.add(Field('email', 'bad-email', email()))  # fails, never reported
        result = fs.validate()
        assert result.passed is False
        assert result.field == 'age'
        assert isinstance(result.error, FieldValidationError)

    def test_short_circuits(self):
        seen = []

        class Recording(PredicateCheck):
            def evaluate(self, field, value):
                seen.append(field)
                return super().evaluate(field, value)

        fs = FieldSet()
        fs.add(Field('a', 0, Recording(lambda v: False, 'never')))
        fs.add(Field('b', 0, Recording(lambda v: True, 'always')))
        fs.validate()
        assert seen == ['a']

    def test_nested_sets(self):
        inner = FieldSet('inner').add(Field('ages', [19, 10], each(gt(18))))
        outer = FieldSet('outer').add(Field('name', 'x', nonzero()), inner)
        result = outer.validate()
        assert result.field == 'ages'

    def test_deferred_error_reported_in_order(self):
        fs = FieldSet()
        fs.add(Field('age', 21, gt(18)))
        fs.add(DeferredError(InvalidSourceError('not a record')))
        fs.add(Field('age', 1, gt(18)))
        result = fs.validate()
        assert isinstance(result.error, InvalidSourceError)
        assert str(result.error) == 'not a record'

    def test_chaining(self):
        fs = FieldSet('chain')
        fs.add(Field('a', 1, gt(0))).add(Field('b', 1, lt(2)))
        assert len(fs) == 2

    def test_rejects_unknown_entries(self):
        with pytest.raises(TypeError):
            FieldSet().add('age')


class TestValidator:

    def test_validate_with_rule_strings(self):
        v = Validator('signup')
        v.add_field('username', 'hello1', 'alphanum | minlen(5) | maxlen(10)')
        v.add_field('age', 21, 'gte(18)')
        assert v.validate().passed is True
        assert v.field_count == 4

    def test_rule_string_failure(self):
        v = Validator('signup')
        v.add_field('username', 'hello', 'alphanum | minlen(5) | maxlen(10)')
        result = v.validate()
        assert result.passed is False
        assert str(result.error) == 'username did not pass validation'

    def test_accepts_checks(self):
        v = Validator('test')
        v.add_field('age', 17, gt(18))
        assert v.validate().field == 'age'

    def test_field_count(self):
        v = Validator('test')
        assert v.field_count == 0
        v.add(Field('a', 1, gt(0)))
        v.add(Field('b', 1, gt(0)), FieldSet())
        assert v.field_count == 3

    def test_add_fields_batch(self):
        v = Validator('test')
        v.add_fields([Field('a', 1, gt(0)), Field('b', 1, gt(0))])
        assert v.field_count == 2

    def test_empty_validator_passes(self):
        assert Validator().validate().passed is True

    def test_uses_own_registry(self, registry):
        registry.unregister('gte')
        v = Validator('test', registry=registry)
        v.add_field('age', 1, 'gte(18)')
        assert v.field_count == 0
        assert v.validate().passed is True

    def test_parse_error_surfaces_through_validate(self):
        v = Validator('test')
        v.add_field('size', 'abc', 'maxlen(ten)')
        result = v.validate()
        assert isinstance(result.error, ArgumentParseError)
        with pytest.raises(ArgumentParseError):
            result.raise_for_error()
