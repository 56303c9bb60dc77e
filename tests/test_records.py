"""
Tests for record-driven validation.
"""

from dataclasses import dataclass, field

from conftest import Ages, Equality, Listing, Numbers, Plain
from fieldgate import (
    InvalidSourceError,
    RULES_KEY,
    from_record,
    rule_field,
    validate_record,
)
from fieldgate.records import record_fields, record_values


@dataclass
class WithPrivate:
    name: str = rule_field('nonzero', default='x')
    _secret: str = rule_field('nonzero', default='')


@dataclass
class Survey:
    ages: list = rule_field('each( gt(18) | lt(35) )', default_factory=list)
    tennis_score: str = rule_field('in(love, 15, 30, 40)', default='love')
    hero: str = rule_field('notin(Superman,Batman,The Flash)', default='Robin')
    zipcode: str = rule_field(r'match(^\d{5}(?:[-\s]\d{4})?$)', default='12345')


class TestRecordFields:

    def test_fields_in_declaration_order(self):
        fields = record_fields(Listing('https://x.com', 'hello1'))
        assert [f.name for f in fields] == ['url', 'username']
        assert fields[1].rules == 'alphanum | minlen(5) | maxlen(10)'
        assert fields[1].value == 'hello1'

    def test_unannotated_fields_have_empty_rules(self):
        assert [f.rules for f in record_fields(Plain())] == ['', '']

    def test_rule_field_keeps_other_metadata(self):
        @dataclass
        class Tagged:
            code: str = rule_field('nonzero', default='', metadata={'doc': 'code'})

        meta = Tagged.__dataclass_fields__['code'].metadata
        assert meta[RULES_KEY] == 'nonzero'
        assert meta['doc'] == 'code'

    def test_plain_metadata_works(self):
        @dataclass
        class Legacy:
            age: int = field(default=0, metadata={RULES_KEY: 'gt(18)'})

        assert validate_record(Legacy(age=21)).passed
        assert not validate_record(Legacy(age=12)).passed

    def test_record_values_accepts_mappings(self):
        assert record_values({'a': 1, 'b': 2}) == [('a', 1), ('b', 2)]


class TestValidateRecord:

    def test_valid_records(self, valid_records):
        for record in valid_records:
            result = validate_record(record)
            assert result.passed, (record, result.error)

    def test_invalid_records(self, invalid_records):
        for record in invalid_records:
            assert not validate_record(record).passed, record

    def test_records_without_rules_pass(self):
        assert validate_record(Plain()).passed
        assert len(from_record(Plain())) == 0

    def test_reports_first_failing_field(self):
        result = validate_record(Numbers(age=14, count=99, ratio=0.0, limit=0))
        assert result.field == 'age'

    def test_each_in_record(self):
        assert validate_record(Ages([19, 20, 21])).passed
        result = validate_record(Ages([19, 20, 10]))
        assert result.field == 'ages'

    def test_eq_coerces_literal_to_field_kind(self):
        assert validate_record(Equality('abc123', '1', 1)).passed
        assert not validate_record(Equality('abc123', '2', 1)).passed
        assert not validate_record(Equality('abc123', '1', 2)).passed

    def test_private_fields_ignored(self):
        assert validate_record(WithPrivate()).passed

    def test_documented_rules(self):
        assert validate_record(Survey(ages=[19, 34])).passed
        assert not validate_record(Survey(ages=[19, 35])).passed
        assert not validate_record(Survey(tennis_score='50')).passed
        assert not validate_record(Survey(hero='Batman')).passed
        assert not validate_record(Survey(zipcode='1234')).passed
        assert validate_record(Survey(zipcode='12345-6789')).passed

    def test_uses_given_registry(self, registry):
        registry.unregister('gt')
        assert validate_record(Numbers(14, 400, -10.0, 18), registry).passed


class TestInvalidSource:

    def test_non_record_sources(self):
        for source in [None, 42, 'text', {'a': 1}, [1, 2], Listing]:
            result = validate_record(source)
            assert result.passed is False, source
            assert isinstance(result.error, InvalidSourceError)
            assert result.error.kind == 'invalid_source'

    def test_construction_never_raises(self):
        fields = from_record(object())
        assert len(fields) == 1
        assert not fields.validate().passed
