"""
Unit tests for request validators.
"""
from datetime import datetime, timezone

import pytest

from time_ledger.utils.error_codes import ErrorCode
from time_ledger.utils.validators import (
    ValidationError,
    parse_end_time,
    validate_description,
    validate_document_id,
)


class TestValidateDocumentId:
    """Test suite for validate_document_id."""

    def test_valid_id(self):
        doc_id = '1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms'
        assert validate_document_id(doc_id) == doc_id

    @pytest.mark.parametrize('value', [None, ''])
    def test_missing(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_document_id(value)

        assert exc_info.value.error_code == ErrorCode.VALIDATION_MISSING_PARAMETER
        assert exc_info.value.field == 'sheetId'

    @pytest.mark.parametrize('value', ['short', 'has spaces in it', '../../etc/passwd', 12345678901])
    def test_malformed(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_document_id(value)

        assert exc_info.value.error_code == ErrorCode.VALIDATION_INVALID_PARAMETER


class TestValidateDescription:
    """Test suite for validate_description."""

    def test_absent(self):
        assert validate_description(None) is None

    def test_blank_becomes_none(self):
        assert validate_description('   ') is None

    def test_stripped(self):
        assert validate_description('  Code review ') == 'Code review'

    @pytest.mark.parametrize('value', ['=HYPERLINK("x")', '+1', '@me'])
    def test_formula_prefix_escaped(self, value):
        assert validate_description(value) == "'" + value

    def test_too_long(self):
        with pytest.raises(ValidationError):
            validate_description('x' * 501)

    def test_not_a_string(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_description(['a'])

        assert exc_info.value.field == 'description'


class TestParseEndTime:
    """Test suite for parse_end_time."""

    def test_absent(self):
        assert parse_end_time(None) is None

    def test_zulu(self):
        assert parse_end_time('2024-01-15T17:30:00Z') == datetime(2024, 1, 15, 17, 30, tzinfo=timezone.utc)

    def test_offset_preserved(self):
        parsed = parse_end_time('2024-01-15T12:30:00-05:00')
        assert parsed == datetime(2024, 1, 15, 17, 30, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_end_time('2024-01-15T17:30:00').tzinfo == timezone.utc

    @pytest.mark.parametrize('value', ['yesterday', 1705339800])
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_end_time(value)

        assert exc_info.value.field == 'endTime'
