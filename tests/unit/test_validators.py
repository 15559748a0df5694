"""
Unit tests for request value coercion.
"""

from datetime import date

import pytest

from pos_api.utils.validators import to_int, parse_date, has_non_finite


class TestToInt:

    @pytest.mark.parametrize('value, expected', [
        (5, 5),
        ('7', 7),
        (' 12 ', 12),
        ('12abc', 12),
        ('-3', -3),
        (4.9, 4),
        ('abc', 0),
        ('', 0),
        (None, 0),
        (True, 1),
        (float('inf'), 0),
        (float('-inf'), 0),
        (float('nan'), 0),
    ])
    def test_coercion(self, value, expected):
        assert to_int(value) == expected

    def test_custom_default(self):
        assert to_int('x', default=-1) == -1


class TestParseDate:

    def test_iso_date(self):
        assert parse_date('2024-05-17') == date(2024, 5, 17)

    def test_iso_datetime(self):
        assert parse_date('2024-05-17T10:30:00') == date(2024, 5, 17)

    @pytest.mark.parametrize('value', [None, '', 'yesterday', '2024-13-01', 20240517])
    def test_invalid_values(self, value):
        assert parse_date(value) is None


class TestHasNonFinite:

    def test_finite_values(self):
        assert has_non_finite({'qty': 2, 'price': 1.5, 'tags': ['a', 3]}) is False

    @pytest.mark.parametrize('value', [
        float('nan'),
        {'payment_cash': float('inf')},
        {'lines': [{'qty': float('-inf')}]},
    ])
    def test_non_finite_values(self, value):
        assert has_non_finite(value) is True
