"""
Unit tests for age and program derivation.
"""

from datetime import date

import pytest

from coachai.core.demographics import calculate_age, program_label


class TestCalculateAge:

    def test_birthday_passed(self):
        assert calculate_age(date(1990, 1, 1), date(2024, 1, 10)) == 34

    def test_birthday_not_yet_reached(self):
        assert calculate_age(date(1990, 6, 15), date(2024, 6, 14)) == 33
        assert calculate_age(date(1990, 6, 15), date(2024, 6, 15)) == 34

    def test_future_dob_is_zero(self):
        assert calculate_age(date(2030, 1, 1), date(2024, 1, 1)) == 0


class TestProgramLabel:

    @pytest.mark.parametrize("age, weight, expected", [
        (65, 120, "Mobility & Joint Health Fundamentals"),
        (16, 120, "Youth Athletic Foundation"),
        (30, 101, "Low Impact Conditioning & Stability"),
        (45, 100, "Functional Strength & Recovery"),
        (45, 101, "Low Impact Conditioning & Stability"),
        (30, 75, "High Performance Conditioning"),
        (60, 75, "Functional Strength & Recovery"),
        (18, 75, "High Performance Conditioning"),
    ])
    def test_rules_in_order(self, age, weight, expected):
        assert program_label(age, weight) == expected
