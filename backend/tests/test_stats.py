"""
PuttLog Backend - Pure Helper Tests
====================================

What:  accuracy/totals math, count normalization and stepper adjustments.
       No database, no app.
"""

from types import SimpleNamespace

import pytest

from puttlog.services.normalize import normalize_count
from puttlog.services.stats import accuracy_percent, compute_totals
from puttlog.services.steppers import (
    decrement_attempts,
    decrement_makes,
    increment_attempts,
    increment_makes,
)


def _row(attempts, makes):
    return SimpleNamespace(attempts=attempts, makes=makes)


class TestAccuracy:

    @pytest.mark.parametrize(
        "makes,attempts,expected",
        [
            (0, 0, 0),
            (0, 10, 0),
            (7, 10, 70),
            (5, 5, 100),
            (1, 8, 13),
            (1, 3, 33),
            (2, 3, 67),
            (1, 200, 1),
            (1, 201, 0),
        ],
    )
    def test_accuracy_percent(self, makes, attempts, expected):
        assert accuracy_percent(makes, attempts) == expected

    def test_totals_sum_and_accuracy(self):
        totals = compute_totals([_row(10, 7), _row(5, 5)])

        assert (totals.attempts, totals.makes, totals.accuracy) == (15, 12, 80)

    def test_totals_empty(self):
        totals = compute_totals([])

        assert (totals.attempts, totals.makes, totals.accuracy) == (0, 0, 0)


class TestNormalizeCount:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("12", 12),
            (" 12 ", 12),
            ("3m", 3),
            ("1O", 1),
            ("-3", 3),
            ("4.5", 45),
            ("", 0),
            ("abc", 0),
            (None, 0),
            (7, 7),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_count(raw) == expected


class TestSteppers:

    def test_increment_attempts(self):
        assert increment_attempts(_row(3, 1)) == {"attempts": 4}

    @pytest.mark.parametrize("attempts,makes,expected", [(5, 2, 4), (3, 3, 3), (0, 0, 0)])
    def test_decrement_attempts_floors_at_makes(self, attempts, makes, expected):
        assert decrement_attempts(_row(attempts, makes)) == {"attempts": expected}

    def test_increment_makes_below_attempts(self):
        assert increment_makes(_row(5, 2)) == {"makes": 3}

    @pytest.mark.parametrize("attempts,makes", [(0, 0), (4, 4)])
    def test_increment_makes_bumps_attempts_when_equal(self, attempts, makes):
        assert increment_makes(_row(attempts, makes)) == {
            "attempts": attempts + 1,
            "makes": makes + 1,
        }

    @pytest.mark.parametrize("makes,expected", [(3, 2), (0, 0)])
    def test_decrement_makes_floors_at_zero(self, makes, expected):
        assert decrement_makes(_row(5, makes)) == {"makes": expected}
