"""Tests for recurrence rule arithmetic and parsing."""

from datetime import date

import pytest

from pmtracker.schemas.common.enums import RecurrenceRule
from pmtracker.scheduling.recurrence import (
    next_occurrence,
    normalize_recurrence_text,
    parse_recurrence,
    parse_rule_lenient,
    parse_rule_strict,
)

# ============================================================================
# next_occurrence
# ============================================================================


class TestNextOccurrence:
    """Each rule advances by its fixed interval."""

    @pytest.mark.parametrize(
        "rule,expected",
        [
            (RecurrenceRule.WEEKLY, date(2025, 1, 22)),
            (RecurrenceRule.BI_WEEKLY, date(2025, 1, 29)),
            (RecurrenceRule.MONTHLY, date(2025, 2, 15)),
            (RecurrenceRule.BI_MONTHLY, date(2025, 3, 15)),
            (RecurrenceRule.QUARTERLY, date(2025, 4, 15)),
            (RecurrenceRule.SEMI_ANNUAL, date(2025, 7, 15)),
            (RecurrenceRule.ANNUAL, date(2026, 1, 15)),
            (RecurrenceRule.BI_ANNUAL, date(2027, 1, 15)),
        ],
    )
    def test_intervals(self, rule, expected):
        assert next_occurrence(date(2025, 1, 15), rule) == expected

    def test_monthly_clamps_end_of_month(self):
        assert next_occurrence(date(2024, 1, 31), RecurrenceRule.MONTHLY) == date(2024, 2, 29)
        assert next_occurrence(date(2023, 1, 31), RecurrenceRule.MONTHLY) == date(2023, 2, 28)
        assert next_occurrence(date(2024, 3, 31), RecurrenceRule.MONTHLY) == date(2024, 4, 30)

    def test_every_rule_strictly_advances(self):
        start = date(2024, 2, 29)
        for rule in RecurrenceRule:
            assert next_occurrence(start, rule) > start


# ============================================================================
# Parsing
# ============================================================================


class TestStrictParsing:
    """Strict mode accepts canonical tokens only."""

    @pytest.mark.parametrize("rule", list(RecurrenceRule))
    def test_canonical_tokens(self, rule):
        assert parse_rule_strict(rule.value) is rule

    @pytest.mark.parametrize("value", ["Annual", "annually", "Monthly", " monthly", "bi weekly", "6 months"])
    def test_rejects_aliases_and_unnormalized_text(self, value):
        assert parse_rule_strict(value) is None

    @pytest.mark.parametrize("value", [None, "", 12])
    def test_empty_or_non_text(self, value):
        assert parse_recurrence(value) is None

    def test_enum_passes_through(self):
        assert parse_recurrence(RecurrenceRule.QUARTERLY) is RecurrenceRule.QUARTERLY


class TestLenientParsing:
    """Lenient mode normalizes free text and accepts aliases."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Annual", RecurrenceRule.ANNUAL),
            ("  ANNUALLY ", RecurrenceRule.ANNUAL),
            ("every year", RecurrenceRule.ANNUAL),
            ("Yearly", RecurrenceRule.ANNUAL),
            ("12 months", RecurrenceRule.ANNUAL),
            ("Biennial", RecurrenceRule.BI_ANNUAL),
            ("every 2 years", RecurrenceRule.BI_ANNUAL),
            ("bi_yearly", RecurrenceRule.BI_ANNUAL),
            ("Semi-Annual", RecurrenceRule.SEMI_ANNUAL),
            ("every 6 months", RecurrenceRule.SEMI_ANNUAL),
            ("half yearly", RecurrenceRule.SEMI_ANNUAL),
            ("Quarterly", RecurrenceRule.QUARTERLY),
            ("every 3 months", RecurrenceRule.QUARTERLY),
            ("bi--monthly", RecurrenceRule.BI_MONTHLY),
            ("Monthly", RecurrenceRule.MONTHLY),
            ("fortnightly", RecurrenceRule.BI_WEEKLY),
            ("Bi Weekly", RecurrenceRule.BI_WEEKLY),
            ("weekly", RecurrenceRule.WEEKLY),
        ],
    )
    def test_aliases(self, value, expected):
        assert parse_rule_lenient(value) is expected

    @pytest.mark.parametrize("value", ["as needed", "N/A", "-", "   ", "daily"])
    def test_unrecognized_text_is_none(self, value):
        assert parse_rule_lenient(value) is None

    def test_normalization(self):
        assert normalize_recurrence_text("  Every__6   Months-- ") == "every-6-months"
