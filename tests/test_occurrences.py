"""Tests for bounded occurrence generation."""

from datetime import date

from pmtracker.schemas.common.enums import ObligationSourceType, RecurrenceRule
from pmtracker.scheduling.obligation import MaintenanceObligation
from pmtracker.scheduling.occurrences import (
    FAST_FORWARD_LIMIT,
    TOTAL_STEP_LIMIT,
    generate_due_dates,
    generate_occurrences,
)

# ============================================================================
# Rule-less obligations
# ============================================================================


class TestNoRule:
    """Without a rule the anchor is the single occurrence."""

    def test_anchor_inside_window(self):
        assert generate_occurrences(
            date(2025, 3, 1), None, date(2025, 1, 1), date(2025, 12, 31)
        ) == [date(2025, 3, 1)]

    def test_anchor_outside_window(self):
        assert generate_occurrences(
            date(2025, 3, 1), None, date(2025, 4, 1), date(2025, 12, 31)
        ) == []


# ============================================================================
# Recurring obligations
# ============================================================================


class TestRecurring:
    def test_monthly_end_of_month_series_from_anchor(self):
        result = generate_occurrences(
            date(2024, 1, 31), RecurrenceRule.MONTHLY, date(2024, 1, 1), date(2024, 5, 31)
        )
        # Steps are taken from the clamped date, not the anchor day.
        assert result == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 29),
            date(2024, 4, 29),
            date(2024, 5, 29),
        ]

    def test_fast_forward_to_window(self):
        result = generate_occurrences(
            date(2025, 1, 15), RecurrenceRule.QUARTERLY, date(2025, 6, 1), date(2025, 12, 31)
        )
        assert result == [date(2025, 7, 15), date(2025, 10, 15)]

    def test_window_boundaries_are_inclusive(self):
        result = generate_occurrences(
            date(2025, 1, 1), RecurrenceRule.WEEKLY, date(2025, 1, 8), date(2025, 1, 22)
        )
        assert result == [date(2025, 1, 8), date(2025, 1, 15), date(2025, 1, 22)]

    def test_anchor_after_window_yields_nothing(self):
        assert generate_occurrences(
            date(2026, 1, 1), RecurrenceRule.MONTHLY, date(2025, 1, 1), date(2025, 12, 31)
        ) == []

    def test_output_ascending(self):
        result = generate_occurrences(
            date(2020, 2, 29), RecurrenceRule.BI_WEEKLY, date(2024, 1, 1), date(2025, 1, 1)
        )
        assert result == sorted(result)
        assert len(set(result)) == len(result)

    def test_idempotent(self):
        args = (date(2023, 5, 31), RecurrenceRule.MONTHLY, date(2024, 1, 1), date(2024, 12, 31))
        assert generate_occurrences(*args) == generate_occurrences(*args)


# ============================================================================
# Step limits
# ============================================================================


class TestStepLimits:
    """Pathological inputs terminate with a bounded result."""

    def test_weekly_anchor_twenty_years_back(self):
        result = generate_occurrences(
            date(2005, 6, 1), RecurrenceRule.WEEKLY, date(2025, 6, 1), date(2025, 6, 30)
        )
        assert isinstance(result, list)
        assert len(result) <= TOTAL_STEP_LIMIT
        # 20 years of weeks exceeds the fast-forward limit before the window.
        assert result == []

    def test_weekly_within_fast_forward_limit(self):
        anchor = date(2020, 6, 1)  # ~260 weeks back
        result = generate_occurrences(
            anchor, RecurrenceRule.WEEKLY, date(2025, 6, 1), date(2025, 6, 30)
        )
        assert 4 <= len(result) <= 5
        assert all(date(2025, 6, 1) <= d <= date(2025, 6, 30) for d in result)
        assert all((d - anchor).days % 7 == 0 for d in result)

    def test_wide_window_truncated_at_total_limit(self):
        anchor = date(2000, 1, 3)
        result = generate_occurrences(
            anchor, RecurrenceRule.WEEKLY, date(2000, 1, 1), date(2100, 1, 1)
        )
        assert len(result) == TOTAL_STEP_LIMIT
        assert result[0] == anchor

    def test_collection_steps_shared_with_fast_forward(self):
        # 2000-01-03 + 261 weeks == 2005-01-03, the first date in the window.
        result = generate_occurrences(
            date(2000, 1, 3), RecurrenceRule.WEEKLY, date(2005, 1, 1), date(2100, 1, 1)
        )
        assert 261 < FAST_FORWARD_LIMIT
        assert result[0] == date(2005, 1, 3)
        assert len(result) == TOTAL_STEP_LIMIT - 261


# ============================================================================
# Obligation wrapper
# ============================================================================


class TestGenerateDueDates:
    def _obligation(self, anchor, rule=RecurrenceRule.MONTHLY):
        return MaintenanceObligation(
            id=1,
            source_type=ObligationSourceType.PM,
            location_id=1,
            anchor_date=anchor,
            rule=rule,
        )

    def test_iso_strings(self):
        obligation = self._obligation("2025-01-31")
        assert generate_due_dates(obligation, date(2025, 2, 1), date(2025, 3, 31)) == [
            "2025-02-28",
            "2025-03-28",
        ]

    def test_missing_or_bad_anchor(self):
        window = (date(2025, 1, 1), date(2025, 12, 31))
        assert generate_due_dates(self._obligation(None), *window) == []
        assert generate_due_dates(self._obligation("2025-02-30"), *window) == []
        assert generate_due_dates(self._obligation("not a date", rule=None), *window) == []
