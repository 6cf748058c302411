# pmtracker/scheduling/recurrence.py
"""
Recurrence rules.

Maps a due date and a recurrence rule to the next due date, and parses
recurrence text into a ``RecurrenceRule``. Two parsing modes share one
alias table:

- strict: only the canonical enum tokens are accepted (values coming from
  a constrained selector, e.g. preventative maintenance records);
- lenient: free text is normalized and matched against canonical tokens
  and aliases (values coming from free-form calibration frequency fields).
"""

from __future__ import annotations

import re
from datetime import date
from typing import Callable, Dict, Optional

from pmtracker.schemas.common.enums import RecurrenceRule
from pmtracker.utils.date_utils import add_days, add_months

__all__ = [
    "RECURRENCE_ALIASES",
    "next_occurrence",
    "normalize_recurrence_text",
    "parse_recurrence",
    "parse_rule_strict",
    "parse_rule_lenient",
]


_STEP: Dict[RecurrenceRule, Callable[[date], date]] = {
    RecurrenceRule.WEEKLY: lambda d: add_days(d, 7),
    RecurrenceRule.BI_WEEKLY: lambda d: add_days(d, 14),
    RecurrenceRule.MONTHLY: lambda d: add_months(d, 1),
    RecurrenceRule.BI_MONTHLY: lambda d: add_months(d, 2),
    RecurrenceRule.QUARTERLY: lambda d: add_months(d, 3),
    RecurrenceRule.SEMI_ANNUAL: lambda d: add_months(d, 6),
    RecurrenceRule.ANNUAL: lambda d: add_months(d, 12),
    RecurrenceRule.BI_ANNUAL: lambda d: add_months(d, 24),
}

# Every rule must have a step; adding an enum member without one fails at import.
assert set(_STEP) == set(RecurrenceRule), "missing step for a RecurrenceRule"


# Normalized alias -> rule. Canonical tokens are matched separately.
RECURRENCE_ALIASES: Dict[str, RecurrenceRule] = {
    # weekly
    "week": RecurrenceRule.WEEKLY,
    "every-week": RecurrenceRule.WEEKLY,
    "every-1-week": RecurrenceRule.WEEKLY,
    "1-week": RecurrenceRule.WEEKLY,
    "7-days": RecurrenceRule.WEEKLY,
    # bi-weekly
    "biweekly": RecurrenceRule.BI_WEEKLY,
    "fortnightly": RecurrenceRule.BI_WEEKLY,
    "every-2-weeks": RecurrenceRule.BI_WEEKLY,
    "every-other-week": RecurrenceRule.BI_WEEKLY,
    "2-weeks": RecurrenceRule.BI_WEEKLY,
    "14-days": RecurrenceRule.BI_WEEKLY,
    # monthly
    "month": RecurrenceRule.MONTHLY,
    "every-month": RecurrenceRule.MONTHLY,
    "every-1-month": RecurrenceRule.MONTHLY,
    "1-month": RecurrenceRule.MONTHLY,
    # bi-monthly
    "bimonthly": RecurrenceRule.BI_MONTHLY,
    "every-2-months": RecurrenceRule.BI_MONTHLY,
    "every-other-month": RecurrenceRule.BI_MONTHLY,
    "2-months": RecurrenceRule.BI_MONTHLY,
    # quarterly
    "quarter": RecurrenceRule.QUARTERLY,
    "every-quarter": RecurrenceRule.QUARTERLY,
    "every-3-months": RecurrenceRule.QUARTERLY,
    "3-months": RecurrenceRule.QUARTERLY,
    # semi-annual
    "semi-annual": RecurrenceRule.SEMI_ANNUAL,
    "semiannual": RecurrenceRule.SEMI_ANNUAL,
    "semi-annually": RecurrenceRule.SEMI_ANNUAL,
    "semiannually": RecurrenceRule.SEMI_ANNUAL,
    "half-yearly": RecurrenceRule.SEMI_ANNUAL,
    "6-months": RecurrenceRule.SEMI_ANNUAL,
    "twice-a-year": RecurrenceRule.SEMI_ANNUAL,
    # annual
    "annual": RecurrenceRule.ANNUAL,
    "annually": RecurrenceRule.ANNUAL,
    "year": RecurrenceRule.ANNUAL,
    "every-year": RecurrenceRule.ANNUAL,
    "every-1-year": RecurrenceRule.ANNUAL,
    "1-year": RecurrenceRule.ANNUAL,
    "every-12-months": RecurrenceRule.ANNUAL,
    "12-months": RecurrenceRule.ANNUAL,
    # bi-annual (every two years)
    "biyearly": RecurrenceRule.BI_ANNUAL,
    "bi-annual": RecurrenceRule.BI_ANNUAL,
    "biannual": RecurrenceRule.BI_ANNUAL,
    "biennial": RecurrenceRule.BI_ANNUAL,
    "biennially": RecurrenceRule.BI_ANNUAL,
    "every-2-years": RecurrenceRule.BI_ANNUAL,
    "every-other-year": RecurrenceRule.BI_ANNUAL,
    "2-years": RecurrenceRule.BI_ANNUAL,
    "every-24-months": RecurrenceRule.BI_ANNUAL,
    "24-months": RecurrenceRule.BI_ANNUAL,
}

_CANONICAL: Dict[str, RecurrenceRule] = {rule.value: rule for rule in RecurrenceRule}

_SEPARATORS = re.compile(r"[\s_]+")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def next_occurrence(d: date, rule: RecurrenceRule) -> date:
    """
    Calculate the due date following ``d``.

    Args:
        d: Current due date
        rule: Recurrence rule (never None; absence of a rule is the
            caller's concern)

    Returns:
        Next due date, strictly after ``d``
    """
    return _STEP[rule](d)


def normalize_recurrence_text(value: str) -> str:
    """Lowercase, hyphenate separators and collapse repeated hyphens."""
    text = _SEPARATORS.sub("-", value.strip().lower())
    return _REPEATED_HYPHENS.sub("-", text).strip("-")


def parse_recurrence(value: Optional[str], lenient: bool = False) -> Optional[RecurrenceRule]:
    """
    Parse recurrence text into a rule.

    Args:
        value: Raw recurrence text
        lenient: Normalize the text and accept aliases

    Returns:
        Matching rule, or None when the text is empty or unrecognized
    """
    if isinstance(value, RecurrenceRule):
        return value
    if not isinstance(value, str) or not value:
        return None

    if not lenient:
        return _CANONICAL.get(value)

    normalized = normalize_recurrence_text(value)
    return _CANONICAL.get(normalized) or RECURRENCE_ALIASES.get(normalized)


def parse_rule_strict(value: Optional[str]) -> Optional[RecurrenceRule]:
    """Exact match against the canonical tokens only."""
    return parse_recurrence(value, lenient=False)


def parse_rule_lenient(value: Optional[str]) -> Optional[RecurrenceRule]:
    """Normalized match against canonical tokens and aliases."""
    return parse_recurrence(value, lenient=True)
