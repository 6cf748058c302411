# pmtracker/scheduling/occurrences.py
"""
Occurrence generation.

Projects an obligation's anchor date forward through its recurrence rule
and returns the due dates falling inside a query window. Generation is
bounded by fixed step limits: a pathological input (a weekly rule anchored
decades in the past, an absurdly wide window) yields a truncated but
terminating result, never a hang or an exception.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from pmtracker.schemas.common.enums import RecurrenceRule
from pmtracker.scheduling.obligation import MaintenanceObligation
from pmtracker.scheduling.recurrence import next_occurrence
from pmtracker.utils.date_utils import format_iso_date, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = [
    "FAST_FORWARD_LIMIT",
    "TOTAL_STEP_LIMIT",
    "generate_occurrences",
    "generate_due_dates",
]

# Steps allowed to walk from the anchor up to the window start.
FAST_FORWARD_LIMIT = 500
# Steps allowed across fast-forward and collection together.
TOTAL_STEP_LIMIT = 700


def generate_occurrences(
    anchor: date,
    rule: Optional[RecurrenceRule],
    window_start: date,
    window_end: date,
) -> List[date]:
    """
    Generate the due dates of one obligation inside a window.

    Args:
        anchor: First / authoritative due date
        rule: Recurrence rule, or None for a one-off obligation
        window_start: Inclusive window start
        window_end: Inclusive window end

    Returns:
        Ascending list of due dates within [window_start, window_end].
        May be incomplete when a step limit is reached.
    """
    if rule is None:
        return [anchor] if window_start <= anchor <= window_end else []

    occurrences: List[date] = []
    current = anchor
    steps = 0

    while current < window_start and steps < FAST_FORWARD_LIMIT:
        current = next_occurrence(current, rule)
        steps += 1

    if current < window_start:
        logger.debug(
            f"Fast-forward limit reached before window start "
            f"(anchor={anchor}, rule={rule.value}, window={window_start}..{window_end})"
        )
        return occurrences

    while current <= window_end and steps < TOTAL_STEP_LIMIT:
        occurrences.append(current)
        current = next_occurrence(current, rule)
        steps += 1

    if current <= window_end:
        logger.debug(
            f"Step limit reached after {len(occurrences)} occurrences "
            f"(anchor={anchor}, rule={rule.value}, window={window_start}..{window_end})"
        )

    return occurrences


def generate_due_dates(
    obligation: MaintenanceObligation,
    window_start: date,
    window_end: date,
) -> List[str]:
    """
    Generate an obligation's due dates as ISO strings.

    A missing or unparseable anchor produces no occurrences.
    """
    anchor = parse_iso_date(obligation.anchor_date)
    if anchor is None:
        if obligation.anchor_date:
            logger.debug(
                f"Skipping {obligation.key}: unparseable anchor '{obligation.anchor_date}'"
            )
        return []

    return [
        format_iso_date(d)
        for d in generate_occurrences(anchor, obligation.rule, window_start, window_end)
    ]
