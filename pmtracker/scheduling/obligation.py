# pmtracker/scheduling/obligation.py
"""
Maintenance obligation value object.

One schedulable duty: a preventative maintenance record or an asset's
calibration schedule. Obligations are built by the obligation source from
persisted rows and handed to the pure scheduling functions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pmtracker.schemas.common.enums import ObligationSourceType, RecurrenceRule

__all__ = ["MaintenanceObligation", "UNASSIGNED_ASSET_LABEL", "build_asset_label", "obligation_key"]

UNASSIGNED_ASSET_LABEL = "Unassigned Asset"
ASSET_LABEL_SEPARATOR = " · "


def obligation_key(source_type: ObligationSourceType, obligation_id: int) -> str:
    """Ledger key of an obligation; PM and calibration ids never collide."""
    return f"{ObligationSourceType(source_type).value}:{obligation_id}"


def build_asset_label(asset_id: Optional[int], *parts: Optional[str]) -> str:
    """
    Derive a display label for an asset.

    Non-empty trimmed identifying fields are joined with `` · ``; without
    any, falls back to ``Asset #<id>``, or ``Unassigned Asset`` when there
    is no asset at all.
    """
    if asset_id is None:
        return UNASSIGNED_ASSET_LABEL

    label = ASSET_LABEL_SEPARATOR.join(
        part.strip() for part in parts if part and part.strip()
    )
    return label or f"Asset #{asset_id}"


@dataclass(frozen=True)
class MaintenanceObligation:
    """
    A schedulable maintenance duty.

    Attributes:
        id: Identifier of the source row (PM id or asset id)
        source_type: PM record or asset calibration schedule
        location_id: Owning location
        anchor_date: ISO date the recurrence is projected from
        rule: Recurrence rule, None for one-off obligations
        asset_id: Asset the obligation concerns, if any
        title: Optional display title
        location_name: Resolved location name
        asset_label: Resolved asset label
    """

    id: int
    source_type: ObligationSourceType
    location_id: int
    anchor_date: Optional[str] = None
    rule: Optional[RecurrenceRule] = None
    asset_id: Optional[int] = None
    title: Optional[str] = None
    location_name: str = ""
    asset_label: str = UNASSIGNED_ASSET_LABEL

    @property
    def key(self) -> str:
        return obligation_key(self.source_type, self.id)
