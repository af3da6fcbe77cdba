"""Calibration anchors mapping Telegram user IDs to calendar dates."""

from dataclasses import dataclass
from datetime import datetime, timezone


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


@dataclass(frozen=True)
class AnchorPoint:
    """A known (user ID, date) checkpoint in the ID space growth curve."""

    identifier: int
    date: datetime


# Date the table was last calibrated; interpolated dates never exceed it
CALIBRATION_CUTOFF = _utc(2025, 7, 18)

# Largest ID the table models (2**53 - 1)
ID_CEILING = 9_007_199_254_740_991

ANCHOR_TABLE: tuple[AnchorPoint, ...] = (
    AnchorPoint(1, _utc(2013, 8, 1)),  # Telegram launch
    AnchorPoint(1_000_000, _utc(2014, 1, 1)),
    AnchorPoint(10_000_000, _utc(2014, 6, 1)),
    AnchorPoint(50_000_000, _utc(2015, 1, 1)),
    AnchorPoint(100_000_000, _utc(2015, 6, 1)),
    AnchorPoint(500_000_000, _utc(2016, 1, 1)),
    AnchorPoint(1_000_000_000, _utc(2016, 6, 1)),
    AnchorPoint(2_000_000_000, _utc(2017, 1, 1)),
    AnchorPoint(5_000_000_000, _utc(2018, 1, 1)),
    AnchorPoint(10_000_000_000, _utc(2019, 1, 1)),
    AnchorPoint(20_000_000_000, _utc(2020, 1, 1)),
    AnchorPoint(50_000_000_000, _utc(2021, 1, 1)),
    AnchorPoint(100_000_000_000, _utc(2022, 1, 1)),
    AnchorPoint(200_000_000_000, _utc(2023, 1, 1)),
    AnchorPoint(500_000_000_000, _utc(2024, 1, 1)),
    AnchorPoint(ID_CEILING, CALIBRATION_CUTOFF),
)


def validate_anchor_table(anchors: tuple[AnchorPoint, ...]) -> None:
    """
    Check that anchors are strictly increasing in both ID and date.

    Raises:
        ValueError: If the table has fewer than two anchors or is unordered
    """
    if len(anchors) < 2:
        raise ValueError("Anchor table needs at least two points")

    for lo, hi in zip(anchors, anchors[1:]):
        if hi.identifier <= lo.identifier:
            raise ValueError(
                f"Anchor IDs not increasing: {lo.identifier} -> {hi.identifier}"
            )
        if hi.date <= lo.date:
            raise ValueError(
                f"Anchor dates not increasing at ID {hi.identifier}: "
                f"{lo.date.date()} -> {hi.date.date()}"
            )


validate_anchor_table(ANCHOR_TABLE)
