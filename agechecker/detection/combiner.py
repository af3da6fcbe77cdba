"""Combines weak creation-date signals into a single dated estimate."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Callable, Optional, Sequence, Union

from .formatting import add_months, format_date
from .id_interpolator import estimate_from_identifier, is_sentinel_identifier
from .username_patterns import estimate_from_username

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROSECOND = timedelta(microseconds=1)


class Confidence(IntEnum):
    """Ordinal weight of a single estimate."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


USER_ID_METHOD = "User ID Analysis"
USERNAME_METHOD = "Username Pattern"
DEFAULT_METHOD = "Default"
DEFAULT_CONFIDENCE = "very_low"
DEFAULT_ACCURACY = "±12 months"


@dataclass
class WeightedEstimate:
    """One estimator's date with its confidence weight."""

    date: datetime
    confidence: int
    method: str

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "confidence": int(self.confidence),
            "method": self.method,
        }


@dataclass
class DateRange:
    """Formatted bounds around an estimate."""

    start: str
    end: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass
class AgeEstimateResult:
    """Final account age estimate."""

    estimated_date: datetime
    confidence: str
    method: str
    accuracy: str
    date_range: DateRange
    all_estimates: list[WeightedEstimate] = field(default_factory=list)


def weighted_mean(estimates: Sequence[WeightedEstimate]) -> datetime:
    """Confidence-weighted mean of estimate dates."""
    # Integer microseconds so a single estimate comes back unchanged
    weighted_sum = sum(
        ((e.date - _EPOCH) // _MICROSECOND) * int(e.confidence) for e in estimates
    )
    total_weight = sum(int(e.confidence) for e in estimates)
    return _EPOCH + timedelta(microseconds=weighted_sum // total_weight)


def confidence_label(max_weight: int) -> str:
    """Map the strongest estimate weight to a confidence label."""
    if max_weight == Confidence.HIGH:
        return "high"
    if max_weight == Confidence.MEDIUM:
        return "medium"
    return "low"


def accuracy_for_confidence(label: str) -> str:
    """Map a confidence label to its accuracy radius."""
    if label == "high":
        return "±3 months"
    if label == "medium":
        return "±6 months"
    return "±12 months"


def accuracy_months(accuracy: str) -> int:
    """Extract the month count from an accuracy label like "±6 months"."""
    match = re.search(r"(\d+)\s*months?", accuracy)
    return int(match.group(1)) if match else 0


def calculate_date_range(date: datetime, accuracy: str) -> DateRange:
    """Build the formatted range spanning the accuracy radius around a date."""
    months = accuracy_months(accuracy)
    return DateRange(
        start=format_date(add_months(date, -months)),
        end=format_date(add_months(date, months)),
    )


class EstimateCombiner:
    """Fuses weighted estimates into a single result."""

    def __init__(
        self,
        weighting: Callable[[Sequence[WeightedEstimate]], datetime] = weighted_mean,
        labeler: Callable[[int], str] = confidence_label,
        accuracy_policy: Callable[[str], str] = accuracy_for_confidence,
    ):
        """
        Initialize combiner.

        Args:
            weighting: Reduces estimates to a single date
            labeler: Maps the strongest weight to a confidence label
            accuracy_policy: Maps a confidence label to an accuracy radius
        """
        self.weighting = weighting
        self.labeler = labeler
        self.accuracy_policy = accuracy_policy

    def combine(
        self,
        identifier_estimate: Optional[WeightedEstimate],
        username_estimate: Optional[WeightedEstimate],
        now: Optional[datetime] = None,
    ) -> AgeEstimateResult:
        """
        Combine the user ID and username estimates.

        Args:
            identifier_estimate: Estimate from user ID interpolation
            username_estimate: Estimate from username shape
            now: Reference time for the default result

        Returns:
            AgeEstimateResult; never raises for missing estimates
        """
        estimates = [e for e in (identifier_estimate, username_estimate) if e is not None]

        if not estimates:
            return self._default_result(now or datetime.now(timezone.utc))

        final_date = self.weighting(estimates)
        max_weight = max(e.confidence for e in estimates)
        label = self.labeler(max_weight)
        method = next(e.method for e in estimates if e.confidence == max_weight)
        accuracy = self.accuracy_policy(label)

        return AgeEstimateResult(
            estimated_date=final_date,
            confidence=label,
            method=method,
            accuracy=accuracy,
            date_range=calculate_date_range(final_date, accuracy),
            all_estimates=estimates,
        )

    def _default_result(self, now: datetime) -> AgeEstimateResult:
        """Result used when no signal produced an estimate."""
        return AgeEstimateResult(
            estimated_date=now,
            confidence=DEFAULT_CONFIDENCE,
            method=DEFAULT_METHOD,
            accuracy=DEFAULT_ACCURACY,
            date_range=calculate_date_range(now, DEFAULT_ACCURACY),
        )


_default_combiner = EstimateCombiner()


def estimate_account_age(
    identifier: Union[int, str, None],
    username: Optional[str],
    now: Optional[datetime] = None,
    combiner: Optional[EstimateCombiner] = None,
) -> AgeEstimateResult:
    """
    Estimate account creation date from a user ID and username.

    Args:
        identifier: Numeric user ID, or None/"0" when unresolved
        username: Telegram username
        now: Reference time for the default result
        combiner: Alternative combining policy

    Returns:
        AgeEstimateResult
    """
    combiner = combiner or _default_combiner

    identifier_estimate = None
    if not is_sentinel_identifier(identifier):
        id_date = estimate_from_identifier(identifier)
        if id_date is not None:
            identifier_estimate = WeightedEstimate(id_date, Confidence.HIGH, USER_ID_METHOD)

    username_estimate = None
    username_date = estimate_from_username(username)
    if username_date is not None:
        username_estimate = WeightedEstimate(username_date, Confidence.MEDIUM, USERNAME_METHOD)

    result = combiner.combine(identifier_estimate, username_estimate, now=now)
    logger.debug(
        f"Estimated {result.estimated_date.date()} ({result.confidence}, "
        f"{result.method}) for id={identifier!r} username={username!r}"
    )
    return result
