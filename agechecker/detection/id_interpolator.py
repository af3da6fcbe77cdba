"""User ID to creation date interpolation."""

import logging
from datetime import datetime
from typing import Optional, Union

from .anchors import ANCHOR_TABLE, CALIBRATION_CUTOFF, AnchorPoint, validate_anchor_table

logger = logging.getLogger(__name__)

SENTINEL_IDENTIFIERS = {"", "0"}


def is_sentinel_identifier(identifier: Union[int, str, None]) -> bool:
    """Return True if the identifier means "no real account was resolved"."""
    if identifier is None:
        return True
    return str(identifier).strip() in SENTINEL_IDENTIFIERS


def parse_identifier(identifier: Union[int, str, None]) -> Optional[int]:
    """Parse a user ID into a non-negative integer, or None if malformed."""
    if identifier is None or isinstance(identifier, bool):
        return None

    if isinstance(identifier, int):
        value = identifier
    elif isinstance(identifier, str):
        text = identifier.strip()
        if not text.isascii() or not text.isdigit():
            return None
        value = int(text)
    else:
        return None

    return value if value >= 0 else None


class IdentifierInterpolator:
    """Estimates account creation date by interpolating between ID anchors."""

    def __init__(
        self,
        anchors: tuple[AnchorPoint, ...] = ANCHOR_TABLE,
        cutoff: datetime = CALIBRATION_CUTOFF,
    ):
        """
        Initialize interpolator.

        Args:
            anchors: Ordered (ID, date) checkpoints
            cutoff: Latest date an estimate may resolve to
        """
        validate_anchor_table(anchors)
        self.anchors = anchors
        self.cutoff = cutoff

    def estimate(self, identifier: Union[int, str, None]) -> Optional[datetime]:
        """
        Estimate creation date from a user ID.

        Args:
            identifier: Numeric user ID, as int or decimal string

        Returns:
            Interpolated date, or None if the ID is malformed or outside
            the modeled range
        """
        try:
            user_id = parse_identifier(identifier)
            if user_id is None:
                logger.debug(f"Unparseable user ID: {identifier!r}")
                return None

            bracket = self._find_bracket(user_id)
            if bracket is None:
                logger.debug(f"User ID {user_id} outside anchor range")
                return None

            lo, hi = bracket
            # Integer differences stay exact; only the reduced ratio is a float
            fraction = (user_id - lo.identifier) / (hi.identifier - lo.identifier)
            estimated = lo.date + (hi.date - lo.date) * fraction
        except (ArithmeticError, ValueError, TypeError) as e:
            logger.debug(f"Error estimating date from user ID {identifier!r}: {e}")
            return None

        return min(estimated, self.cutoff)

    def _find_bracket(self, user_id: int) -> Optional[tuple[AnchorPoint, AnchorPoint]]:
        """Find the adjacent anchors with lo.identifier <= user_id < hi.identifier."""
        for lo, hi in zip(self.anchors, self.anchors[1:]):
            if lo.identifier <= user_id < hi.identifier:
                return lo, hi
        return None


_default_interpolator = IdentifierInterpolator()


def estimate_from_identifier(identifier: Union[int, str, None]) -> Optional[datetime]:
    """Estimate creation date from a user ID using the default anchor table."""
    return _default_interpolator.estimate(identifier)
