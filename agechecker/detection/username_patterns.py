"""Username shape analysis for account era estimation."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternRule:
    """A username shape associated with the era it was typically claimed in."""

    name: str
    pattern: re.Pattern
    era: datetime

    def matches(self, username: str) -> bool:
        return self.pattern.fullmatch(username) is not None


def _rule(name: str, pattern: str, year: int, month: int, day: int) -> PatternRule:
    return PatternRule(
        name=name,
        pattern=re.compile(pattern, re.ASCII),
        era=datetime(year, month, day, tzinfo=timezone.utc),
    )


# Order matters: first match wins, so constrained shapes precede catch-alls.
# "generic_short" and "any_short" overlap for names of 3-8 word characters;
# both are kept as calibrated.
USERNAME_RULES: tuple[PatternRule, ...] = (
    _rule("default_handle", r"user\d{7,9}", 2013, 8, 1),
    _rule("letters_with_digits", r"[a-z]{3,8}\d{2,4}", 2014, 6, 1),
    _rule("generic_short", r"\w{3,8}", 2015, 6, 1),
    _rule("any_short", r".{1,8}", 2016, 1, 1),
)


def normalize_username(username: str) -> str:
    """Strip leading "@" markers from a username."""
    return username.lstrip("@")


class UsernamePatternClassifier:
    """Maps a username to the era its shape suggests."""

    def __init__(self, rules: tuple[PatternRule, ...] = USERNAME_RULES):
        self.rules = rules

    def classify(self, username: Optional[str]) -> Optional[PatternRule]:
        """Return the first rule matching the username, or None."""
        if not username:
            return None

        normalized = normalize_username(username)
        for rule in self.rules:
            if rule.matches(normalized):
                logger.debug(f"Username {normalized!r} matched rule {rule.name}")
                return rule
        return None

    def estimate(self, username: Optional[str]) -> Optional[datetime]:
        """
        Estimate creation era from username shape.

        Args:
            username: Telegram username, with or without leading "@"

        Returns:
            Era date of the first matching rule, or None
        """
        rule = self.classify(username)
        return rule.era if rule else None


_default_classifier = UsernamePatternClassifier()


def classify_username(username: Optional[str]) -> Optional[PatternRule]:
    """Classify a username against the default rule list."""
    return _default_classifier.classify(username)


def estimate_from_username(username: Optional[str]) -> Optional[datetime]:
    """Estimate creation era from a username using the default rules."""
    return _default_classifier.estimate(username)
