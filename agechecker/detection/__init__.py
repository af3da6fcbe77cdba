"""Account age estimation module."""

from .id_interpolator import IdentifierInterpolator, estimate_from_identifier
from .username_patterns import UsernamePatternClassifier, estimate_from_username
from .combiner import EstimateCombiner, estimate_account_age
from .account_lookup import AccountLookup

__all__ = [
    "IdentifierInterpolator",
    "estimate_from_identifier",
    "UsernamePatternClassifier",
    "estimate_from_username",
    "EstimateCombiner",
    "estimate_account_age",
    "AccountLookup",
]
