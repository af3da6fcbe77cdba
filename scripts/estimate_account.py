#!/usr/bin/env python3
"""Estimate account creation dates offline, without calling the Bot API."""

import argparse
import json
import logging

from agechecker.detection.combiner import estimate_account_age
from agechecker.detection.formatting import format_date, human_age

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def estimate(user_id: str, username: str) -> dict:
    """Run the estimation core for one account."""
    result = estimate_account_age(user_id, username)
    return {
        "user_id": user_id,
        "username": username,
        "estimated_creation_date": format_date(result.estimated_date),
        "estimated_creation_date_range": result.date_range.to_dict(),
        "account_age": human_age(result.estimated_date),
        "estimation_confidence": result.confidence,
        "estimation_method": result.method,
        "accuracy_range": result.accuracy,
        "all_estimates": [e.to_dict() for e in result.all_estimates],
    }


def main():
    parser = argparse.ArgumentParser(description="Estimate Telegram account age")
    parser.add_argument("--user-id", default="0", help="Numeric user ID (0 if unknown)")
    parser.add_argument("--username", default=None, help="Telegram username")
    args = parser.parse_args()

    if args.user_id == "0" and not args.username:
        logger.warning("Neither user ID nor username given; result will be the default estimate")

    print(json.dumps(estimate(args.user_id, args.username), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
