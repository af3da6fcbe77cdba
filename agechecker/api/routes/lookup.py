"""Account age lookup endpoints."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from agechecker.api import dependencies

logger = logging.getLogger(__name__)
router = APIRouter()


class DateRangeResponse(BaseModel):
    """Formatted bounds of the estimate."""

    start: str
    end: str


class EstimateDetail(BaseModel):
    """A single contributing estimate."""

    date: str
    confidence: int
    method: str


class EstimationDetails(BaseModel):
    """Transparency block listing every contributing estimate."""

    all_estimates: list[EstimateDetail]
    note: str


class UserAgeResponse(BaseModel):
    """Response model for a username lookup."""

    username: str
    nickname: str
    avatar: str
    followers: int
    total_likes: int
    verified: bool
    description: str
    region: str
    user_id: str
    first_name: str
    last_name: str
    estimated_creation_date: str
    estimated_creation_date_range: DateRangeResponse
    account_age: str
    estimation_confidence: str
    estimation_method: str
    accuracy_range: str
    estimation_details: EstimationDetails


class ErrorResponse(BaseModel):
    """Response model for failed lookups."""

    error: str
    details: str


@router.get(
    "/{username}",
    response_model=UserAgeResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_user_age(username: str):
    """
    Estimate when a Telegram account was created.

    Resolves the username through the Bot API when possible and falls
    back to username-pattern estimation otherwise. A leading "@" is
    accepted and ignored.
    """
    try:
        account_lookup = dependencies.get_account_lookup()
        result = await account_lookup.lookup(username)
        return result.to_response()

    except Exception as e:
        logger.exception(f"API Error for {username}: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to fetch user info from Telegram API",
                "details": str(e),
            },
        )
