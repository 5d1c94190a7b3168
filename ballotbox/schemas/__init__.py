"""Pydantic schemas for request/response validation."""
from ballotbox.schemas.vote import VoteRequest
from ballotbox.schemas.results import OptionResult, ResultsResponse
from ballotbox.schemas.common import SuccessResponse, ErrorResponse

__all__ = [
    "VoteRequest",
    "OptionResult",
    "ResultsResponse",
    "SuccessResponse",
    "ErrorResponse",
]
