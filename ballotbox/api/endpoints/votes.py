"""Vote endpoints."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ballotbox.api.deps import get_db, get_identity, get_max_option_id
from ballotbox.core.constants import MSG_VOTE_REGISTERED
from ballotbox.core.rate_limit import limiter, rate_limiting_disabled, RATE_LIMITS
from ballotbox.schemas import ErrorResponse, SuccessResponse, VoteRequest
from ballotbox.services.vote import cast_vote

router = APIRouter()


@router.post(
    "/votar",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "optionId is not a valid option"},
        409: {"model": ErrorResponse, "description": "This client already voted"},
        500: {"model": ErrorResponse, "description": "The vote could not be committed"},
    },
)
@limiter.limit(RATE_LIMITS["vote"], exempt_when=rate_limiting_disabled)
def vote_endpoint(
    request: Request,
    vote_request: VoteRequest,
    db: Session = Depends(get_db),
    identity: str = Depends(get_identity),
    max_option_id: int = Depends(get_max_option_id),
) -> SuccessResponse:
    """
    Cast the caller's single vote.

    The caller is identified by the first X-Forwarded-For address, or the
    connection's peer address when no proxy header is present. Each
    identity can vote once; the vote and the identity are recorded in one
    transaction.

    Example:
        Request:
            POST /votar
            {"optionId": 3}

        Response (200):
            {"ok": true, "message": "Voto registrado"}

        Response (400):
            {"ok": false, "error": "optionId inválido"}

        Response (409):
            {"ok": false, "error": "Este dispositivo/IP ya votó"}

    Rate Limit:
        RATE_LIMIT_VOTE per client address (default 30 per minute)
    """
    cast_vote(db, vote_request.optionId, identity, max_option_id)
    return SuccessResponse(message=MSG_VOTE_REGISTERED)
