"""Results endpoints."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ballotbox.api.deps import get_db
from ballotbox.core.rate_limit import limiter, rate_limiting_disabled, RATE_LIMITS
from ballotbox.schemas import ResultsResponse
from ballotbox.services.results import get_results

router = APIRouter()


@router.get("/resultados", response_model=ResultsResponse)
@limiter.limit(RATE_LIMITS["results"], exempt_when=rate_limiting_disabled)
def results_endpoint(request: Request, db: Session = Depends(get_db)) -> ResultsResponse:
    """
    Return the committed tally of every option.

    Example:
        Response (200):
            {
                "total": 2,
                "resultados": [
                    {"id": 1, "nombre": "PRIMER AÑO", "cantidad": 0},
                    {"id": 2, "nombre": "SEGUNDO AÑO", "cantidad": 2}
                ]
            }

    Note:
        Options are ordered by ascending id. Votes still inside an
        uncommitted transaction are never counted.
    """
    return ResultsResponse(**get_results(db))
