"""Main API router."""
from fastapi import APIRouter

from ballotbox.api.endpoints import results, sse, votes

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(results.router, tags=["Results"])
api_router.include_router(sse.router, tags=["SSE"])
api_router.include_router(votes.router, tags=["Votes"])
