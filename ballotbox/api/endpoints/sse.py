"""Server-Sent Events endpoints."""
import asyncio
import json

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from ballotbox.core.constants import SSE_MAX_CONSECUTIVE_ERRORS
from ballotbox.core.logging_config import get_logger
from ballotbox.services.results import get_results

logger = get_logger(__name__)
router = APIRouter()


async def event_generator(request: Request, data_func, interval: float = 3):
    """
    Generic SSE event generator.

    Args:
        request: FastAPI request object to check for client disconnect
        data_func: Blocking function that returns the data to send; it runs
            in the threadpool so a slow query never stalls the event loop
        interval: Seconds between updates
    """
    consecutive_errors = 0

    try:
        while True:
            # Check if client disconnected
            if await request.is_disconnected():
                break

            try:
                data = await run_in_threadpool(data_func)
                yield f"data: {json.dumps(data, ensure_ascii=False)}\n\n"
                consecutive_errors = 0
            except SQLAlchemyError as e:
                # Database errors can be transient; skip this update and retry
                consecutive_errors += 1
                logger.warning(
                    "sse_database_error",
                    attempt=consecutive_errors,
                    max_attempts=SSE_MAX_CONSECUTIVE_ERRORS,
                    error=str(e),
                )
                if consecutive_errors >= SSE_MAX_CONSECUTIVE_ERRORS:
                    yield f"event: error\ndata: {json.dumps({'error': 'Service temporarily unavailable'})}\n\n"
                    break
            except Exception as e:
                logger.exception("sse_unexpected_error", error=str(e))
                yield f"event: error\ndata: {json.dumps({'error': 'Internal error'})}\n\n"
                break

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("sse_stream_cancelled")
        raise


@router.get("/resultados/stream")
async def results_stream(request: Request):
    """
    Stream the results snapshot as Server-Sent Events.

    Each event carries the same body as GET /resultados and is pushed every
    SSE_RESULTS_INTERVAL seconds until the client disconnects.
    """
    database = request.app.state.database
    interval = request.app.state.settings.SSE_RESULTS_INTERVAL

    def fetch_results():
        with database.session() as db:
            return get_results(db)

    return StreamingResponse(
        event_generator(request, fetch_results, interval=interval),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )
