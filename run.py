import uvicorn

from ballotbox.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "ballotbox.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
    )
