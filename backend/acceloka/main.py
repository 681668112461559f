# backend/acceloka/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from acceloka.db import engine
from acceloka.domain.errors import DomainError, ErrorCode
from acceloka.logging_config import configure_logging
from acceloka.models import Base
from acceloka.redis_tools import redis
from acceloka.routes.booking import router as bookings_router
from acceloka.routes.tickets import router as tickets_router
from acceloka.schemas import ProblemDetails

CREATE_TABLES_ON_STARTUP = os.getenv("CREATE_TABLES_ON_STARTUP", "1") == "1"

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.TICKET_NOT_FOUND: 404,
    ErrorCode.BOOKING_NOT_FOUND: 404,
    ErrorCode.PERSISTENCE_FAILURE: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if CREATE_TABLES_ON_STARTUP:
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            logger.exception("Could not create tables on startup; relying on migrations")
    yield
    if redis is not None:
        await redis.aclose()
    await engine.dispose()


app = FastAPI(title="Acceloka - Ticket Booking", lifespan=lifespan)

app.include_router(tickets_router)
app.include_router(bookings_router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    problem = ProblemDetails(
        title=exc.title,
        status=status_code,
        detail=exc.message,
        instance=request.url.path,
    )
    return JSONResponse(problem.model_dump(), status_code=status_code, media_type="application/problem+json")


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
