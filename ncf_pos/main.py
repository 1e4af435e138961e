import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .config import settings
from .routes import api_router
from .services.exceptions import (
    ConcurrencyConflict,
    NotFoundError,
    PersistenceError,
    ServiceError,
    ValidationError,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_STATUS_BY_CLASS: dict[type[ServiceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConcurrencyConflict: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _status_for(exc: ServiceError) -> int:
    for cls in type(exc).mro():
        if cls in _STATUS_BY_CLASS:
            return _STATUS_BY_CLASS[cls]
    return status.HTTP_400_BAD_REQUEST


app = FastAPI(title="ncf_pos")

app.include_router(api_router)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=_status_for(exc), content={"detail": str(exc)})


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "ok"}
