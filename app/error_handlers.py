from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from domain.errors import CVMatcherError

logger = logging.getLogger(__name__)

def attach_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CVMatcherError)
    async def _domain(request: Request, exc: CVMatcherError):
        if exc.status_code >= 500:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
