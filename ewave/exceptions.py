import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from ewave.services.exceptions import ClientInputError, MarketplaceError, StorageFault

logger = logging.getLogger(__name__)

# Endpoints that answer server faults with a JSON body instead of text
JSON_ERROR_PATHS = ("/vehicles",)


async def marketplace_exception_handler(request: Request, exc: MarketplaceError):
    if isinstance(exc, StorageFault) and request.url.path in JSON_ERROR_PATHS:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return PlainTextResponse(ClientInputError.default_message, status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return PlainTextResponse(StorageFault.default_message, status_code=500)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(MarketplaceError, marketplace_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
