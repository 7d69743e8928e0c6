import logging
from collections.abc import Sequence
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def format_validation_errors(errors: Sequence[Any]) -> list[dict]:
    # Keep only JSON-safe keys; pydantic's ctx may carry exception objects.
    return [
        {
            'loc': [str(part) for part in error.get('loc', ())],
            'msg': error.get('msg', ''),
            'type': error.get('type', ''),
        }
        for error in errors
    ]


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info('Rejected %s %s: %s', request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': 'Invalid request data', 'errors': format_validation_errors(exc.errors())},
    )


def storage_failure(detail: str) -> HTTPException:
    """Log the active exception and build the generic 500 response for it."""
    logger.exception(detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )
