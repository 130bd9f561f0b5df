# routes/responses.py
import logging
from contextlib import contextmanager
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from errors import (
    InvalidQuestionIdError,
    QuestionBankError,
    QuestionValidationError,
    StepValidationError,
    pydantic_error_details,
)

logger = logging.getLogger(__name__)


def success(message: str, data: Any = None, pagination: Optional[dict] = None) -> dict:
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    return body


def error_response(status_code: int, error: str, details: Optional[List[dict]] = None) -> JSONResponse:
    body = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@contextmanager
def internal_error(message: str):
    """Turn anything unexpected into a 500 carrying only ``message``."""
    try:
        yield
    except (QuestionBankError, StarletteHTTPException):
        raise
    except Exception:
        logger.exception(message)
        raise HTTPException(status_code=500, detail=message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "Validation failed", pydantic_error_details(exc))


async def question_validation_handler(request: Request, exc: QuestionValidationError):
    return error_response(400, exc.message, exc.details)


async def step_validation_handler(request: Request, exc: StepValidationError):
    return error_response(400, exc.message)


async def invalid_id_handler(request: Request, exc: InvalidQuestionIdError):
    return error_response(400, "Invalid question ID format")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(QuestionValidationError, question_validation_handler)
    app.add_exception_handler(StepValidationError, step_validation_handler)
    app.add_exception_handler(InvalidQuestionIdError, invalid_id_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
