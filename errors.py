# errors.py
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """저장소/업로드 계층 공통 예외. 라우터 경계에서 상태코드로 변환된다."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ContentError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ContentError):
    status_code = status.HTTP_404_NOT_FOUND


class PayloadTooLarge(ContentError):
    status_code = status.HTTP_400_BAD_REQUEST


class StorageUnavailable(ContentError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str, details: Any = None) -> dict:
    return {"message": message, "details": details}


async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(error_body(exc.message, exc.details), status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "Invalid request body"
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(error_body(message, details), status_code=status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # 최후 보루: 어떤 라우터에서도 처리하지 못한 예외
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        error_body(str(exc) or "Internal Server Error", getattr(exc, "details", None) or repr(exc)),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContentError, content_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
