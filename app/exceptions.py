from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    status_code_default = 500

    def __init__(self, detail: str, status_code: int = None):
        super().__init__(status_code=status_code or self.status_code_default, detail=detail)

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(APIException):
    """Missing or malformed booking input."""
    status_code_default = 400


class NotFoundError(APIException):
    status_code_default = 404


class PersistenceError(APIException):
    """The appointments document could not be written."""
    status_code_default = 500


class InternalError(APIException):
    status_code_default = 500


def create_error_response(message: str) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "message": message,
    }


def create_success_response(data=None, message: str = None) -> dict:
    """Create a standardized success response"""
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException (and the APIException family) as an error envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail)),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content=create_error_response("Invalid appointment request"),
    )
