"""
API Error Handling

Every error body is an ErrorResponse envelope.

Status mapping:
- 400: malformed proof input (empty path, bad digest, index out of range)
- 500: configuration problems and anything unexpected

A proof that simply does not match is NOT an error; /verify reports it
as ok=false with status 200.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorDetail, ErrorResponse
from core.schemas.errors import CbmtError, CbmtException, InvalidInputException


class APIError(Exception):
    """A CbmtError bound to an HTTP status."""

    def __init__(self, error: CbmtError, status_code: int = 400):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_exception(cls, exc: CbmtException) -> "APIError":
        status_code = 400 if isinstance(exc, InvalidInputException) else 500
        return cls(exc.to_error_model(), status_code)

    def to_response(self) -> JSONResponse:
        body = ErrorResponse(error=ErrorDetail(**self.error.model_dump()))
        return JSONResponse(status_code=self.status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return exc.to_response()


async def cbmt_error_handler(request: Request, exc: CbmtException) -> JSONResponse:
    """Core exceptions that escaped a route."""
    return APIError.from_exception(exc).to_response()


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = CbmtError(
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        details={"type": type(exc).__name__},
    )
    return APIError(error, status_code=500).to_response()
