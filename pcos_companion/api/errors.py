"""
Mapping of AI client failures to HTTP responses.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..llm.errors import (
    AIClientError, ConfigurationError, EmptyResponseError, FoodNotIdentifiedError,
    MalformedResponseError, RequestInProgressError, ServiceError,
)

STATUS_CODES = {
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ServiceError: status.HTTP_502_BAD_GATEWAY,
    EmptyResponseError: status.HTTP_502_BAD_GATEWAY,
    MalformedResponseError: status.HTTP_502_BAD_GATEWAY,
    RequestInProgressError: status.HTTP_409_CONFLICT,
    FoodNotIdentifiedError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for(error: AIClientError) -> int:
    for error_cls, code in STATUS_CODES.items():
        if isinstance(error, error_cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def ai_client_error_handler(request: Request, exc: AIClientError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content={"success": False, **exc.to_dict()},
    )
