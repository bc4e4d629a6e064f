"""Translation of lifecycle rejections into HTTP responses."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from dispatch.lifecycle.errors import (
    ActorNotFound,
    DriverNotApproved,
    DriverNotFound,
    IllegalTransition,
    ItemNotApproved,
    ItemNotFound,
    LifecycleError,
    MissingParameter,
    NotPending,
    OrderNotFound,
    OutOfStock,
    StaleOrder,
    StockItemExists,
    Unauthorized,
    UserNotFound,
)

STATUS_CODES: dict[type[LifecycleError], int] = {
    IllegalTransition: status.HTTP_409_CONFLICT,
    NotPending: status.HTTP_409_CONFLICT,
    StaleOrder: status.HTTP_409_CONFLICT,
    StockItemExists: status.HTTP_409_CONFLICT,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    OrderNotFound: status.HTTP_404_NOT_FOUND,
    ActorNotFound: status.HTTP_404_NOT_FOUND,
    UserNotFound: status.HTTP_404_NOT_FOUND,
    DriverNotFound: status.HTTP_404_NOT_FOUND,
    ItemNotFound: status.HTTP_404_NOT_FOUND,
    DriverNotApproved: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ItemNotApproved: status.HTTP_422_UNPROCESSABLE_ENTITY,
    OutOfStock: status.HTTP_422_UNPROCESSABLE_ENTITY,
    MissingParameter: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def error_body(error: LifecycleError) -> dict[str, Any]:
    """JSON body describing a rejection."""
    body: dict[str, Any] = {"error": error.code, "detail": error.message}
    if isinstance(error, OutOfStock):
        body["available"] = error.available
    return body


async def lifecycle_error_handler(request: Request, exc: LifecycleError) -> JSONResponse:
    """Exception handler registered on the app for every LifecycleError."""
    status_code = STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content=error_body(exc))
