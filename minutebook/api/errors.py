"""Maps domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from minutebook.errors import InvalidStateError, NotAllowedError, NotAuthorizedError


async def _conflict(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def _forbidden(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=403, content={"detail": str(exc)})


async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": errors})


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers for domain errors.

    Invalid state and not allowed map to 409, not authorized to 403,
    document validation errors to 422.
    """
    app.add_exception_handler(InvalidStateError, _conflict)
    app.add_exception_handler(NotAllowedError, _conflict)
    app.add_exception_handler(NotAuthorizedError, _forbidden)
    app.add_exception_handler(ValidationError, _invalid)
