# app/core/errors.py
"""
Application error taxonomy and the JSON handlers that render it.

Every error leaves the API as ``{"error": "<mensaje>"}``; the status code
comes from the exception class.  Pydantic request validation errors are
folded into the same shape with a 400 so clients only ever see one error
format.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    message = "Error interno del servidor"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Valor inválido"


class InvalidTicketIdError(ValidationError):
    message = "ID de ticket inválido"


class DuplicateTicketNumberError(AppError):
    status_code = 400
    message = "El número de ticket ya existe"


class TicketNotFoundError(AppError):
    status_code = 404
    message = "Ticket no encontrado"


class StoreError(AppError):
    status_code = 500


# pydantic error type -> message prefix
_VALIDATION_MESSAGES = {
    "missing": "Campo requerido",
    "required_field": "Campo requerido",
    "string_too_short": "Campo requerido",
    "invalid_date": "Fecha inválida",
    "negative_cost": "Costo inválido",
}


def describe_validation_error(errors) -> str:
    """Turn pydantic errors into one display message.

    A missing required field is reported ahead of any other problem; otherwise
    the first error in field order wins.
    """
    if not errors:
        return ValidationError.message
    first = next(
        (e for e in errors if _VALIDATION_MESSAGES.get(e.get("type")) == "Campo requerido"),
        errors[0],
    )
    if first.get("type") == "json_invalid":
        return "Cuerpo de la solicitud inválido"
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not loc:
        return "Cuerpo de la solicitud inválido"
    prefix = _VALIDATION_MESSAGES.get(first.get("type", ""), ValidationError.message)
    return f"{prefix}: {loc[-1]}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": AppError.message}, status_code=500)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc.errors())
    logger.warning("Invalid request %s %s: %s", request.method, request.url.path, message)
    return JSONResponse({"error": message}, status_code=400)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
