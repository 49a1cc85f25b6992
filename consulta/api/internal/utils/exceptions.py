# Third-party imports
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import sentry_sdk
from starlette.exceptions import HTTPException as StarletteHTTPException

# Local application imports
from consulta.core.monitoring.logging import get_request_logger
from consulta.schemas.common import BaseResponse
from consulta.services.consultations.validation_services import ConsultationRulesError
from consulta.services.locations.geocode_services import LocationIntegrityError

VALIDATION_ERROR_CODE = "validation_error"
LOCATION_INTEGRITY_ERROR_CODE = "location_integrity_error"

# Spanish messages for the most common schema errors
VALIDATION_MESSAGES = {
    "missing": "Campo requerido",
    "enum": "Valor no permitido",
    "literal_error": "Valor no permitido",
}

# Request sections stripped from error locations
LOCATION_SECTIONS = {"body", "query", "path", "header", "cookie"}


def format_validation_errors(errors: list[dict]) -> dict[str, str]:
    """Field path -> first message for each invalid field."""
    details: dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in LOCATION_SECTIONS:
            loc = loc[1:]
        field = ".".join(loc) or "body"

        message = VALIDATION_MESSAGES.get(error.get("type", ""), error.get("msg", ""))
        # Remove "Value error, " prefix added by pydantic for custom validators
        val_error_prefix = "Value error, "
        if message.startswith(val_error_prefix):
            message = message[len(val_error_prefix) :]

        details.setdefault(field, message)
    return details


def register_exception_handlers(app: FastAPI) -> None:
    # Map specific HTTP status codes to custom error codes
    error_map = {
        400: "bad_request",
        401: "unauthorized",
        403: "forbidden",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        422: "unprocessable_entity",
        429: "too_many_requests",
        500: "internal_server_error",
    }

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,  # noqa
        exc: HTTPException,
    ) -> JSONResponse:
        error_code = error_map.get(exc.status_code, "error")
        # Ensure the detail is a string; if not, convert it
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        response = BaseResponse.failure(code=error_code, message=detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        details = format_validation_errors(list(exc.errors()))
        get_request_logger(__name__, request).info(f"Request validation failed: fields={sorted(details)}")
        response = BaseResponse.failure(
            code=VALIDATION_ERROR_CODE,
            message="Datos inválidos",
            details=details,
        )
        return JSONResponse(status_code=400, content=response.model_dump())

    @app.exception_handler(ConsultationRulesError)
    async def consultation_rules_exception_handler(
        request: Request,
        exc: ConsultationRulesError,
    ) -> JSONResponse:
        get_request_logger(__name__, request).info(f"Consultation rejected: fields={sorted(exc.errors)}")
        response = BaseResponse.failure(
            code=VALIDATION_ERROR_CODE,
            message="Datos inválidos",
            details=exc.errors,
        )
        return JSONResponse(status_code=400, content=response.model_dump())

    @app.exception_handler(LocationIntegrityError)
    async def location_integrity_exception_handler(
        request: Request,
        exc: LocationIntegrityError,
    ) -> JSONResponse:
        get_request_logger(__name__, request).warning(f"Location integrity rejected: {exc.field} - {exc.message}")
        response = BaseResponse.failure(
            code=LOCATION_INTEGRITY_ERROR_CODE,
            message=exc.message,
            details=exc.details,
        )
        return JSONResponse(status_code=400, content=response.model_dump())

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        get_request_logger(__name__, request).exception(f"Unhandled error on {request.method} {request.url.path}")
        # Capture the exception in Sentry for monitoring
        sentry_sdk.capture_exception(exc)
        response = BaseResponse.failure(
            code="internal_server_error",
            message="Ocurrió un error inesperado. Intente de nuevo más tarde.",
        )
        return JSONResponse(status_code=500, content=response.model_dump())
