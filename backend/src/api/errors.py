"""RFC 7807 Problem Details error response formatting"""

from typing import Optional, Dict, Any, List
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def create_error_response(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Create an RFC 7807 compliant error response

    Args:
        status_code: HTTP status code
        title: Short error title
        detail: Detailed error message
        error_type: Error type slug (defaults to generic type based on status code)
        instance: Request path or identifier
        errors: List of validation errors with field and message
        extra: Additional problem members (e.g. remaining quota)

    Returns:
        JSONResponse with problem details
    """
    # Default error types based on status code
    error_type_map = {
        400: "validation_error",
        404: "not_found",
        500: "internal_server_error"
    }

    if not error_type:
        error_type = error_type_map.get(status_code, "error")

    problem = {
        "type": f"/errors/{error_type}",
        "title": title,
        "status": status_code,
        "detail": detail
    }

    if instance:
        problem["instance"] = instance

    if errors:
        problem["errors"] = errors

    if extra:
        problem.update(extra)

    return JSONResponse(
        status_code=status_code,
        content=problem
    )


def not_found_error(detail: str = "Resource not found", instance: Optional[str] = None) -> JSONResponse:
    """Create a 404 Not Found error response"""
    return create_error_response(
        status_code=status.HTTP_404_NOT_FOUND,
        title="Not Found",
        detail=detail,
        instance=instance
    )


def validation_error(
    detail: str = "Validation failed",
    errors: Optional[List[Dict[str, str]]] = None,
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 400 Validation Error response"""
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail=detail,
        errors=errors,
        instance=instance
    )


def quota_exceeded_error(
    detail: str,
    remaining: int,
    limit: int,
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 400 response for an image batch over the project quota"""
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Image Quota Exceeded",
        detail=detail,
        error_type="quota_exceeded",
        instance=instance,
        extra={"remaining": remaining, "limit": limit}
    )


def internal_server_error(
    detail: str = "An internal server error occurred",
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 500 Internal Server Error response"""
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail=detail,
        instance=instance
    )


def notification_failed_error(
    booking_id: int,
    detail: str = "Booking saved but email failed to send",
    instance: Optional[str] = None
) -> JSONResponse:
    """Create a 500 response for a stored booking whose notification failed"""
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Notification Failed",
        detail=detail,
        error_type="notification_failed",
        instance=instance,
        extra={"saved": True, "booking_id": booking_id}
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400 problem details"""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })

    return validation_error(
        detail="All required fields must be provided",
        errors=errors,
        instance=request.url.path
    )
