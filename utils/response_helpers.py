from typing import Any, Optional

from fastapi.responses import JSONResponse

from exceptions.custom_exceptions import BaseAppException


def error_response(message: str, status_code: int = 500, details: Optional[Any] = None):
    content = {"success": False, "data": None, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(content=content, status_code=status_code)


def app_error_response(exc: BaseAppException):
    """Render a ValidationException (400) or StorageException (500)."""
    return error_response(exc.message, status_code=exc.status_code)
