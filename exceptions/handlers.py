import structlog
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from exceptions.custom_exceptions import BaseAppException
from utils.response_helpers import app_error_response, error_response

logger = structlog.get_logger(__name__)

def setup_exception_handlers(app):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning("http_exception", path=request.url.path, detail=exc.detail)
        return error_response(exc.detail, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("request_validation_error", path=request.url.path, errors=exc.errors())
        return error_response(
            "Invalid or missing request fields",
            status_code=422,
            details=jsonable_errors(exc),
        )

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException):
        log = logger.error if exc.status_code >= 500 else logger.info
        log("app_exception", path=request.url.path, status_code=exc.status_code, error=exc.message)
        return app_error_response(exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=True)
        return error_response("Something went wrong on the server", status_code=500)


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry exception instances that JSONResponse cannot encode
    return [
        {key: value for key, value in err.items() if key != "ctx"}
        for err in exc.errors()
    ]
