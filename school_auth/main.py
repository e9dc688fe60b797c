"""
School Auth Functions - Main Application
Teacher signup, username login and admin bulk signup over Supabase
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import structlog

from school_auth import messages
from school_auth.config import settings
from school_auth.exceptions import ConfigurationError, FunctionError
from school_auth.routes import bulk_signup, health, login, signup, teachers
from school_auth.utils.logger import init_logging

if settings.environment != "testing":
    init_logging(settings)

logger = structlog.get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": settings.cors_allow_origin,
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
}


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Teacher signup, username login and admin bulk signup",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.middleware("http")
async def cors_and_logging(request: Request, call_next):
    """Answer preflight requests and attach the CORS headers to every response"""
    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=CORS_HEADERS)

    logger.info("Request received", method=request.method, path=request.url.path)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
    )
    return response


def error_response(status_code: int, error: str, errors=None) -> JSONResponse:
    content = {"success": False, "error": error}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


@app.exception_handler(FunctionError)
async def function_error_handler(request: Request, exc: FunctionError):
    return error_response(exc.status_code, exc.error, exc.errors)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.critical("Missing Supabase configuration", missing=exc.missing, path=request.url.path)
    return error_response(exc.status_code, exc.message, [exc.message])


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        path=request.url.path,
        exc_info=True,
    )
    return error_response(500, messages.GENERAL_FAILURE.format(detail=exc), [str(exc)])


# Register routes
app.include_router(health.router, tags=["Health"])
app.include_router(signup.router, tags=["Signup"])
app.include_router(login.router, tags=["Login"])
app.include_router(bulk_signup.router, tags=["Bulk Signup"])
app.include_router(teachers.router, tags=["Teachers"])


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "school-auth",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "school_auth.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
