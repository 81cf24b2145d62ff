from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
from src.app.use_cases.password_reset.errors import INVALID_REQUEST
import logging

logger = logging.getLogger(__name__)

REQUEST_BODY_REQUIRED = "Request body is required"


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error on {request.url.path}: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # Only locations: the raw input may contain the new password
    locations = [error.get("loc") for error in exc.errors()]
    logger.warning(f"Malformed request body on {request.url.path}: {locations}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"code": INVALID_REQUEST, "message": REQUEST_BODY_REQUIRED},
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Password Reset API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
