from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from constants import ALLOWED_ORIGINS
from errors import CouncilError
from logging_config import get_logger
from routers.auth import auth_router
from routers.conversations import conversations_router
from routers.health import health_router
from routers.messages import messages_router

logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="council-chat")

    # Tokens travel in the Authorization header, never in cookies
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(CouncilError)
    async def council_error_handler(request: Request, exc: CouncilError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}", exc_info=exc)
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"{request.method} {request.url.path} -> 400 malformed request at {[e.get('loc') for e in exc.errors()]}")
        return JSONResponse(status_code=400, content={"detail": "Malformed request"})

    app.include_router(auth_router)
    app.include_router(conversations_router)
    app.include_router(messages_router)
    app.include_router(health_router)

    logger.info("FastAPI application initialized")
    return app


app = create_app()
