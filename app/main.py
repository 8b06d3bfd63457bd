import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.auth import CognitoTokenVerifier
from app.config import REPOSITORY_MONGODB, Settings
from app.database import create_client, create_user_repository
from app.logging_config import configure_logging
from app.routers import list_router

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": jsonable_encoder(exc.errors())})


async def store_exception_handler(request: Request, exc: PyMongoError):
    logger.exception(f"Store failure on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"message": str(exc), "code": getattr(exc, "code", None)},
    )


def create_app(
    settings: Settings | None = None, client: AsyncIOMotorClient | None = None
) -> FastAPI:
    """Build the API. `client` overrides the motor client built from settings."""
    settings = settings or Settings.from_env()
    configure_logging(settings)

    if client is None and settings.user_repository == REPOSITORY_MONGODB:
        client = create_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if client is not None:
            client.close()

    docs = {}
    if settings.is_prod:
        docs = {"docs_url": None, "redoc_url": None, "openapi_url": None}
    app = FastAPI(title="To-Do List API", lifespan=lifespan, **docs)
    app.state.settings = settings
    app.state.user_repository = create_user_repository(settings, client)
    app.state.token_verifier = CognitoTokenVerifier(settings)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PyMongoError, store_exception_handler)

    app.include_router(list_router.router, prefix="/v1/list", tags=["List"])

    # Root health
    @app.get("/")
    async def read_root():
        return {"status": "ok", "environment": settings.environment}

    logger.info(f"Application created, environment={settings.environment}")
    return app
