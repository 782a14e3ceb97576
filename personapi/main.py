import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from personapi.api.routes.pages import router as pages_router
from personapi.api.routes.persons import router as persons_router
from personapi.core.config import Settings, settings as default_settings
from personapi.core.exceptions import PersonStoreError, StoreLockError
from personapi.core.logging_config import configure_logging
from personapi.schemas.person import Person
from personapi.services.storage.person_store import DEFAULT_SEED, PersonStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    count = await app.state.store.count()
    logger.info(f"{app.title} started with {count} persons")
    yield
    logger.info(f"{app.title} shutting down")


async def person_store_error_handler(request: Request, exc: PersonStoreError):
    if isinstance(exc, StoreLockError):
        logger.error(f"{request.method} {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or invalid request bodies are a 400, bad path params stay 422"""
    errors = exc.errors()
    if any(error.get("loc", ())[:1] == ("body",) for error in errors):
        messages = "; ".join(error.get("msg", "") for error in errors)
        logger.warning(f"{request.method} {request.url.path}: bad request: {messages}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": f"Invalid request body: {messages}"},
        )
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(errors)},
    )


def create_app(
    settings: Optional[Settings] = None, seed: Optional[Iterable[Person]] = None
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = PersonStore(DEFAULT_SEED if seed is None else seed)

    app.add_exception_handler(PersonStoreError, person_store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(pages_router)
    app.include_router(persons_router)
    return app


app = create_app()
