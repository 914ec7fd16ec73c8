import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from catalog_service.adapters.primary.api.router import router as item_router
from catalog_service.adapters.secondary.database.category_registry import SQLCategoryRegistry
from catalog_service.adapters.secondary.database.config import init_db, make_engine, make_session_factory
from catalog_service.adapters.secondary.database.sql_repository import SQLItemRepository
from catalog_service.adapters.secondary.storage.image_store import FileImageStore
from catalog_service.application.services import ItemService
from catalog_service.config.settings import Settings
from catalog_service.core.domain.errors import NotFound, PersistenceError, ValidationError
from catalog_service.core.logging_config import setup_logging
from catalog_service.core.ports.repository import ImageStorePort

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    image_store: Optional[ImageStorePort] = None,
) -> FastAPI:
    """
    Build the application with its storage wired in.

    ``session_factory`` and ``image_store`` override the ones derived from
    ``settings``; tests use this to run against in-memory backends.
    """
    settings = settings or Settings.from_env()

    if session_factory is None:
        engine = make_engine(settings.database_url)
        init_db(engine)
        session_factory = make_session_factory(engine)
    if image_store is None:
        image_store = FileImageStore(settings.image_dir, placeholder=settings.placeholder_image)

    repository = SQLItemRepository(session_factory, SQLCategoryRegistry())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, log_dir=settings.log_dir, log_format=settings.log_format)
        yield

    app = FastAPI(title="Catalog Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.item_service = ItemService(repository, image_store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.front_url],
        allow_methods=["GET", "PUT", "POST", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(item_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"message": "Item not found"})

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "internal server error"})


def run():
    settings = Settings.from_env()
    uvicorn.run(
        "catalog_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
