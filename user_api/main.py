import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from user_api.core.config import Settings, load_settings, validate_runtime_config
from user_api.core.errors import register_exception_handlers
from user_api.database import build_user_table, create_engine_from_settings, ensure_user_table
from user_api.repositories.user_repository import UserRepository
from user_api.routes import auth_routes, user_routes

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    validate_runtime_config(settings)

    engine = create_engine_from_settings(settings)
    user_table = build_user_table(settings.db_tablename)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.db_auto_create:
            try:
                await ensure_user_table(engine, user_table)
            except SQLAlchemyError:
                logger.exception('Database initialization failed. Check DATABASE_URL and credentials.')
        yield
        await engine.dispose()

    app = FastAPI(title='User Admin API', lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.user_repository = UserRepository(engine, user_table)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(auth_routes.router)
    app.include_router(user_routes.router)

    return app
