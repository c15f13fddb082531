import logging

from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from user_api.core.config import Settings

logger = logging.getLogger(__name__)


def build_user_table(table_name: str, metadata: MetaData | None = None) -> Table:
    """Describe the user table; its name is deployment configuration."""
    return Table(
        table_name,
        metadata or MetaData(),
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(255), nullable=False),
        Column("email", String(255), nullable=False, index=True),
        Column("phone", String(50)),
        Column("password", String(255)),  # bcrypt hash, null for admin-created rows
        Column("role", String(50), nullable=False),
    )


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    engine_options = {"pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        engine_options["pool_size"] = settings.db_pool_size
    return create_async_engine(settings.database_url, **engine_options)


async def ensure_user_table(engine: AsyncEngine, table: Table) -> None:
    async with engine.begin() as connection:
        await connection.run_sync(table.metadata.create_all, tables=[table], checkfirst=True)
    logger.info("Ensured user table %r exists", table.name)
