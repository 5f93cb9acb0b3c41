from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine as sa_create_async_engine

from contact_identity.config.settings import get_settings

_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Return a cached async engine instance."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = sa_create_async_engine(
            settings.database_url, echo=settings.sql_echo, pool_pre_ping=True
        )
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections; called on application shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
