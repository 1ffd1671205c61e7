from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str):
    engine = create_async_engine(url, future=True)
    if engine.dialect.name == "sqlite":
        # SQLite ignores FKs unless asked
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_fk(dbapi_conn, _):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    return engine


def make_sessionmaker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = make_sessionmaker(engine)


async def get_db():
    """One session per request; the connection goes back to the pool on every exit path."""
    async with SessionLocal() as db:
        yield db


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return SessionLocal
