from pathlib import Path
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from logger import get_logger

logger = get_logger()


class _ModelBase:
    def to_dict(self) -> dict:
        """Column values keyed by column name."""
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}


# Create declarative base
Base = declarative_base(cls=_ModelBase)


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """Storage handle: owns the async engine and the session factory."""

    def __init__(self, url: str, echo: bool = False, timeout: float = 5.0):
        self.url = make_url(url)
        connect_args = {}
        self.is_sqlite = self.url.get_backend_name() == "sqlite"
        if self.is_sqlite:
            connect_args["timeout"] = timeout

        # Create async engine
        self.engine = create_async_engine(url, echo=echo, connect_args=connect_args)
        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)

        # Create async session factory
        self.async_session = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_all(self) -> bool:
        """Create every table if absent. Returns False instead of raising on failure."""
        from models import movie, person, roles, movie_person  # noqa: F401

        try:
            if self.is_sqlite and self.url.database and self.url.database != ":memory:":
                Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error creating tables: {e}", exc_info=True)
            return False
        logger.info("Tables created successfully!")
        return True

    async def get_session(self) -> AsyncSession:
        """Function to get a DB session"""
        async with self.async_session() as session:
            yield session

    async def dispose(self):
        await self.engine.dispose()
