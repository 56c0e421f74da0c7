"""
Database engine and session management.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from waltz.models.schema import Base
from waltz.utils.logging import logger
from waltz.config.settings import settings, DatabaseConfig


class Database:
    """
    Relational store connection manager

    Handles connection pooling, session management, and configuration.
    DAOs are handed ``engine`` and open their own short-lived connections.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None, engine: Optional[Engine] = None):
        """
        Initialize database connection

        Args:
            config: Database configuration (defaults to env vars)
            engine: Pre-built engine (tests pass an in-memory SQLite engine)
        """
        self.config = config or DatabaseConfig()

        if engine is None:
            logger.info(f"Connecting to database: {self.config.describe()}")
            engine = self._create_engine(self.config.get_connection_string())
        self.engine = engine

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

        self._test_connection()

    @staticmethod
    def _create_engine(connection_string: str) -> Engine:
        if connection_string.startswith("sqlite"):
            return create_engine(connection_string, echo=settings.db_echo)
        return create_engine(
            connection_string,
            pool_pre_ping=True,
            pool_recycle=settings.db_pool_recycle,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.db_echo,
        )

    def _test_connection(self):
        """Test database connection on initialization"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
                logger.success(f"Connected to database ({self.engine.dialect.name})")
        except Exception as e:
            logger.error(f"Failed to connect to database: {e}")
            raise

    def create_schema(self) -> None:
        """Create any missing tables (local development and tests)"""
        Base.metadata.create_all(self.engine)
        logger.info(f"Ensured schema: {len(Base.metadata.tables)} tables")

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations

        Usage:
            with db.session_scope() as session:
                session.add(record)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            session.close()


# Global database instance (lazy initialization)
_db_instance: Optional[Database] = None


def get_database() -> Database:
    """Get or create global database instance"""
    global _db_instance
    if _db_instance is None:
        _db_instance = Database()
    return _db_instance


def set_database(database: Optional[Database]) -> None:
    """Replace the global database instance (tests, embedding applications)"""
    global _db_instance
    _db_instance = database
