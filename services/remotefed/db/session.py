"""
Database session management for the reference role store.

The adapter contract is synchronous and request-scoped, so this module
provides a plain SQLAlchemy engine and session factory. One session covers
one host request; it commits on success and rolls back on error.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from remotefed.config import settings
from remotefed.db.models import Base
from remotefed.logging_config import get_logger

logger = get_logger(__name__)

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

session_factory = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
    autoflush=False,
)


def init_db(bind: Engine | None = None, create_tables: bool = False) -> None:
    """Verify the database connection, optionally creating missing tables.

    Production databases are migrated with Alembic; ``create_tables`` is for
    local development and tests.
    """
    bind = bind or engine
    logger.info("Initializing database connection", url=bind.url.render_as_string())
    with bind.begin() as conn:
        conn.execute(text("SELECT 1"))
        if create_tables:
            Base.metadata.create_all(conn)
            logger.info("Database tables created")
    logger.info("Database connection established")


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Generator[Session]:
    """
    Provide a read-write session for one request.

    Usage:
        with session_scope() as db:
            realm = SqlRoleStore(db).get_realm("acme")
            ...
    """
    factory = factory or session_factory
    with factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
