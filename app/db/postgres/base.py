import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from app.settings import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str, **kwargs):
    """
    Create an engine for the given URL.
    SQLite connections get foreign keys switched on so ON DELETE CASCADE
    behaves the same as on Postgres.
    """
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(database_url, future=True, echo=False, **kwargs)

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None) -> None:
    # models must be imported so they register on Base.metadata
    from app.models import category, post, post_category  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")


def drop_tables(bind=None) -> None:
    from app.models import category, post, post_category  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)
    logger.info("Database tables dropped")
