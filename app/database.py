from contextlib import contextmanager
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one application instance"""

    def __init__(self, url: str, sslmode: str = None, echo: bool = False):
        self.url = url
        is_sqlite = url.startswith("sqlite")

        connect_args = {}
        engine_kwargs = {}
        if is_sqlite:
            connect_args["check_same_thread"] = False
            if url in ("sqlite://", "sqlite:///:memory:"):
                # a single shared connection keeps the in-memory schema alive
                engine_kwargs["poolclass"] = StaticPool
        elif sslmode:
            # e.g. PostgreSQL on Render or similar needs sslmode=require
            connect_args["sslmode"] = sslmode

        self.engine = create_engine(
            url,
            connect_args=connect_args,
            echo=echo,
            pool_pre_ping=not is_sqlite,
            **engine_kwargs,
        )
        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self):
        # registers every model on Base.metadata
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created")

    def drop_tables(self):
        import app.models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self):
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connections released")


# Required wherever a DB session is needed inside a request
def get_db(request: Request):
    db: Session = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
