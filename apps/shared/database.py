"""
Database connection lifecycle and session management

The connection is an explicit resource: a Database object is started against
a target URL, handed to the app, and stopped at shutdown. Nothing connects at
import time, so a process can start and stop it as many times as it needs.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)

# Base class for ORM models
Base = declarative_base()


class Database:
    """Owns the engine and session factory for one start/stop cycle."""

    def __init__(self) -> None:
        self.engine: Optional[Engine] = None
        self.url: Optional[str] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_started(self) -> bool:
        return self.engine is not None

    def start(self, database_url: str) -> None:
        """
        Connect to the database and create tables.

        Fails fast: if the database is unreachable the connection error
        propagates and the object stays stopped.
        """
        if self.is_started:
            raise RuntimeError("Database already started")

        connect_args = {}
        if database_url.startswith("sqlite"):
            # Sessions may be opened and closed on different threadpool threads
            connect_args["check_same_thread"] = False

        # NullPool for better compatibility with containerized environments
        engine = create_engine(
            database_url,
            poolclass=NullPool,
            connect_args=connect_args,
            echo=False,
        )
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=engine)
        except Exception:
            engine.dispose()
            raise

        self.engine = engine
        self.url = database_url
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info(f"Connected to database ({engine.url.render_as_string(hide_password=True)})")

    def stop(self) -> None:
        """Release the connection. No-op when not started."""
        if not self.is_started:
            return
        engine = self.engine
        self.engine = None
        self._session_factory = None
        self.url = None
        engine.dispose()
        logger.info("Disconnected from database")

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise RuntimeError("Database not started")
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @router.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    database: Database = request.app.state.database
    with database.session() as db:
        yield db
