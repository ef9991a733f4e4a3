import logging
import os
from contextlib import contextmanager

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./taskmanager.db"


# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment variable DATABASE_URL,
    falling back to a SQLite file in the working directory.
    """
    load_dotenv()
    return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# PUBLIC_INTERFACE
class Database:
    """
    Storage handle shared by the services.

    Owns the engine and the session factory. One handle is built at startup
    and injected wherever storage is needed; each unit of work acquires its
    own session through ``session()`` or the request dependency.
    """

    def __init__(self, url=None, echo=False):
        self.url = make_url(url or get_database_url())
        engine_kwargs = {"future": True, "echo": echo}
        if self.url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.url.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool
        self.engine = create_engine(self.url, **engine_kwargs)
        if self.url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Tables ensured on %s", self.url.render_as_string(hide_password=True))

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()

    @contextmanager
    def session(self):
        """Session scoped to one unit of work: commit on success, rollback on error."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
