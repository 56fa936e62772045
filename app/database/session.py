from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.database.engine import engine


def session_factory(bind: Engine) -> sessionmaker:
    """Sessions for the stores.

    Stores commit per write and hand the committed rows back to callers, so
    attributes must stay loaded after commit; every read that needs current
    stock uses ``populate_existing`` instead of relying on expiry.
    """
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


SessionLocal = session_factory(engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Session for scripts; whatever is still pending is rolled back on error."""
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = ["SessionLocal", "get_db", "session_factory", "session_scope"]
