from app.database.base import Base
from app.database.engine import engine
from app.database.session import SessionLocal, session_factory, session_scope

__all__ = ["Base", "engine", "SessionLocal", "session_factory", "session_scope"]
