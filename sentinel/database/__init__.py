from sentinel.database.base import Base
from sentinel.database.engine import build_engine, create_schema, engine
from sentinel.database.session import SessionLocal, get_db, session_scope

__all__ = ["Base", "SessionLocal", "build_engine", "create_schema", "engine", "get_db", "session_scope"]
