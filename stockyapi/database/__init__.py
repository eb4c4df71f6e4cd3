from .connection import Database, build_engine
from .session import get_db, session_scope

__all__ = ["Database", "build_engine", "get_db", "session_scope"]
