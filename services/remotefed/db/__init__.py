"""Reference role store database module."""

from .models import Base
from .session import init_db, session_scope
from .store import RealmNotFoundError, SqlFederatedStorage, SqlRealm, SqlRoleStore

__all__ = [
    "Base",
    "RealmNotFoundError",
    "SqlFederatedStorage",
    "SqlRealm",
    "SqlRoleStore",
    "init_db",
    "session_scope",
]
