"""Database persistence layer."""
from .database import get_session, init_db
from .models import Base, Skill, User
from .profile_store import SqlProfileStore

__all__ = [
    "Base",
    "User",
    "Skill",
    "SqlProfileStore",
    "init_db",
    "get_session",
]
