"""Database package for the Facebook social login settings service."""

from social_auth_facebook.db.base import Base
from social_auth_facebook.db.session import async_session_maker, engine, get_db

__all__ = [
    "Base",
    "async_session_maker",
    "engine",
    "get_db",
]
