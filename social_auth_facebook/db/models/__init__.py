"""Database models for the Facebook social login settings service."""

from social_auth_facebook.db.models.config_object import ConfigObject
from social_auth_facebook.db.models.role import Role

__all__ = [
    "ConfigObject",
    "Role",
]
