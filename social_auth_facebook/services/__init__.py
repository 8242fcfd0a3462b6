"""Services backing the settings form."""

from social_auth_facebook.services.config_store import (
    Config,
    ConfigStore,
    ConfigStoreError,
    StoreWriteError,
)
from social_auth_facebook.services.request_context import RequestContext
from social_auth_facebook.services.roles import BUILTIN_ROLES, RoleService

__all__ = [
    "BUILTIN_ROLES",
    "Config",
    "ConfigStore",
    "ConfigStoreError",
    "RequestContext",
    "RoleService",
    "StoreWriteError",
]
