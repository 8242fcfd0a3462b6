"""Role listing service."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from social_auth_facebook.core.logging import get_logger
from social_auth_facebook.db.models import Role

logger = get_logger(__name__)

ANONYMOUS_ROLE = "anonymous"
AUTHENTICATED_ROLE = "authenticated"

# Roles every installation defines
BUILTIN_ROLES = frozenset({ANONYMOUS_ROLE, AUTHENTICATED_ROLE})

# Seeded on first startup: (id, label, weight)
DEFAULT_ROLES = [
    (ANONYMOUS_ROLE, "Anonymous user", 0),
    (AUTHENTICATED_ROLE, "Authenticated user", 1),
    ("administrator", "Administrator", 2),
]


class RoleService:
    """Read access to the roles defined on the site."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_roles(self) -> dict[str, str]:
        """List all roles as an ordered mapping of role id to label.

        Roles are ordered by weight, then id.
        """
        result = await self.db.execute(
            select(Role).order_by(Role.weight, Role.id)
        )
        return {role.id: role.label for role in result.scalars().all()}

    async def ensure_default_roles(self) -> int:
        """Create any missing default roles.

        Returns:
            Number of roles created.
        """
        result = await self.db.execute(select(Role.id))
        existing = set(result.scalars().all())

        created = 0
        for role_id, label, weight in DEFAULT_ROLES:
            if role_id in existing:
                continue
            self.db.add(Role(id=role_id, label=label, weight=weight))
            created += 1

        if created:
            await self.db.flush()
            logger.info("default_roles_created", count=created)

        return created
