"""Configuration store for named configuration objects."""

from __future__ import annotations

import copy
import json
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from social_auth_facebook.core.logging import get_logger
from social_auth_facebook.db.models import ConfigObject

logger = get_logger(__name__)


class ConfigStoreError(Exception):
    """Base exception for configuration store errors."""

    pass


class StoreWriteError(ConfigStoreError):
    """Raised when a configuration object cannot be persisted."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(f"Failed to save configuration '{name}': {message}")


class Config:
    """An editable configuration object.

    Changes made with :meth:`set` stay in memory until :meth:`save` writes
    the whole object back to the store in one go.
    """

    def __init__(
        self,
        store: ConfigStore,
        name: str,
        data: dict[str, Any] | None = None,
        is_new: bool = True,
    ):
        self._store = store
        self._name = name
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}
        self._is_new = is_new

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_new(self) -> bool:
        """Whether the object has never been saved."""
        return self._is_new

    @property
    def raw_data(self) -> dict[str, Any]:
        """A copy of the current data, including unsaved changes."""
        return copy.deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value, or ``default`` when the key is absent."""
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> Config:
        """Set a value in memory. Returns self so calls can be chained."""
        self._data[key] = copy.deepcopy(value)
        return self

    async def save(self) -> Config:
        """Persist the object.

        Raises:
            StoreWriteError: If the underlying database write fails.
        """
        await self._store.write(self._name, self._data)
        self._is_new = False
        return self

class ConfigStore:
    """Loads and saves named configuration objects.

    Every load reads the committed row, so a load after a save always
    sees the saved data, including in other worker processes.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the store.

        Args:
            db: AsyncSession for database operations.
        """
        self.db = db

    async def get_editable(self, name: str) -> Config:
        """Load a configuration object for reading and editing.

        A name that was never saved yields an empty, new object.

        Raises:
            ConfigStoreError: If the stored document is not valid JSON.
        """
        row = await self._load_row(name)
        if row is None:
            return Config(self, name)

        try:
            data = json.loads(row.data)
        except json.JSONDecodeError as e:
            logger.error("invalid_config_json", name=name, error=str(e))
            raise ConfigStoreError(
                f"Stored configuration '{name}' is not valid JSON: {e}"
            ) from e

        return Config(self, name, data, is_new=False)

    async def write(self, name: str, data: dict[str, Any]) -> None:
        """Replace the stored data of a configuration object and commit.

        Raises:
            StoreWriteError: If the database rejects the write.
        """
        encoded = json.dumps(data, sort_keys=True)

        try:
            row = await self._load_row(name)
            if row is not None:
                row.data = encoded
            else:
                self.db.add(ConfigObject(name=name, data=encoded))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("config_save_failed", name=name, error=str(e))
            raise StoreWriteError(name, str(e)) from e

        logger.info("config_saved", name=name, keys=sorted(data))

    async def _load_row(self, name: str) -> ConfigObject | None:
        result = await self.db.execute(
            select(ConfigObject).where(ConfigObject.name == name)
        )
        return result.scalar_one_or_none()
