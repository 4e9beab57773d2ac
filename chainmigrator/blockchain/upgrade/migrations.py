# MIT License
# Copyright (c) 2025 Hashborn

"""
Migration Registry

Maps a (from_version, to_version) protocol pair to the function that
migrates a snapshot of the old protocol to a genesis block of the new one.
"""

import logging
from typing import Dict, Callable, Optional
from .types import Version

logger = logging.getLogger(__name__)


class MigrationRegistry:
    """
    Registry for snapshot migration functions.

    Each migration takes a MigrationContext and returns the genesis block.
    """

    def __init__(self):
        self._migrations: Dict[str, Callable] = {}

    @staticmethod
    def _key(from_version: str, to_version: str) -> str:
        return f"{Version.from_string(from_version)}->{Version.from_string(to_version)}"

    def register(self, from_version: str, to_version: str, migration_func: Callable):
        """
        Register a migration function.

        Args:
            from_version: Protocol version of the snapshot (e.g., "3.0.0")
            to_version: Protocol version of the genesis block (e.g., "4.0.0")
            migration_func: Function that takes (context: MigrationContext) -> GenesisBlock
        """
        if Version.from_string(to_version) <= Version.from_string(from_version):
            raise ValueError(f"Cannot migrate backwards from {from_version} to {to_version}")

        key = self._key(from_version, to_version)
        if key in self._migrations:
            logger.warning(f"Overwriting migration {key}")

        self._migrations[key] = migration_func
        logger.debug(f"Registered migration: {key}")

    def get_migration(self, from_version: str, to_version: str) -> Optional[Callable]:
        """
        Get migration function for a protocol transition.

        Returns:
            Migration function, or None if the versions share a major
            version (no new genesis block needed)

        Raises:
            KeyError: If a major-version migration is not registered
        """
        key = self._key(from_version, to_version)
        if key in self._migrations:
            return self._migrations[key]

        from_v = Version.from_string(from_version)
        to_v = Version.from_string(to_version)

        if from_v.major == to_v.major:
            logger.info(f"No migration registered for {key} (same protocol)")
            return None

        raise KeyError(
            f"Migration required for {key} but not found. "
            f"Registered: {', '.join(self.list_migrations()) or 'none'}"
        )

    def has_migration(self, from_version: str, to_version: str) -> bool:
        """Check if migration exists."""
        return self._key(from_version, to_version) in self._migrations

    def list_migrations(self) -> list:
        """List all registered migrations."""
        return list(self._migrations.keys())


# Global migration registry
_global_registry = MigrationRegistry()


def migration(from_version: str, to_version: str):
    """
    Decorator to register a migration function.

    Usage:
        @migration("3.0.0", "4.0.0")
        def migrate_3_to_4(context: MigrationContext) -> GenesisBlock:
            ...
    """
    def decorator(func):
        _global_registry.register(from_version, to_version, func)
        return func
    return decorator


def get_global_registry() -> MigrationRegistry:
    """Get the global migration registry."""
    return _global_registry
