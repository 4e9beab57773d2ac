# MIT License
# Copyright (c) 2025 Hashborn

"""
Protocol migrations.

Importing this package registers the built-in migrations.
"""

from .types import Version, MigrationContext
from .migrations import MigrationRegistry, migration, get_global_registry
from .genesis_migration import migrate_snapshot_to_genesis

__all__ = [
    "Version",
    "MigrationContext",
    "MigrationRegistry",
    "migration",
    "get_global_registry",
    "migrate_snapshot_to_genesis",
]
