# MIT License
# Copyright (c) 2025 Hashborn

"""
Migration Types
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from dataclasses import dataclass

from ..storage.db import KVStore
from ...protocol.config.params import NetworkConfig


@dataclass(frozen=True)
class Version:
    """
    Semantic version (MAJOR.MINOR.PATCH) of a protocol.

    A MAJOR change is a new protocol: state must be migrated through a new
    genesis block.
    """
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def from_string(cls, version_str: str) -> 'Version':
        """Parse version from string (e.g., '3.0.2')."""
        parts = version_str.split('.')
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid version format: {version_str}")

        return cls(
            major=int(parts[0]),
            minor=int(parts[1]),
            patch=int(parts[2])
        )

    def as_tuple(self) -> tuple:
        return (self.major, self.minor, self.patch)

    def __lt__(self, other: 'Version') -> bool:
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: 'Version') -> bool:
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: 'Version') -> bool:
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: 'Version') -> bool:
        return self.as_tuple() >= other.as_tuple()


class MigrationContext(BaseModel):
    """
    Inputs of one migration run.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    store: KVStore = Field(..., description="Source node's store, opened read-only")
    config: NetworkConfig = Field(..., description="Target network config")
    snapshot_height: int = Field(..., description="Height of the snapshot block")
    previous_height: int = Field(..., description="Height of the previous snapshot")
    output_path: Optional[str] = Field(default=None, description="Where to write the genesis block")
    assets_path: Optional[str] = Field(default=None, description="Where to write the asset list")
