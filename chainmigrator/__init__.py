"""Snapshot-to-genesis migration for protocol upgrades."""

__version__ = "1.0.0"
