# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis construction from a migrated snapshot.
"""

from .assembler import GenesisAssembler, build_genesis_assets, sort_assets_by_module
from .block import GenesisBlock, construct_genesis_block, write_genesis_block, write_genesis_assets

__all__ = [
    "GenesisAssembler",
    "GenesisBlock",
    "build_genesis_assets",
    "sort_assets_by_module",
    "construct_genesis_block",
    "write_genesis_block",
    "write_genesis_assets",
]
