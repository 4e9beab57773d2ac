# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis block construction and output.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import Field

from ...protocol.config.params import NetworkConfig, CURRENT_NETWORK
from ...protocol.crypto.hash import merkle_root, sha256_hex, sha256_json
from ...protocol.types.block import BlockHeader
from ...protocol.types.genesis import GenesisAssetEntry, GenesisModel

logger = logging.getLogger(__name__)


class GenesisBlockHeader(GenesisModel):
    version: int
    timestamp: int
    height: int
    previous_block_id: str = Field(alias="previousBlockID")
    generator_address: str = ""
    transaction_root: str
    asset_root: str
    signature: str = ""

    def block_id(self) -> str:
        return sha256_json(self.to_json_dict()).hex()


class GenesisBlockAsset(GenesisModel):
    module: str
    data: Dict[str, Any]


class GenesisBlock(GenesisModel):
    id: str
    header: GenesisBlockHeader
    assets: List[GenesisBlockAsset]
    transactions: List[Dict[str, Any]] = Field(default_factory=list)


def compute_asset_root(assets: List[GenesisAssetEntry]) -> str:
    leaves = [sha256_json({"module": a.module, "data": a.data}) for a in assets]
    return merkle_root(leaves).hex()


def construct_genesis_block(
    assets: List[GenesisAssetEntry],
    snapshot_block: BlockHeader,
    config: Optional[NetworkConfig] = None,
) -> GenesisBlock:
    """
    Build the genesis block that follows the snapshot block.

    Args:
        assets: Genesis assets, already sorted by module name
        snapshot_block: Header of the block at snapshot height
        config: Network config (default: CURRENT_NETWORK)
    """
    config = config or CURRENT_NETWORK

    header = GenesisBlockHeader(
        version=config.genesis_block_version,
        timestamp=snapshot_block.timestamp + config.genesis_block_delay_sec,
        height=snapshot_block.height + 1,
        previous_block_id=snapshot_block.id,
        transaction_root=sha256_hex(b""),
        asset_root=compute_asset_root(assets),
    )
    block = GenesisBlock(
        id=header.block_id(),
        header=header,
        assets=[GenesisBlockAsset(module=a.module, data=a.data) for a in assets],
    )
    logger.info(f"Genesis block {block.id[:8]}... at height {header.height}")
    return block


def write_genesis_block(block: GenesisBlock, path: str):
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, "w") as f:
        json.dump(block.to_json_dict(), f, indent=2)
    logger.info(f"Genesis block written to {path}")


def write_genesis_assets(assets: List[GenesisAssetEntry], path: str):
    """Writes the asset list, schemas included, for inspection."""
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, "w") as f:
        json.dump({"assets": [a.to_dict() for a in assets]}, f, indent=2)
    logger.info(f"Genesis assets written to {path}")
