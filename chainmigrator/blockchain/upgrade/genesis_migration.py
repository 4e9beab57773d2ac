# MIT License
# Copyright (c) 2025 Hashborn

"""
Protocol 3 -> 4 migration: snapshot to genesis block.
"""

import logging

from .migrations import migration
from .types import MigrationContext
from ..genesis.assembler import GenesisAssembler
from ..genesis.block import GenesisBlock, construct_genesis_block, write_genesis_block, write_genesis_assets
from ..snapshot.reader import SnapshotReader
from ...protocol.types.common import MissingHistoricalDataError

logger = logging.getLogger(__name__)


@migration("3.0.0", "4.0.0")
def migrate_snapshot_to_genesis(context: MigrationContext) -> GenesisBlock:
    """
    Read the snapshot, build all module assets and the genesis block.

    Nothing is written unless every step succeeds.
    """
    logger.info(
        f"Migrating {context.config.network_id} snapshot at height {context.snapshot_height} "
        f"(previous {context.previous_height})"
    )

    reader = SnapshotReader(context.store)
    snapshot, assets = GenesisAssembler(reader, context.config).create_assets(
        context.snapshot_height, context.previous_height
    )
    if snapshot.block is None:
        raise MissingHistoricalDataError(f"No block stored at snapshot height {context.snapshot_height}")

    block = construct_genesis_block(assets, snapshot.block, context.config)

    if context.assets_path:
        write_genesis_assets(assets, context.assets_path)
    if context.output_path:
        write_genesis_block(block, context.output_path)

    return block
