import argparse
import logging
import sys

from ..storage.db import KVStore
from ..upgrade import MigrationContext, get_global_registry
from ...protocol.config.params import NETWORKS
from ...protocol.types.common import MigrationError

logger = logging.getLogger(__name__)

def cmd_migrate(args) -> int:
    config = NETWORKS[args.network]
    registry = get_global_registry()

    try:
        migrate = registry.get_migration(args.from_version, args.to_version)
    except (KeyError, ValueError) as e:
        logger.error(f"{e}")
        return 1
    if migrate is None:
        print(f"Protocol {args.from_version} -> {args.to_version} needs no genesis migration.")
        return 0

    try:
        store = KVStore(args.db, readonly=True)
    except MigrationError as e:
        logger.error(f"{e}")
        return 1

    try:
        context = MigrationContext(
            store=store,
            config=config,
            snapshot_height=args.snapshot_height,
            previous_height=args.snapshot_height_prev,
            output_path=args.output,
            assets_path=args.assets_output,
        )
        block = migrate(context)
    except MigrationError as e:
        logger.error(f"Migration failed: {e}")
        return 1
    finally:
        store.close()

    print(f"\n--- Genesis Summary ---")
    print(f"Network:      {config.network_id}")
    print(f"Height:       {block.header.height}")
    print(f"Block ID:     {block.id}")
    print(f"Asset root:   {block.header.asset_root}")
    print(f"Modules:      {', '.join(a.module for a in block.assets)}")
    print(f"Genesis file: {args.output}")
    return 0

def main():
    parser = argparse.ArgumentParser(
        description="Migrate a node snapshot to the genesis block of the next protocol version",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chain-migrate --db ./data/blockchain.db \\
      --snapshot-height 16281107 --snapshot-height-prev 16270293 \\
      --output ./genesis_block.json
"""
    )
    parser.add_argument("--db", required=True, help="Path to the source node's store")
    parser.add_argument("--snapshot-height", type=int, required=True, help="Height of the snapshot block")
    parser.add_argument("--snapshot-height-prev", type=int, required=True, help="Height of the previous snapshot")
    parser.add_argument("--network", choices=sorted(NETWORKS), default="mainnet", help="Target network (default: mainnet)")
    parser.add_argument("--output", "-o", default="./genesis_block.json", help="Genesis block output path")
    parser.add_argument("--assets-output", default=None, help="Also write the asset list with schemas here")
    parser.add_argument("--from-version", default="3.0.0", help="Protocol version of the snapshot")
    parser.add_argument("--to-version", default="4.0.0", help="Protocol version of the genesis block")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()

    if args.snapshot_height_prev >= args.snapshot_height:
        parser.error("--snapshot-height-prev must be below --snapshot-height")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    sys.exit(cmd_migrate(args))

if __name__ == "__main__":
    main()
