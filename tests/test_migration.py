import argparse
import json
import os

import pytest

from chainmigrator.blockchain.cli.migrate_cli import cmd_migrate
from chainmigrator.blockchain.upgrade import (
    MigrationContext,
    MigrationRegistry,
    Version,
    get_global_registry,
    migrate_snapshot_to_genesis,
)
from chainmigrator.protocol.types.chain_state import VoteWeights
from chainmigrator.protocol.types.common import InvalidRangeError, MissingHistoricalDataError


def test_version_parsing_and_ordering():
    assert Version.from_string("3.0.2") == Version(3, 0, 2)
    assert str(Version.from_string("4.10.0")) == "4.10.0"
    assert Version.from_string("3.9.9") < Version.from_string("4.0.0")
    assert Version.from_string("4.10.0") > Version.from_string("4.9.0")


@pytest.mark.parametrize("value", ["3.0", "3.0.x", "", "v3.0.0"])
def test_version_rejects_malformed(value):
    with pytest.raises(ValueError):
        Version.from_string(value)


def test_registry():
    registry = MigrationRegistry()

    def step(context):
        return None

    registry.register("3.0.0", "4.0.0", step)
    assert registry.has_migration("3.0.0", "4.0.0")
    assert registry.get_migration("3.0.0", "4.0.0") is step
    assert registry.list_migrations() == ["3.0.0->4.0.0"]

    assert registry.get_migration("4.0.0", "4.1.0") is None
    with pytest.raises(KeyError):
        registry.get_migration("4.0.0", "5.0.0")
    with pytest.raises(ValueError):
        registry.register("4.0.0", "3.0.0", step)


def test_genesis_migration_is_registered():
    assert get_global_registry().get_migration("3.0.0", "4.0.0") is migrate_snapshot_to_genesis


def test_migrate_snapshot_to_genesis(store, seeded, config, db_dir):
    output = os.path.join(db_dir, "genesis_block.json")
    assets = os.path.join(db_dir, "genesis_assets.json")
    context = MigrationContext(
        store=store,
        config=config,
        snapshot_height=seeded["snapshot_height"],
        previous_height=seeded["previous_height"],
        output_path=output,
        assets_path=assets,
    )

    block = migrate_snapshot_to_genesis(context)
    assert block.header.height == seeded["snapshot_height"] + 1

    with open(output) as f:
        assert json.load(f)["id"] == block.id
    assert os.path.exists(assets)


def test_missing_snapshot_block_writes_nothing(store, writer, seeded, addr, config, db_dir):
    output = os.path.join(db_dir, "genesis_block.json")
    # round 4 has its r-2 weights, but no block was ever stored at height 412
    writer.put_vote_weights(VoteWeights.model_validate({
        "vote_weights": [{"round": 2, "delegates": [{"address": addr(2), "vote_weight": 1}]}]
    }))
    context = MigrationContext(
        store=store,
        config=config,
        snapshot_height=103 * 4,
        previous_height=seeded["previous_height"],
        output_path=output,
    )

    with pytest.raises(MissingHistoricalDataError):
        migrate_snapshot_to_genesis(context)
    assert not os.path.exists(output)


def _args(db_path, output, **overrides):
    values = dict(
        db=db_path,
        snapshot_height=0,
        snapshot_height_prev=0,
        network="devnet",
        output=output,
        assets_output=None,
        from_version="3.0.0",
        to_version="4.0.0",
        verbose=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def test_cmd_migrate(store, seeded, db_dir, capsys):
    output = os.path.join(db_dir, "cli", "genesis_block.json")
    args = _args(store.db_path, output,
                 snapshot_height=seeded["snapshot_height"], snapshot_height_prev=seeded["previous_height"])

    assert cmd_migrate(args) == 0
    assert os.path.exists(output)
    assert "Genesis Summary" in capsys.readouterr().out


def test_cmd_migrate_reports_failure(store, seeded, db_dir):
    output = os.path.join(db_dir, "genesis_block.json")
    args = _args(store.db_path, output,
                 snapshot_height=seeded["previous_height"], snapshot_height_prev=seeded["snapshot_height"])

    assert cmd_migrate(args) == 1
    assert not os.path.exists(output)


def test_cmd_migrate_negative_height_exits_cleanly(store, seeded, db_dir):
    args = _args(store.db_path, os.path.join(db_dir, "out.json"),
                 snapshot_height=seeded["snapshot_height"], snapshot_height_prev=-5)
    assert cmd_migrate(args) == 1


def test_cmd_migrate_missing_store(db_dir):
    args = _args(os.path.join(db_dir, "absent", "blockchain.db"), os.path.join(db_dir, "out.json"),
                 snapshot_height=10, snapshot_height_prev=5)
    assert cmd_migrate(args) == 1


def test_cmd_migrate_unknown_protocol_pair(db_dir):
    args = _args(os.path.join(db_dir, "blockchain.db"), os.path.join(db_dir, "out.json"),
                 from_version="4.0.0", to_version="5.0.0")
    assert cmd_migrate(args) == 1


def test_invalid_range_is_a_migration_error(store, config):
    context = MigrationContext(store=store, config=config, snapshot_height=5, previous_height=5)
    with pytest.raises(InvalidRangeError):
        migrate_snapshot_to_genesis(context)
