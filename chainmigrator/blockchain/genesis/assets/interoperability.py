from typing import Optional

from ....protocol.config.params import MODULE_NAME_INTEROPERABILITY, NetworkConfig, CURRENT_NETWORK
from ....protocol.types.common import ConfigurationError
from ....protocol.types.genesis import GenesisAssetEntry, GenesisInteroperabilityStore, asset_entry


def get_interoperability_module_entry(config: Optional[NetworkConfig] = None) -> GenesisAssetEntry:
    """Empty cross-chain state: no chains registered, nothing terminated."""
    config = config or CURRENT_NETWORK
    if not config.chain_name:
        raise ConfigurationError(f"Network {config.network_id} has no chain name")

    store = GenesisInteroperabilityStore(
        own_chain_name=config.chain_name,
        own_chain_nonce="0",
    )
    return asset_entry(MODULE_NAME_INTEROPERABILITY, store)
