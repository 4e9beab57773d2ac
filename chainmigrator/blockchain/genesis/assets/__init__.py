"""Genesis assets, one builder per migrated module."""

from .auth import get_auth_module_entry
from .interoperability import get_interoperability_module_entry
from .legacy import LegacyModuleResult, get_legacy_module_entry
from .pos import get_pos_module_entry
from .token import get_token_module_entry, verify_supply

__all__ = [
    "get_auth_module_entry",
    "get_interoperability_module_entry",
    "get_legacy_module_entry",
    "get_pos_module_entry",
    "get_token_module_entry",
    "verify_supply",
    "LegacyModuleResult",
]
