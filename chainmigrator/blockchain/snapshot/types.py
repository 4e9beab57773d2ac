# MIT License
# Copyright (c) 2025 Hashborn

"""
Snapshot Data Structures
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from ...protocol.types.account import Account
from ...protocol.types.block import BlockHeader
from ...protocol.types.chain_state import UnregisteredAccount, VoteWeights


class Snapshot(BaseModel):
    """
    Everything the genesis transformers read, loaded once per run.
    """
    height: int = Field(..., description="Snapshot block height")
    previous_height: int = Field(..., description="Height of the previous snapshot")
    block: Optional[BlockHeader] = Field(default=None, description="Header of the snapshot block")

    accounts: List[Account] = Field(default_factory=list, description="Accounts in ascending address order")
    legacy_accounts: List[UnregisteredAccount] = Field(default_factory=list, description="Unregistered legacy addresses")
    vote_weights: VoteWeights = Field(default_factory=VoteWeights, description="Top delegate weights per round")
