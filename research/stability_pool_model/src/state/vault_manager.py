"""Vault manager configuration"""
from dataclasses import dataclass
from ..constants import DEFAULT_SAFETY_RATIO_BPS, BPS_SCALE

@dataclass(frozen=True)
class Token:
    """An asset known to the model"""
    address: str
    symbol: str
    decimals: int = 18

    @property
    def unit(self) -> int:
        return 10 ** self.decimals

@dataclass
class VaultManagerConfig:
    """Per-ledger parameters, owned by the ledger's administrator"""
    address: str
    collateral_token: Token
    debt_token: Token
    safety_ratio_bps: int = DEFAULT_SAFETY_RATIO_BPS

    def __post_init__(self):
        if self.safety_ratio_bps < BPS_SCALE:
            raise ValueError("Safety ratio must be at least 100%")
