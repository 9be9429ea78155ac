"""Result record emitted by a successful liquidation"""
from dataclasses import dataclass, asdict
from typing import Any, Dict

@dataclass(frozen=True)
class LiquidationResult:
    """Transient record of one liquidation, never persisted by the engine"""
    manager: str
    vault_id: int
    caller: str
    seized_collateral: int  # collateral units taken from the vault
    debt_repaid: int  # debt units paid to the ledger
    flash_fee: int  # debt units paid to the flash lender on top of the loan
    swap_proceeds: int  # debt units received from the router (debt + flash fee)
    collateral_swapped: int  # collateral units spent in the swap
    caller_fee: int
    treasury_fee: int
    reward_pool_share: int

    @property
    def profit(self) -> int:
        """Collateral left over after the swap"""
        return self.seized_collateral - self.collateral_swapped

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["profit"] = self.profit
        return data
