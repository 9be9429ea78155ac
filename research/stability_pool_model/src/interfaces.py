"""Contracts between the liquidation engine and its external collaborators"""
from typing import Any, List, Protocol
from .state.vault import Vault
from .state.vault_manager import VaultManagerConfig

class Snapshottable(Protocol):
    """State that can take part in an atomic liquidation"""

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...

class PriceOracle(Protocol):
    """Collateral price in reference units, scaled by 10**decimals()"""

    def latest_answer(self) -> int: ...

    def decimals(self) -> int: ...

class PositionLedger(Snapshottable, Protocol):
    """Vault book of a single vault manager instance"""
    address: str
    config: VaultManagerConfig
    oracle: PriceOracle

    def vault_count(self) -> int: ...

    def vault(self, vault_id: int) -> Vault: ...

    def close_vault(self, vault_id: int, recipient: str) -> int: ...

class MarketRouter(Snapshottable, Protocol):
    """Exact output swaps along an ordered token path"""

    def get_amounts_in(self, amount_out: int, path: List[str]) -> List[int]: ...

    def swap_tokens_for_exact_tokens(
        self,
        amount_out: int,
        amount_in_max: int,
        path: List[str],
        sender: str,
        recipient: str,
    ) -> List[int]: ...

class FlashLender(Snapshottable, Protocol):
    """Same-transaction loans of the debt token"""

    def flash_borrow(self, token: str, amount: int, borrower: str, fee_bps: int) -> int: ...

    def repay(self, token: str, amount: int, borrower: str) -> None: ...

    def outstanding(self, token: str, borrower: str) -> int: ...
