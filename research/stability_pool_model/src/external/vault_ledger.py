"""Fixed-rate vault manager acting as the position ledger"""
import logging
from dataclasses import replace
from typing import Dict, Optional, Tuple
from ..errors import (
    AuthorizationError,
    InsufficientCollateralError,
    LedgerConflictError,
)
from ..instructions.check_liquidation import get_price, is_below_safety_ratio
from ..interfaces import PriceOracle
from ..state.vault import Vault
from ..state.vault_manager import VaultManagerConfig
from ..transaction import synchronized
from .token_bank import TokenBank

logger = logging.getLogger(__name__)

class FixedVaultLedger:
    """Owns the vaults of one manager instance and their collateral custody"""

    def __init__(self, config: VaultManagerConfig, oracle: PriceOracle, bank: TokenBank,
                 max_debt: Optional[int] = None):
        self.config = config
        self.oracle = oracle
        self.bank = bank
        self.max_debt = max_debt
        self.stability_pool: Optional[str] = None
        self.vaults: Dict[int, Vault] = {}
        self._vault_count = 0

    @property
    def address(self) -> str:
        return self.config.address

    @property
    def lock(self):
        return self.bank.lock

    @synchronized
    def set_stability_pool(self, pool_address: str) -> None:
        self.stability_pool = pool_address

    @synchronized
    def set_max_debt(self, max_debt: int) -> None:
        self.max_debt = max_debt

    @synchronized
    def vault_count(self) -> int:
        return self._vault_count

    @synchronized
    def vault(self, vault_id: int) -> Vault:
        """Copy of the vault, or an empty zero-debt vault for unknown ids"""
        if vault_id not in self.vaults:
            return Vault.empty(vault_id)
        return replace(self.vaults[vault_id])

    @synchronized
    def create_vault(self, owner: str) -> int:
        self._vault_count += 1
        self.vaults[self._vault_count] = Vault(id=self._vault_count, owner=owner)
        return self._vault_count

    @synchronized
    def deposit_collateral(self, vault_id: int, amount: int) -> None:
        vault = self._open_vault(vault_id)
        self.bank.transfer(self.config.collateral_token.address, vault.owner, self.address, amount)
        vault.deposit(amount)

    @synchronized
    def borrow_token(self, vault_id: int, amount: int, caller: str) -> None:
        vault = self._open_vault(vault_id)
        if caller != vault.owner:
            raise AuthorizationError("Vault not owned by caller")
        new_debt = vault.debt_amount + amount
        if self.max_debt is not None and new_debt > self.max_debt:
            raise InsufficientCollateralError("Borrow exceeds max debt")
        if is_below_safety_ratio(
            vault.collateral_amount,
            new_debt,
            get_price(self.oracle),
            self.config.safety_ratio_bps,
            self.oracle.decimals(),
            self.config.collateral_token.decimals,
            self.config.debt_token.decimals,
        ):
            raise InsufficientCollateralError("Borrow would put vault below safety ratio")
        self.bank.transfer(self.config.debt_token.address, self.address, vault.owner, amount)
        vault.borrow(amount)

    @synchronized
    def close_vault(self, vault_id: int, recipient: str) -> int:
        """Take the vault's debt from recipient and hand it the full collateral"""
        if self.stability_pool is not None and recipient != self.stability_pool:
            raise AuthorizationError("Only the stability pool can close vaults")
        vault = self.vaults.get(vault_id)
        if vault is None or vault.closed:
            raise LedgerConflictError(f"Vault {vault_id} of {self.address} is closed or missing")
        self.bank.transfer(self.config.debt_token.address, recipient, self.address, vault.debt_amount)
        collateral = vault.close()
        self.bank.transfer(self.config.collateral_token.address, self.address, recipient, collateral)
        logger.debug("Closed vault %s of %s, %s collateral to %s",
                     vault_id, self.address, collateral, recipient)
        return collateral

    def _open_vault(self, vault_id: int) -> Vault:
        vault = self.vaults.get(vault_id)
        if vault is None or vault.closed:
            raise LedgerConflictError(f"Vault {vault_id} of {self.address} is closed or missing")
        return vault

    @synchronized
    def snapshot(self) -> Tuple[Dict[int, Vault], int]:
        return {vid: replace(v) for vid, v in self.vaults.items()}, self._vault_count

    @synchronized
    def restore(self, snapshot: Tuple[Dict[int, Vault], int]) -> None:
        vaults, count = snapshot
        self.vaults = {vid: replace(v) for vid, v in vaults.items()}
        self._vault_count = count
