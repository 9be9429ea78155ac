"""Stability pool: configuration plus collaborators behind one liquidation API"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple
from .errors import LedgerConflictError, NotLiquidableError
from .external.token_bank import TokenBank
from .instructions import admin
from .instructions.calculate_amounts import calculate_amount_in_max, calculate_distribution
from .instructions.check_liquidation import (
    check_all_liquidable_vaults,
    check_liquidable_vaults,
    is_liquidable,
)
from .instructions.liquidate import liquidate
from .interfaces import FlashLender, MarketRouter, PositionLedger
from .state.engine_config import EngineConfig
from .state.liquidation_result import LiquidationResult
from .transaction import synchronized

logger = logging.getLogger(__name__)

class StabilityPool:
    """Liquidation engine bound to one configuration, bank, router and flash lender.

    Liquidations, reads and ledger writes all run under the bank's re-entrant lock,
    so racing callers on the same vault see the winner's closed vault when their
    eligibility re-check runs, and a scan never sees a liquidation half way.
    """

    def __init__(self, config: EngineConfig, bank: TokenBank, router: MarketRouter,
                 lender: FlashLender, address: str = "stability_pool"):
        self.config = config
        self.bank = bank
        self.router = router
        self.lender = lender
        self.address = address

    @property
    def lock(self):
        return self.bank.lock

    # Reads

    @synchronized
    def is_liquidable(self, manager: PositionLedger, vault_id: int) -> bool:
        return is_liquidable(manager, vault_id)

    @synchronized
    def check_liquidable_vaults(self, manager: PositionLedger) -> List[int]:
        return check_liquidable_vaults(manager)

    @synchronized
    def check_all_liquidable_vaults(self, managers: Iterable[PositionLedger]) -> Dict[str, List[int]]:
        return check_all_liquidable_vaults(managers)

    @synchronized
    def calculate_amount_in_max(self, manager: PositionLedger, amount_out: int,
                                slippage_bps: Optional[int] = None) -> int:
        return calculate_amount_in_max(self.config, self.router, manager, amount_out, slippage_bps)

    def calculate_distribution(self, amount: int) -> Tuple[int, int, int]:
        return calculate_distribution(self.config, amount)

    # Liquidation

    def liquidate(self, manager: PositionLedger, vault_id: int, caller: str) -> LiquidationResult:
        return liquidate(self.config, manager, vault_id, caller,
                         self.bank, self.router, self.lender, self.address)

    def liquidate_all(self, manager: PositionLedger, caller: str) -> List[LiquidationResult]:
        """Scan the manager and liquidate every candidate still eligible when its turn comes"""
        results = []
        for vault_id in self.check_liquidable_vaults(manager):
            try:
                results.append(self.liquidate(manager, vault_id, caller))
            except (NotLiquidableError, LedgerConflictError) as e:
                # another caller got there first
                logger.info("Skipping vault %s of %s: %s", vault_id, manager.address, e)
        return results

    # Administration

    def set_treasury(self, caller: str, treasury: str) -> None:
        admin.set_treasury(self.config, caller, treasury)

    def set_reward_pool(self, caller: str, reward_pool: str) -> None:
        admin.set_reward_pool(self.config, caller, reward_pool)

    def set_flash_loan_fee(self, caller: str, flash_fee_bps: int) -> None:
        admin.set_flash_loan_fee(self.config, caller, flash_fee_bps)

    def set_distribution_fees(self, caller: str, caller_fee_bps: int, treasury_fee_bps: int) -> None:
        admin.set_distribution_fees(self.config, caller, caller_fee_bps, treasury_fee_bps)

    def set_slippage(self, caller: str, slippage_bps: int) -> None:
        admin.set_slippage(self.config, caller, slippage_bps)

    def set_swap_path(self, caller: str, manager: PositionLedger, path: List[str]) -> None:
        admin.set_swap_path(self.config, caller, manager, path)

    def transfer_admin(self, caller: str, new_admin: str) -> None:
        admin.transfer_admin(self.config, caller, new_admin)
