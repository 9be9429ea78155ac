"""End-to-end liquidation of an under-collateralized vault"""
import logging
from ..errors import NotLiquidableError
from ..external.token_bank import TokenBank
from ..interfaces import FlashLender, MarketRouter, PositionLedger
from ..state.engine_config import EngineConfig
from ..state.liquidation_result import LiquidationResult
from ..transaction import atomic
from .calculate_amounts import (
    calculate_amount_in_max,
    calculate_distribution,
    calculate_flash_fee,
)
from .check_liquidation import is_liquidable

logger = logging.getLogger(__name__)


def liquidate(
    config: EngineConfig,
    manager: PositionLedger,
    vault_id: int,
    caller: str,
    bank: TokenBank,
    router: MarketRouter,
    lender: FlashLender,
    pool_address: str
) -> LiquidationResult:
    """Close a vault with a flash loan, sell its collateral and split the leftover.

    Steps run inside one atomic block: flash borrow the debt, close the vault,
    swap collateral for debt + flash fee, repay the loan, then pay the caller,
    treasury and reward pool out of the remaining collateral. Any failure restores
    the bank, ledger, router and lender to their state before the call.

    The bank's lock is held from the eligibility re-check to the last payout, so
    other threads never read a half-done liquidation and never write state that
    a rollback would overwrite.
    """
    config.require_payees()
    collateral_token = manager.config.collateral_token.address
    debt_token = manager.config.debt_token.address

    with bank.lock:
        # Re-checked here, scan results may be stale
        if not is_liquidable(manager, vault_id):
            raise NotLiquidableError(f"Vault {vault_id} of {manager.address} is not liquidable")
        path = config.swap_path(manager.address)

        with atomic(bank, manager, router, lender):
            vault = manager.vault(vault_id)
            debt_amount = vault.debt_amount
            flash_fee = calculate_flash_fee(debt_amount, config.flash_fee_bps)
            amount_out = debt_amount + flash_fee

            lender.flash_borrow(debt_token, debt_amount, pool_address, config.flash_fee_bps)
            seized = manager.close_vault(vault_id, pool_address)

            amount_in_max = calculate_amount_in_max(config, router, manager, amount_out,
                                                    config.slippage_bps)
            if amount_in_max > seized:
                logger.debug("Capping amount in max %s at seized collateral %s",
                             amount_in_max, seized)
                amount_in_max = seized
            amounts = router.swap_tokens_for_exact_tokens(
                amount_out, amount_in_max, path, pool_address, pool_address
            )
            collateral_swapped = amounts[0]

            lender.repay(debt_token, amount_out, pool_address)

            caller_fee, treasury_fee, remainder = calculate_distribution(
                config, seized - collateral_swapped
            )
            bank.transfer(collateral_token, pool_address, caller, caller_fee)
            bank.transfer(collateral_token, pool_address, config.treasury, treasury_fee)
            bank.transfer(collateral_token, pool_address, config.reward_pool, remainder)

    result = LiquidationResult(
        manager=manager.address,
        vault_id=vault_id,
        caller=caller,
        seized_collateral=seized,
        debt_repaid=debt_amount,
        flash_fee=flash_fee,
        swap_proceeds=amount_out,
        collateral_swapped=collateral_swapped,
        caller_fee=caller_fee,
        treasury_fee=treasury_fee,
        reward_pool_share=remainder,
    )
    logger.info("Liquidated vault %s of %s by %s: %s", vault_id, manager.address, caller,
                result.to_dict())
    return result
