"""Liquidation eligibility and vault scanning"""
import logging
from typing import Dict, Iterable, List
from ..constants import BPS_SCALE
from ..errors import InvalidPriceError
from ..interfaces import PositionLedger, PriceOracle

logger = logging.getLogger(__name__)

def get_price(oracle: PriceOracle) -> int:
    """Current oracle answer, rejecting non-positive prices"""
    price = oracle.latest_answer()
    if price <= 0:
        raise InvalidPriceError(f"Oracle answer {price} is not positive")
    return price

def collateral_value(
    collateral_amount: int,
    price: int,
    price_decimals: int,
    collateral_decimals: int,
    debt_decimals: int
) -> int:
    """Collateral value in debt token units, rounded down"""
    # value = collateral * price / 10**price_dec, rescaled from collateral to debt decimals
    return (collateral_amount * price * 10 ** debt_decimals) // (
        10 ** price_decimals * 10 ** collateral_decimals
    )

def is_below_safety_ratio(
    collateral_amount: int,
    debt_amount: int,
    price: int,
    safety_ratio_bps: int,
    price_decimals: int,
    collateral_decimals: int = 18,
    debt_decimals: int = 18
) -> bool:
    """collateral_value * BPS_SCALE < debt * safety_ratio, without intermediate rounding"""
    if debt_amount == 0:
        return False
    lhs = collateral_amount * price * 10 ** debt_decimals * BPS_SCALE
    rhs = debt_amount * safety_ratio_bps * 10 ** price_decimals * 10 ** collateral_decimals
    return lhs < rhs

def is_liquidable(manager: PositionLedger, vault_id: int) -> bool:
    """Whether a vault of this manager is under-collateralized at the current price.

    Unknown ids come back from the ledger with zero debt and are never liquidable.
    """
    vault = manager.vault(vault_id)
    if vault.debt_amount == 0:
        return False

    config = manager.config
    price = get_price(manager.oracle)
    liquidable = is_below_safety_ratio(
        vault.collateral_amount,
        vault.debt_amount,
        price,
        config.safety_ratio_bps,
        manager.oracle.decimals(),
        config.collateral_token.decimals,
        config.debt_token.decimals,
    )
    logger.debug("Vault %s of %s: collateral %s, debt %s, price %s -> liquidable=%s",
                 vault_id, manager.address, vault.collateral_amount, vault.debt_amount,
                 price, liquidable)
    return liquidable

def check_liquidable_vaults(manager: PositionLedger) -> List[int]:
    """Ids 1..vault_count that are liquidable right now, ascending"""
    return [
        vault_id
        for vault_id in range(1, manager.vault_count() + 1)
        if is_liquidable(manager, vault_id)
    ]

def check_all_liquidable_vaults(managers: Iterable[PositionLedger]) -> Dict[str, List[int]]:
    """Liquidable ids per manager address, managers without candidates omitted"""
    candidates = {}
    for manager in managers:
        vault_ids = check_liquidable_vaults(manager)
        if vault_ids:
            candidates[manager.address] = vault_ids
    return candidates
