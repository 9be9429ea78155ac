"""Swap sizing, flash fee and profit distribution arithmetic"""
import logging
from typing import Optional, Tuple
from ..constants import BPS_SCALE
from ..interfaces import MarketRouter, PositionLedger
from ..state.engine_config import EngineConfig

logger = logging.getLogger(__name__)

def ceil_div(a: int, b: int) -> int:
    """Integer division rounding up, for non-negative a and positive b"""
    return -(-a // b)

def apply_slippage(no_slippage_amount_in: int, slippage_bps: int) -> int:
    """Input bound including the slippage buffer, never smaller than requested"""
    if slippage_bps < 0:
        raise ValueError("Slippage can't be negative")
    return ceil_div(no_slippage_amount_in * (BPS_SCALE + slippage_bps), BPS_SCALE)

def calculate_amount_in_max(
    config: EngineConfig,
    router: MarketRouter,
    manager: PositionLedger,
    amount_out: int,
    slippage_bps: Optional[int] = None
) -> int:
    """Most collateral we accept to pay for exactly amount_out of the debt token.

    Router failures (missing pair, insufficient liquidity) propagate untouched.
    """
    if amount_out <= 0:
        raise ValueError("Amount out must be positive")
    if slippage_bps is None:
        slippage_bps = config.slippage_bps

    path = config.swap_path(manager.address)
    no_slippage_amount_in = router.get_amounts_in(amount_out, path)[0]
    amount_in_max = apply_slippage(no_slippage_amount_in, slippage_bps)

    logger.debug("Amount in max for %s out via %s: quote %s, slippage %s bps -> %s",
                 amount_out, path, no_slippage_amount_in, slippage_bps, amount_in_max)
    return amount_in_max

def calculate_flash_fee(amount: int, flash_fee_bps: int) -> int:
    """Fee owed to the flash lender, rounded up"""
    return ceil_div(amount * flash_fee_bps, BPS_SCALE)

def calculate_distribution(config: EngineConfig, amount: int) -> Tuple[int, int, int]:
    """Split amount into (caller fee, treasury fee, reward pool remainder)"""
    if amount < 0:
        raise ValueError("Distribution amount can't be negative")
    caller_fee = amount * config.caller_fee_bps // BPS_SCALE
    treasury_fee = amount * config.treasury_fee_bps // BPS_SCALE
    # remainder by subtraction so the three parts always add back to amount
    remainder = amount - caller_fee - treasury_fee
    return caller_fee, treasury_fee, remainder
