"""Administrative instructions on the engine configuration"""
import logging
from typing import List
from ..errors import AuthorizationError, ConfigurationError
from ..interfaces import PositionLedger
from ..state.engine_config import (
    EngineConfig,
    validate_address,
    validate_distribution_fees,
    validate_flash_fee,
    validate_slippage,
)

logger = logging.getLogger(__name__)

def only_admin(config: EngineConfig, caller: str) -> None:
    if caller != config.admin:
        raise AuthorizationError(f"{caller} is not the admin")

def set_treasury(config: EngineConfig, caller: str, treasury: str) -> None:
    only_admin(config, caller)
    config.treasury = validate_address(treasury, "Treasury")
    logger.info("Treasury set to %s", treasury)

def set_reward_pool(config: EngineConfig, caller: str, reward_pool: str) -> None:
    only_admin(config, caller)
    config.reward_pool = validate_address(reward_pool, "Reward pool")
    logger.info("Reward pool set to %s", reward_pool)

def set_flash_loan_fee(config: EngineConfig, caller: str, flash_fee_bps: int) -> None:
    only_admin(config, caller)
    config.flash_fee_bps = validate_flash_fee(flash_fee_bps)
    logger.info("Flash loan fee set to %s bps", flash_fee_bps)

def set_distribution_fees(config: EngineConfig, caller: str, caller_fee_bps: int,
                          treasury_fee_bps: int) -> None:
    only_admin(config, caller)
    validate_distribution_fees(caller_fee_bps, treasury_fee_bps)
    config.caller_fee_bps = caller_fee_bps
    config.treasury_fee_bps = treasury_fee_bps
    logger.info("Distribution fees set to caller %s bps, treasury %s bps",
                caller_fee_bps, treasury_fee_bps)

def set_slippage(config: EngineConfig, caller: str, slippage_bps: int) -> None:
    only_admin(config, caller)
    config.slippage_bps = validate_slippage(slippage_bps)
    logger.info("Slippage set to %s bps", slippage_bps)

def set_swap_path(config: EngineConfig, caller: str, manager: PositionLedger,
                  path: List[str]) -> None:
    """Router path for a manager: its collateral token first, its debt token last"""
    only_admin(config, caller)
    if len(path) < 2:
        raise ConfigurationError("Swap path needs at least two tokens")
    if path[0] != manager.config.collateral_token.address:
        raise ConfigurationError("Swap path must start with the collateral token")
    if path[-1] != manager.config.debt_token.address:
        raise ConfigurationError("Swap path must end with the debt token")
    config.swap_paths[manager.address] = list(path)
    logger.info("Swap path for %s set to %s", manager.address, path)

def transfer_admin(config: EngineConfig, caller: str, new_admin: str) -> None:
    only_admin(config, caller)
    config.admin = validate_address(new_admin, "Admin")
    logger.info("Admin transferred from %s to %s", caller, new_admin)
