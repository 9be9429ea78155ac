"""Engine configuration from environment variables"""
import os
from typing import Mapping, Optional
from .constants import (
    DEFAULT_CALLER_FEE_BPS,
    DEFAULT_FLASH_FEE_BPS,
    DEFAULT_SLIPPAGE_BPS,
    DEFAULT_TREASURY_FEE_BPS,
)
from .errors import ConfigurationError
from .state.engine_config import (
    EngineConfig,
    validate_address,
    validate_distribution_fees,
    validate_flash_fee,
    validate_slippage,
)

ENV_PREFIX = "STABILITY_POOL_"

def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX + name} must be an integer, got {raw!r}") from None

def load_engine_config(env: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build an EngineConfig from STABILITY_POOL_* variables.

    ADMIN, TREASURY and REWARD_POOL are required; fee and slippage settings fall
    back to the defaults in constants. Values go through the same checks as the
    admin instructions. Swap paths are not read from the environment.
    """
    if env is None:
        env = os.environ

    admin = validate_address(env.get(ENV_PREFIX + "ADMIN"), "Admin")
    treasury = validate_address(env.get(ENV_PREFIX + "TREASURY"), "Treasury")
    reward_pool = validate_address(env.get(ENV_PREFIX + "REWARD_POOL"), "Reward pool")

    flash_fee_bps = validate_flash_fee(_int_setting(env, "FLASH_FEE_BPS", DEFAULT_FLASH_FEE_BPS))
    caller_fee_bps = _int_setting(env, "CALLER_FEE_BPS", DEFAULT_CALLER_FEE_BPS)
    treasury_fee_bps = _int_setting(env, "TREASURY_FEE_BPS", DEFAULT_TREASURY_FEE_BPS)
    validate_distribution_fees(caller_fee_bps, treasury_fee_bps)
    slippage_bps = validate_slippage(_int_setting(env, "SLIPPAGE_BPS", DEFAULT_SLIPPAGE_BPS))

    return EngineConfig(
        admin=admin,
        treasury=treasury,
        reward_pool=reward_pool,
        flash_fee_bps=flash_fee_bps,
        caller_fee_bps=caller_fee_bps,
        treasury_fee_bps=treasury_fee_bps,
        slippage_bps=slippage_bps,
    )
