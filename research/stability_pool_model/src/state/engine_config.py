"""Engine configuration and its validation rules"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from ..constants import (
    BPS_SCALE,
    DEFAULT_CALLER_FEE_BPS,
    DEFAULT_FLASH_FEE_BPS,
    DEFAULT_SLIPPAGE_BPS,
    DEFAULT_TREASURY_FEE_BPS,
    MAX_DISTRIBUTION_FEE_BPS,
    ZERO_ADDRESS,
)
from ..errors import ConfigurationError

@dataclass
class EngineConfig:
    """Process-wide liquidation parameters, mutated only through instructions.admin"""
    admin: str
    treasury: Optional[str] = None
    reward_pool: Optional[str] = None
    flash_fee_bps: int = DEFAULT_FLASH_FEE_BPS
    caller_fee_bps: int = DEFAULT_CALLER_FEE_BPS
    treasury_fee_bps: int = DEFAULT_TREASURY_FEE_BPS
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    swap_paths: Dict[str, List[str]] = field(default_factory=dict)  # manager address -> path

    def swap_path(self, manager_address: str) -> List[str]:
        """Configured router path for a manager, collateral first and debt last"""
        path = self.swap_paths.get(manager_address)
        if not path:
            raise ConfigurationError(f"No swap path configured for manager {manager_address}")
        return list(path)

    def require_payees(self) -> None:
        """Treasury and reward pool must be set before any liquidation"""
        if not is_valid_address(self.treasury):
            raise ConfigurationError("Treasury address is not configured")
        if not is_valid_address(self.reward_pool):
            raise ConfigurationError("Reward pool address is not configured")

def is_valid_address(address: Optional[str]) -> bool:
    return bool(address) and address != ZERO_ADDRESS

def validate_address(address: Optional[str], name: str) -> str:
    if not is_valid_address(address):
        raise ConfigurationError(f"{name} address can't be 0")
    return address

def validate_flash_fee(flash_fee_bps: int) -> int:
    if flash_fee_bps <= 0:
        raise ConfigurationError("Flash loan fee can't be 0")
    if flash_fee_bps >= BPS_SCALE:
        raise ConfigurationError("Flash loan fee too high")
    return flash_fee_bps

def validate_distribution_fees(caller_fee_bps: int, treasury_fee_bps: int) -> None:
    if caller_fee_bps < 0 or treasury_fee_bps < 0:
        raise ConfigurationError("Fees can't be negative")
    if caller_fee_bps + treasury_fee_bps >= MAX_DISTRIBUTION_FEE_BPS:
        raise ConfigurationError("Fees too high")

def validate_slippage(slippage_bps: int) -> int:
    if not 0 <= slippage_bps <= BPS_SCALE:
        raise ConfigurationError(f"Slippage must be between 0 and {BPS_SCALE} bps")
    return slippage_bps
