"""Administrative surface of the stability pool"""
import pytest

from stability_pool_model.src.constants import ZERO_ADDRESS
from stability_pool_model.src.deployment import DEPLOYER, MUSD, REWARD_POOL, TREASURY, USDC, WETH
from stability_pool_model.src.errors import AuthorizationError, ConfigurationError
from conftest import USER

PATH = [WETH.address, USDC.address, MUSD.address]

def test_set_treasury(pool):
    with pytest.raises(ConfigurationError, match="Treasury address can't be 0"):
        pool.set_treasury(DEPLOYER, ZERO_ADDRESS)
    with pytest.raises(AuthorizationError):
        pool.set_treasury(USER, USER)
    assert pool.config.treasury == TREASURY

def test_set_reward_pool(pool):
    with pytest.raises(ConfigurationError, match="Reward pool address can't be 0"):
        pool.set_reward_pool(DEPLOYER, ZERO_ADDRESS)
    with pytest.raises(ConfigurationError):
        pool.set_reward_pool(DEPLOYER, "")
    with pytest.raises(AuthorizationError):
        pool.set_reward_pool(USER, USER)
    assert pool.config.reward_pool == REWARD_POOL

def test_set_flash_loan_fee(pool):
    with pytest.raises(ConfigurationError, match="Flash loan fee can't be 0"):
        pool.set_flash_loan_fee(DEPLOYER, 0)
    with pytest.raises(AuthorizationError):
        pool.set_flash_loan_fee(USER, 30)
    assert pool.config.flash_fee_bps == 30

def test_set_distribution_fees(pool):
    with pytest.raises(ConfigurationError, match="Fees too high"):
        pool.set_distribution_fees(DEPLOYER, 3000, 2000)
    with pytest.raises(AuthorizationError):
        pool.set_distribution_fees(USER, 200, 2000)
    assert pool.config.caller_fee_bps == 200
    assert pool.config.treasury_fee_bps == 2000

    pool.set_distribution_fees(DEPLOYER, 2999, 2000)
    assert (pool.config.caller_fee_bps, pool.config.treasury_fee_bps) == (2999, 2000)

def test_rejected_distribution_fees_leave_config_unchanged(pool):
    with pytest.raises(ConfigurationError):
        pool.set_distribution_fees(DEPLOYER, 100, 4900)
    assert (pool.config.caller_fee_bps, pool.config.treasury_fee_bps) == (200, 2000)

def test_set_swap_path(pool, ledger):
    with pytest.raises(AuthorizationError):
        pool.set_swap_path(USER, ledger, PATH)
    assert pool.config.swap_path(ledger.address) == PATH

def test_set_swap_path_checks_endpoints(pool, ledger):
    with pytest.raises(ConfigurationError):
        pool.set_swap_path(DEPLOYER, ledger, [WETH.address])
    with pytest.raises(ConfigurationError):
        pool.set_swap_path(DEPLOYER, ledger, [USDC.address, MUSD.address])
    with pytest.raises(ConfigurationError):
        pool.set_swap_path(DEPLOYER, ledger, [WETH.address, USDC.address])

    pool.set_swap_path(DEPLOYER, ledger, [WETH.address, MUSD.address])
    assert pool.config.swap_path(ledger.address) == [WETH.address, MUSD.address]

def test_swap_path_is_a_copy(pool, ledger):
    pool.config.swap_path(ledger.address).append("junk")
    assert pool.config.swap_path(ledger.address) == PATH

def test_set_slippage(pool):
    with pytest.raises(ConfigurationError):
        pool.set_slippage(DEPLOYER, -1)
    with pytest.raises(ConfigurationError):
        pool.set_slippage(DEPLOYER, 10_001)
    with pytest.raises(AuthorizationError):
        pool.set_slippage(USER, 100)
    pool.set_slippage(DEPLOYER, 100)
    assert pool.config.slippage_bps == 100

def test_transfer_admin(pool):
    with pytest.raises(AuthorizationError):
        pool.transfer_admin(USER, USER)
    with pytest.raises(ConfigurationError):
        pool.transfer_admin(DEPLOYER, ZERO_ADDRESS)

    pool.transfer_admin(DEPLOYER, USER)
    with pytest.raises(AuthorizationError):
        pool.set_flash_loan_fee(DEPLOYER, 50)
    pool.set_flash_loan_fee(USER, 50)
    assert pool.config.flash_fee_bps == 50
