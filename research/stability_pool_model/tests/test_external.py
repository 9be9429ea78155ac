"""Reference collaborators: bank, router, flash lender and vault ledger"""
import pytest

from stability_pool_model.src.constants import WAD
from stability_pool_model.src.deployment import ETH_ORACLE_PRICE_900, MUSD, USDC, WETH
from stability_pool_model.src.errors import (
    AuthorizationError,
    ConfigurationError,
    FlashLoanError,
    InsufficientBalanceError,
    InsufficientCollateralError,
    InsufficientLiquidityError,
    SlippageExceededError,
)
from stability_pool_model.src.external.flash_lender import FlashLender
from stability_pool_model.src.external.router import get_amount_in, get_amount_out
from stability_pool_model.src.external.token_bank import TokenBank
from conftest import EIGHTY_THOUSAND_ETHER, HUNDRED_ETHER, USER, USER2

def test_token_bank_transfer():
    bank = TokenBank()
    bank.mint("tkn", "a", 10)
    bank.transfer("tkn", "a", "b", 4)
    assert (bank.balance_of("tkn", "a"), bank.balance_of("tkn", "b")) == (6, 4)

    with pytest.raises(InsufficientBalanceError):
        bank.transfer("tkn", "a", "b", 7)
    with pytest.raises(ValueError):
        bank.transfer("tkn", "a", "b", -1)

def test_get_amount_in_and_out():
    # 1M / 1M pool, 0.3% fee
    amount_in = get_amount_in(1000, 1_000_000, 1_000_000)
    assert amount_in == 1_000_000 * 1000 * 1000 // (999_000 * 997) + 1
    assert get_amount_out(amount_in, 1_000_000, 1_000_000) >= 1000

    with pytest.raises(InsufficientLiquidityError):
        get_amount_in(1_000_000, 1_000_000, 1_000_000)
    with pytest.raises(ValueError):
        get_amount_in(0, 1_000_000, 1_000_000)

def test_router_paths(deployment):
    router = deployment.router
    path = [WETH.address, USDC.address, MUSD.address]
    amounts = router.get_amounts_in(50_000 * WAD, path)

    assert amounts[-1] == 50_000 * WAD
    assert len(amounts) == 3
    assert router.get_amounts_out(amounts[0], path)[-1] >= 50_000 * WAD

    with pytest.raises(ConfigurationError):
        router.get_amounts_in(WAD, [WETH.address])
    with pytest.raises(InsufficientLiquidityError):
        router.get_amounts_in(WAD, [WETH.address, MUSD.address])  # no direct pair

def test_router_exact_output_swap(deployment):
    router, bank = deployment.router, deployment.bank
    path = [WETH.address, USDC.address]
    bank.mint(WETH.address, "trader", 10 * WAD)
    reserves_before = router.get_reserves(WETH.address, USDC.address)
    quote = router.get_amounts_in(1_000 * WAD, path)[0]

    with pytest.raises(SlippageExceededError):
        router.swap_tokens_for_exact_tokens(1_000 * WAD, quote - 1, path, "trader", "trader")

    amounts = router.swap_tokens_for_exact_tokens(1_000 * WAD, quote, path, "trader", "trader")

    assert amounts == [quote, 1_000 * WAD]
    assert bank.balance_of(USDC.address, "trader") == 1_000 * WAD
    assert bank.balance_of(WETH.address, "trader") == 10 * WAD - quote
    assert router.get_reserves(WETH.address, USDC.address) == (
        reserves_before[0] + quote, reserves_before[1] - 1_000 * WAD
    )
    pair = router.pair(WETH.address, USDC.address)
    assert bank.balance_of(WETH.address, pair.address) == router.get_reserves(WETH.address, USDC.address)[0]

def test_flash_lender():
    bank = TokenBank()
    lender = FlashLender(bank)
    bank.mint("musd", lender.address, 1000)
    bank.mint("musd", "borrower", 10)

    assert lender.flash_borrow("musd", 1000, "borrower", 30) == 3
    assert lender.outstanding("musd", "borrower") == 1000
    assert lender.owed("musd", "borrower") == 1003

    with pytest.raises(FlashLoanError):
        lender.repay("musd", 1002, "borrower")
    lender.repay("musd", 1003, "borrower")

    assert lender.outstanding("musd", "borrower") == 0
    assert bank.balance_of("musd", lender.address) == 1003
    with pytest.raises(FlashLoanError):
        lender.repay("musd", 1, "borrower")

def test_ledger_borrow_limits(deployment, ledger):
    vault_id = deployment.open_vault(USER2, HUNDRED_ETHER, 0)

    with pytest.raises(AuthorizationError):
        ledger.borrow_token(vault_id, WAD, USER)
    with pytest.raises(InsufficientCollateralError):
        ledger.borrow_token(vault_id, 90_000 * WAD, USER2)  # 111% CR

    deployment.oracle.update_answer(ETH_ORACLE_PRICE_900)
    ledger.borrow_token(vault_id, 75_000 * WAD, USER2)  # exactly 120%
    assert ledger.vault(vault_id).debt_amount == 75_000 * WAD
    assert deployment.bank.balance_of(MUSD.address, USER2) == 75_000 * WAD

    ledger.set_max_debt(EIGHTY_THOUSAND_ETHER)
    deployment.oracle.update_answer(2000 * 10 ** 8)
    with pytest.raises(InsufficientCollateralError):
        ledger.borrow_token(vault_id, 10_000 * WAD, USER2)

def test_ledger_vault_is_a_copy(ledger):
    vault = ledger.vault(1)
    vault.debt_amount = 0
    assert ledger.vault(1).debt_amount == EIGHTY_THOUSAND_ETHER

def test_ledger_only_pool_can_close(pool, ledger):
    with pytest.raises(AuthorizationError):
        ledger.close_vault(1, USER)
    assert not ledger.vault(1).closed

def test_flash_lender_charges_the_borrowers_rate():
    bank = TokenBank()
    lender = FlashLender(bank)
    bank.mint("musd", lender.address, 10_000)
    bank.mint("musd", "borrower", 100)

    # 1 bps of 10000 is exactly 1, 7 bps of 1 rounds up to 1
    assert lender.flash_borrow("musd", 10_000, "borrower", 1) == 1
    lender.repay("musd", 10_001, "borrower")
    assert lender.flash_borrow("musd", 1, "borrower", 7) == 1
    assert lender.owed("musd", "borrower") == 2
