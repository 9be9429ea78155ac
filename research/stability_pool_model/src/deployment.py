"""Reference deployment: WETH vaults borrowing mUSD, sold through WETH -> USDC -> mUSD

    Vault stats               StabilityPool stats             Market stats
    -----------               -------------------             ------------
    ETH PRICE = $1000         Caller fee = 2% of profit       WETH/USDC = 10K / 9M (ETH at 900)
    VAULT CDR = 120%          Treasury fee = 20% of profit    USDC/mUSD = 1M / 1M
    MAX DEBT = $100K          Flash loan fee = 0.3%
"""
from dataclasses import dataclass
from typing import Optional
from .constants import PRICE_SCALE, WAD
from .external.flash_lender import FlashLender
from .external.oracle import MockAggregator
from .external.router import ConstantProductRouter
from .external.token_bank import TokenBank
from .external.vault_ledger import FixedVaultLedger
from .stability_pool import StabilityPool
from .state.engine_config import EngineConfig
from .state.vault_manager import Token, VaultManagerConfig

WETH = Token("weth", "WETH")
USDC = Token("usdc", "USDC")
MUSD = Token("musd", "mUSD")

DEPLOYER = "deployer"
TREASURY = "treasury"
REWARD_POOL = "reward_pool"
MARKET_MAKER = "market_maker"

ETH_ORACLE_PRICE_1000 = 1000 * PRICE_SCALE
ETH_ORACLE_PRICE_900 = 900 * PRICE_SCALE

@dataclass
class ReferenceDeployment:
    bank: TokenBank
    oracle: MockAggregator
    ledger: FixedVaultLedger
    router: ConstantProductRouter
    lender: FlashLender
    pool: StabilityPool

    def open_vault(self, owner: str, collateral: int, debt: int) -> int:
        """Mint collateral to owner, then create, deposit and borrow"""
        self.bank.mint(WETH.address, owner, collateral)
        vault_id = self.ledger.create_vault(owner)
        self.ledger.deposit_collateral(vault_id, collateral)
        if debt:
            self.ledger.borrow_token(vault_id, debt, owner)
        return vault_id

def deploy_reference(
    eth_price: int = ETH_ORACLE_PRICE_1000,
    safety_ratio_bps: int = 12_000,
    weth_usdc_reserves: tuple = (10_000 * WAD, 9_000_000 * WAD),
    usdc_musd_reserves: tuple = (1_000_000 * WAD, 1_000_000 * WAD),
    lender_liquidity: int = 1_000_000 * WAD,
    max_debt: Optional[int] = 100_000 * WAD,
) -> ReferenceDeployment:
    bank = TokenBank()
    oracle = MockAggregator(eth_price)
    ledger = FixedVaultLedger(
        VaultManagerConfig("fixed_weth_vault", WETH, MUSD, safety_ratio_bps),
        oracle,
        bank,
        max_debt=max_debt,
    )
    bank.mint(MUSD.address, ledger.address, 1_000_000 * WAD)

    router = ConstantProductRouter(bank)
    bank.mint(USDC.address, MARKET_MAKER, weth_usdc_reserves[1] + usdc_musd_reserves[0])
    bank.mint(MUSD.address, MARKET_MAKER, usdc_musd_reserves[1])
    bank.mint(WETH.address, MARKET_MAKER, weth_usdc_reserves[0])
    router.add_liquidity(USDC.address, MUSD.address, *usdc_musd_reserves, MARKET_MAKER)
    router.add_liquidity(WETH.address, USDC.address, *weth_usdc_reserves, MARKET_MAKER)

    lender = FlashLender(bank)
    bank.mint(MUSD.address, lender.address, lender_liquidity)

    pool = StabilityPool(EngineConfig(admin=DEPLOYER), bank, router, lender)
    ledger.set_stability_pool(pool.address)
    pool.set_treasury(DEPLOYER, TREASURY)
    pool.set_reward_pool(DEPLOYER, REWARD_POOL)
    pool.set_flash_loan_fee(DEPLOYER, 30)
    pool.set_distribution_fees(DEPLOYER, 200, 2000)
    pool.set_swap_path(DEPLOYER, ledger, [WETH.address, USDC.address, MUSD.address])

    return ReferenceDeployment(bank, oracle, ledger, router, lender, pool)
