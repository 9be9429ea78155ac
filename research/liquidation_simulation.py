import logging
import math
import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass
from typing import Dict, List, Optional
import pandas as pd
from pathlib import Path
from datetime import datetime

from stability_pool_model.src.constants import PRICE_SCALE, WAD, DEFAULT_SLIPPAGE_BPS
from stability_pool_model.src.deployment import (
    DEPLOYER,
    MUSD,
    USDC,
    WETH,
    deploy_reference,
)
from stability_pool_model.src.errors import StabilityPoolError

logger = logging.getLogger(__name__)

KEEPER = "keeper"
ARBITRAGEUR = "arbitrageur"

@dataclass
class SimulationParams:
    initial_price: float = 1000.0
    price_volatility: float = 0.01  # per step
    simulation_days: int = 30
    steps_per_day: int = 24  # hourly steps
    n_vaults: int = 50
    collateral_per_vault: int = 10  # whole WETH
    min_collateral_ratio: float = 1.25  # opening CR range
    max_collateral_ratio: float = 2.0
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    random_seed: Optional[int] = None
    experiment_name: str = "default"

class LiquidationSimulation:
    """Drives the reference deployment along a random price path and liquidates as it goes"""

    def __init__(self, params: SimulationParams):
        self.params = params
        self.times: List[float] = []
        self.prices: List[float] = []
        self.records: List[Dict] = []

        if params.random_seed is not None:
            np.random.seed(params.random_seed)

        self.deployment = deploy_reference(
            eth_price=self._to_oracle(params.initial_price),
            weth_usdc_reserves=(10_000 * WAD, int(10_000 * params.initial_price) * WAD),
            usdc_musd_reserves=(10_000_000 * WAD, 10_000_000 * WAD),
            max_debt=None,
        )
        self.deployment.pool.set_slippage(DEPLOYER, params.slippage_bps)
        bank = self.deployment.bank
        bank.mint(MUSD.address, self.deployment.ledger.address, 100_000_000 * WAD)
        bank.mint(WETH.address, ARBITRAGEUR, 1_000_000 * WAD)
        bank.mint(USDC.address, ARBITRAGEUR, 1_000_000_000 * WAD)
        self._open_vaults()

    @staticmethod
    def _to_oracle(price: float) -> int:
        return int(price * PRICE_SCALE)

    def _open_vaults(self):
        collateral = self.params.collateral_per_vault * WAD
        ratios = np.random.uniform(self.params.min_collateral_ratio,
                                   self.params.max_collateral_ratio,
                                   self.params.n_vaults)
        for i, ratio in enumerate(ratios):
            debt = int(self.params.collateral_per_vault * self.params.initial_price / ratio) * WAD
            self.deployment.open_vault(f"borrower_{i}", collateral, debt)

    def _arbitrage(self, price: float):
        """Trade the WETH/USDC pool back to the oracle price, ignoring the pool fee"""
        router = self.deployment.router
        reserve_weth, reserve_usdc = router.get_reserves(WETH.address, USDC.address)
        k = reserve_weth * reserve_usdc
        target_weth = math.isqrt(int(k * PRICE_SCALE // self._to_oracle(price)))
        if target_weth > reserve_weth:
            path, amount_in = [WETH.address, USDC.address], target_weth - reserve_weth
        else:
            target_usdc = k // target_weth
            path, amount_in = [USDC.address, WETH.address], target_usdc - reserve_usdc
        if amount_in > 0:
            router.swap_exact_tokens_for_tokens(amount_in, 0, path, ARBITRAGEUR, ARBITRAGEUR)

    def step(self, step: int, current_price: float):
        deployment = self.deployment
        deployment.oracle.update_answer(self._to_oracle(current_price))
        self._arbitrage(current_price)

        for vault_id in deployment.pool.check_liquidable_vaults(deployment.ledger):
            record = {
                "time": step / self.params.steps_per_day,
                "price": current_price,
                "vault_id": vault_id,
            }
            try:
                result = deployment.pool.liquidate(deployment.ledger, vault_id, KEEPER)
            except StabilityPoolError as e:
                record.update(status="failed", error=type(e).__name__)
            else:
                record.update(status="liquidated", error=None)
                record.update({key: value / WAD for key, value in result.to_dict().items()
                               if isinstance(value, int) and key != "vault_id"})
            self.records.append(record)

    def simulate(self):
        current_price = self.params.initial_price
        total_steps = self.params.simulation_days * self.params.steps_per_day

        for step in range(total_steps):
            # Simulate price movement with Brownian motion
            price_change = np.random.normal(0, self.params.price_volatility)
            current_price = max(current_price * (1 + price_change), 1.0)

            self.step(step, current_price)

            self.times.append(step / self.params.steps_per_day)
            self.prices.append(current_price)

        return self.times, self.prices, self.records

    def to_dataframe(self) -> pd.DataFrame:
        columns = ["time", "price", "vault_id", "status", "error"]
        return pd.DataFrame(self.records, columns=None if self.records else columns)

    def summary(self) -> Dict:
        df = self.to_dataframe()
        liquidated = df[df["status"] == "liquidated"] if not df.empty else df
        return {
            "slippage_bps": self.params.slippage_bps,
            "liquidations": len(liquidated),
            "failed_attempts": len(df) - len(liquidated),
            "open_liquidable": len(self.deployment.pool.check_liquidable_vaults(self.deployment.ledger)),
            "caller_fees": liquidated["caller_fee"].sum() if len(liquidated) else 0.0,
            "treasury_fees": liquidated["treasury_fee"].sum() if len(liquidated) else 0.0,
            "reward_pool": liquidated["reward_pool_share"].sum() if len(liquidated) else 0.0,
        }

    def plot_results(self):
        output_dir = Path('research/results') / self.params.experiment_name
        output_dir.mkdir(parents=True, exist_ok=True)

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8))

        # Plot price with liquidations
        ax1.plot(self.times, self.prices, label='ETH Oracle Price')
        df = self.to_dataframe()
        if not df.empty:
            liquidated = df[df["status"] == "liquidated"]
            failed = df[df["status"] == "failed"]
            ax1.scatter(liquidated["time"], liquidated["price"], color='g', marker='v',
                        label='Liquidation')
            ax1.scatter(failed["time"], failed["price"], color='r', marker='x',
                        label='Failed attempt')
        ax1.set_ylabel('Price (USD)')
        ax1.set_title('Collateral Price and Liquidations')
        ax1.legend()
        ax1.grid(True)

        # Plot cumulative distribution of profit
        if not df.empty and (df["status"] == "liquidated").any():
            liquidated = df[df["status"] == "liquidated"]
            for column, label in [("caller_fee", "Caller"), ("treasury_fee", "Treasury"),
                                  ("reward_pool_share", "Reward Pool")]:
                ax2.step(liquidated["time"], liquidated[column].cumsum(), where='post', label=label)
        ax2.set_ylabel('Cumulative WETH')
        ax2.set_xlabel('Time (days)')
        ax2.set_title('Liquidation Profit Distribution')
        ax2.legend()
        ax2.grid(True)

        plt.tight_layout()

        plot_name = f"vol_{self.params.price_volatility}_slippage_{self.params.slippage_bps}"
        if self.params.random_seed is not None:
            plot_name += f"_seed_{self.params.random_seed}"

        plt.savefig(output_dir / f"{plot_name}.png")
        plt.close()

def compare_slippage_settings(slippages: List[int], base_params: SimulationParams) -> pd.DataFrame:
    """Run the same price path under different slippage tolerances and plot the outcomes"""
    output_dir = Path('research/results/slippage_comparison')
    output_dir.mkdir(parents=True, exist_ok=True)

    rows = []
    for slippage_bps in slippages:
        params = SimulationParams(**{**base_params.__dict__, "slippage_bps": slippage_bps})
        sim = LiquidationSimulation(params)
        sim.simulate()
        rows.append(sim.summary())
    summary = pd.DataFrame(rows).set_index("slippage_bps")

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10))
    summary[["liquidations", "failed_attempts"]].plot.bar(ax=ax1)
    ax1.set_ylabel('Count')
    ax1.set_title('Liquidation Outcomes by Slippage Tolerance')
    ax1.grid(True, alpha=0.3)

    summary[["caller_fees", "treasury_fees", "reward_pool"]].plot.bar(ax=ax2, stacked=True)
    ax2.set_ylabel('WETH')
    ax2.set_xlabel('Slippage (bps)')
    ax2.set_title('Distributed Profit by Slippage Tolerance')
    ax2.grid(True, alpha=0.3)

    seed_text = f"Random Seed: {base_params.random_seed}" if base_params.random_seed is not None else "No Seed"
    fig.text(0.02, 0.02, seed_text, fontsize=8, alpha=0.7)

    plt.tight_layout()

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    plt.savefig(output_dir / f"slippage_comparison_{timestamp}.png", bbox_inches='tight', dpi=300)
    plt.close()
    return summary

def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    base_params = SimulationParams(
        experiment_name="slippage_comparison",
        random_seed=57,
        simulation_days=30,
        price_volatility=0.015,
    )

    summary = compare_slippage_settings([0, 50, 200, 500], base_params)
    print(summary.to_string())

    # # single run for testing
    # sim = LiquidationSimulation(SimulationParams(experiment_name="single_run", random_seed=42))
    # sim.simulate()
    # sim.plot_results()

if __name__ == "__main__":
    main()
