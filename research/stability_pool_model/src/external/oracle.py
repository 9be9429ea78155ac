"""Mock price feed"""
from ..constants import PRICE_DECIMALS

class MockAggregator:
    """Chainlink style aggregator holding a single settable answer"""

    def __init__(self, initial_answer: int, decimals: int = PRICE_DECIMALS):
        self._decimals = decimals
        self._answer = initial_answer
        self.round_id = 1

    def latest_answer(self) -> int:
        return self._answer

    def decimals(self) -> int:
        return self._decimals

    def update_answer(self, answer: int) -> None:
        self._answer = answer
        self.round_id += 1
