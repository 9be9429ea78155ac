"""Constant product market maker router"""
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple
from ..constants import POOL_FEE_NUMERATOR, POOL_FEE_DENOMINATOR
from ..errors import ConfigurationError, InsufficientLiquidityError, SlippageExceededError
from ..transaction import synchronized
from .token_bank import TokenBank

@dataclass
class Pair:
    """x * y = k pool between two tokens"""
    token0: str
    token1: str
    reserve0: int = 0
    reserve1: int = 0

    @property
    def address(self) -> str:
        return f"pair:{self.token0}-{self.token1}"

    def reserves(self, token_in: str) -> Tuple[int, int]:
        """(reserve_in, reserve_out) for a swap starting from token_in"""
        if token_in == self.token0:
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0

    def apply_swap(self, token_in: str, amount_in: int, amount_out: int) -> None:
        if token_in == self.token0:
            self.reserve0 += amount_in
            self.reserve1 -= amount_out
        else:
            self.reserve1 += amount_in
            self.reserve0 -= amount_out

def sort_tokens(token_a: str, token_b: str) -> Tuple[str, str]:
    if token_a == token_b:
        raise ConfigurationError("IDENTICAL_ADDRESSES")
    return (token_a, token_b) if token_a < token_b else (token_b, token_a)

def get_amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """Input needed for an exact output, rounded up by one unit"""
    if amount_out <= 0:
        raise ValueError("INSUFFICIENT_OUTPUT_AMOUNT")
    if reserve_in <= 0 or amount_out >= reserve_out:
        raise InsufficientLiquidityError("INSUFFICIENT_LIQUIDITY")
    numerator = reserve_in * amount_out * POOL_FEE_DENOMINATOR
    denominator = (reserve_out - amount_out) * POOL_FEE_NUMERATOR
    return numerator // denominator + 1

def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    if amount_in <= 0:
        raise ValueError("INSUFFICIENT_INPUT_AMOUNT")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError("INSUFFICIENT_LIQUIDITY")
    amount_in_with_fee = amount_in * POOL_FEE_NUMERATOR
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * POOL_FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator

class ConstantProductRouter:
    """Routes swaps across pairs along a token path"""

    def __init__(self, bank: TokenBank, address: str = "router"):
        self.bank = bank
        self.address = address
        self.pairs: Dict[Tuple[str, str], Pair] = {}

    @property
    def lock(self):
        return self.bank.lock

    @synchronized
    def pair(self, token_a: str, token_b: str) -> Pair:
        key = sort_tokens(token_a, token_b)
        if key not in self.pairs:
            raise InsufficientLiquidityError(f"No pair for {token_a}/{token_b}")
        return self.pairs[key]

    @synchronized
    def get_reserves(self, token_a: str, token_b: str) -> Tuple[int, int]:
        return self.pair(token_a, token_b).reserves(token_a)

    @synchronized
    def add_liquidity(self, token_a: str, token_b: str, amount_a: int, amount_b: int,
                      provider: str) -> Pair:
        if amount_a <= 0 or amount_b <= 0:
            raise ValueError("Liquidity amounts must be positive")
        key = sort_tokens(token_a, token_b)
        pair = self.pairs.setdefault(key, Pair(*key))
        self.bank.transfer(token_a, provider, pair.address, amount_a)
        self.bank.transfer(token_b, provider, pair.address, amount_b)
        if token_a == pair.token0:
            pair.reserve0 += amount_a
            pair.reserve1 += amount_b
        else:
            pair.reserve0 += amount_b
            pair.reserve1 += amount_a
        return pair

    @synchronized
    def get_amounts_in(self, amount_out: int, path: List[str]) -> List[int]:
        if len(path) < 2:
            raise ConfigurationError("INVALID_PATH")
        amounts = [0] * len(path)
        amounts[-1] = amount_out
        for i in range(len(path) - 1, 0, -1):
            reserve_in, reserve_out = self.get_reserves(path[i - 1], path[i])
            amounts[i - 1] = get_amount_in(amounts[i], reserve_in, reserve_out)
        return amounts

    @synchronized
    def get_amounts_out(self, amount_in: int, path: List[str]) -> List[int]:
        if len(path) < 2:
            raise ConfigurationError("INVALID_PATH")
        amounts = [amount_in]
        for i in range(len(path) - 1):
            reserve_in, reserve_out = self.get_reserves(path[i], path[i + 1])
            amounts.append(get_amount_out(amounts[i], reserve_in, reserve_out))
        return amounts

    @synchronized
    def swap_tokens_for_exact_tokens(self, amount_out: int, amount_in_max: int, path: List[str],
                                     sender: str, recipient: str) -> List[int]:
        amounts = self.get_amounts_in(amount_out, path)
        if amounts[0] > amount_in_max:
            raise SlippageExceededError(
                f"EXCESSIVE_INPUT_AMOUNT: needs {amounts[0]}, max {amount_in_max}"
            )
        self._swap(amounts, path, sender, recipient)
        return amounts

    @synchronized
    def swap_exact_tokens_for_tokens(self, amount_in: int, amount_out_min: int, path: List[str],
                                     sender: str, recipient: str) -> List[int]:
        amounts = self.get_amounts_out(amount_in, path)
        if amounts[-1] < amount_out_min:
            raise SlippageExceededError(
                f"INSUFFICIENT_OUTPUT_AMOUNT: got {amounts[-1]}, min {amount_out_min}"
            )
        self._swap(amounts, path, sender, recipient)
        return amounts

    def _swap(self, amounts: List[int], path: List[str], sender: str, recipient: str) -> None:
        # input travels sender -> first pair -> ... -> last pair -> recipient
        first = self.pair(path[0], path[1])
        self.bank.transfer(path[0], sender, first.address, amounts[0])
        for i in range(len(path) - 1):
            pair = self.pair(path[i], path[i + 1])
            pair.apply_swap(path[i], amounts[i], amounts[i + 1])
            if i < len(path) - 2:
                to = self.pair(path[i + 1], path[i + 2]).address
            else:
                to = recipient
            self.bank.transfer(path[i + 1], pair.address, to, amounts[i + 1])

    @synchronized
    def snapshot(self) -> Dict[Tuple[str, str], Pair]:
        return {key: replace(pair) for key, pair in self.pairs.items()}

    @synchronized
    def restore(self, snapshot: Dict[Tuple[str, str], Pair]) -> None:
        self.pairs = {key: replace(pair) for key, pair in snapshot.items()}
