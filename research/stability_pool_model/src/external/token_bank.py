"""In-memory token balances shared by every collaborator"""
import threading
from typing import Dict
from ..errors import InsufficientBalanceError
from ..transaction import synchronized

class TokenBank:
    """Balances per token per holder, in the token's smallest unit.

    `lock` guards this bank and every ledger, router and lender built on it.
    """

    def __init__(self):
        self.balances: Dict[str, Dict[str, int]] = {}
        self.lock = threading.RLock()

    @synchronized
    def balance_of(self, token: str, holder: str) -> int:
        return self.balances.get(token, {}).get(holder, 0)

    @synchronized
    def mint(self, token: str, to: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Mint amount can't be negative")
        holders = self.balances.setdefault(token, {})
        holders[to] = holders.get(to, 0) + amount

    @synchronized
    def transfer(self, token: str, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Transfer amount can't be negative")
        balance = self.balance_of(token, sender)
        if balance < amount:
            raise InsufficientBalanceError(
                f"{sender} holds {balance} of {token}, needs {amount}"
            )
        holders = self.balances.setdefault(token, {})
        holders[sender] = balance - amount
        holders[recipient] = holders.get(recipient, 0) + amount

    @synchronized
    def snapshot(self) -> Dict[str, Dict[str, int]]:
        return {token: dict(holders) for token, holders in self.balances.items()}

    @synchronized
    def restore(self, snapshot: Dict[str, Dict[str, int]]) -> None:
        self.balances = {token: dict(holders) for token, holders in snapshot.items()}
