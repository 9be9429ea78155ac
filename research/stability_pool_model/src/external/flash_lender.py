"""Flash loan provider"""
from typing import Dict, Tuple
from ..errors import FlashLoanError
from ..instructions.calculate_amounts import calculate_flash_fee
from ..transaction import synchronized
from .token_bank import TokenBank

class FlashLender:
    """Lends its token balance for the duration of one atomic liquidation.

    The fee rate is agreed per loan by the borrower, so the engine's configured
    flash fee is the one enforced on repayment.
    """

    def __init__(self, bank: TokenBank, address: str = "flash_lender"):
        self.bank = bank
        self.address = address
        self.loans: Dict[Tuple[str, str], Tuple[int, int]] = {}  # (token, borrower) -> (principal, fee)

    @property
    def lock(self):
        return self.bank.lock

    @synchronized
    def outstanding(self, token: str, borrower: str) -> int:
        return self.loans.get((token, borrower), (0, 0))[0]

    @synchronized
    def owed(self, token: str, borrower: str) -> int:
        principal, fee = self.loans.get((token, borrower), (0, 0))
        return principal + fee

    @synchronized
    def flash_borrow(self, token: str, amount: int, borrower: str, fee_bps: int) -> int:
        """Send amount to borrower and return the fee owed on top of it"""
        if amount <= 0:
            raise ValueError("Loan amount must be positive")
        fee = calculate_flash_fee(amount, fee_bps)
        self.bank.transfer(token, self.address, borrower, amount)
        key = (token, borrower)
        principal, owed_fee = self.loans.get(key, (0, 0))
        self.loans[key] = (principal + amount, owed_fee + fee)
        return fee

    @synchronized
    def repay(self, token: str, amount: int, borrower: str) -> None:
        if self.outstanding(token, borrower) == 0:
            raise FlashLoanError(f"No loan of {token} outstanding for {borrower}")
        owed = self.owed(token, borrower)
        if amount < owed:
            raise FlashLoanError(f"Flash loan repayment {amount} below required {owed}")
        self.bank.transfer(token, borrower, self.address, amount)
        del self.loans[(token, borrower)]

    @synchronized
    def snapshot(self) -> Dict[Tuple[str, str], Tuple[int, int]]:
        return dict(self.loans)

    @synchronized
    def restore(self, snapshot: Dict[Tuple[str, str], Tuple[int, int]]) -> None:
        self.loans = dict(snapshot)
