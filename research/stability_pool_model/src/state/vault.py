"""Vault state management"""
from dataclasses import dataclass

@dataclass
class Vault:
    """Represents a collateral-backed debt position"""
    id: int
    owner: str  # Using string instead of address
    collateral_amount: int = 0  # collateral token units
    debt_amount: int = 0  # debt token units
    closed: bool = False

    def deposit(self, amount: int) -> None:
        """Deposit collateral"""
        if amount <= 0:
            raise ValueError("Deposit amount must be positive")
        self.collateral_amount += amount

    def borrow(self, amount: int) -> None:
        """Increase debt"""
        if amount <= 0:
            raise ValueError("Borrow amount must be positive")
        self.debt_amount += amount

    def close(self) -> int:
        """Zero out the vault and return the collateral it held"""
        seized = self.collateral_amount
        self.collateral_amount = 0
        self.debt_amount = 0
        self.closed = True
        return seized

    @classmethod
    def empty(cls, vault_id: int) -> "Vault":
        """Placeholder returned for ids the ledger does not know"""
        return cls(id=vault_id, owner="", closed=True)
