"""Custom errors for the stability pool model"""

class StabilityPoolError(Exception):
    """Base error class for stability pool errors"""
    pass

class ConfigurationError(StabilityPoolError):
    """Error for missing or invalid engine configuration"""
    pass

class AuthorizationError(StabilityPoolError):
    """Error for administrative calls from a non-admin identity"""
    pass

class NotLiquidableError(StabilityPoolError):
    """Error for liquidating a vault that is not under-collateralized"""
    pass

class SlippageExceededError(StabilityPoolError):
    """Error for swaps that need more input than the allowed maximum"""
    pass

class LedgerConflictError(StabilityPoolError):
    """Error for closing a vault that is already closed or does not exist"""
    pass

class InvalidPriceError(StabilityPoolError):
    """Error for invalid price data"""
    pass

class InsufficientLiquidityError(StabilityPoolError):
    """Error for swaps a pool cannot price"""
    pass

class InsufficientBalanceError(StabilityPoolError):
    """Error for transfers exceeding the holder balance"""
    pass

class FlashLoanError(StabilityPoolError):
    """Error for flash loans that are not repaid in full"""
    pass

class InsufficientCollateralError(StabilityPoolError):
    """Error for borrows the vault collateral can't cover"""
    pass
