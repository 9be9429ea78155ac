# Fixed point scale factors
BPS_SCALE = 10_000  # Basis points (100% = 10000)
PRICE_DECIMALS = 8  # Chainlink style oracle answers
PRICE_SCALE = 10 ** PRICE_DECIMALS
WAD = 10 ** 18  # 18 decimal tokens

# Distribution constants
MAX_DISTRIBUTION_FEE_BPS = BPS_SCALE // 2  # caller + treasury fee must stay below 50%
DEFAULT_CALLER_FEE_BPS = 200       # 2% in bps
DEFAULT_TREASURY_FEE_BPS = 2000    # 20% in bps

# Swap / flash loan constants
DEFAULT_FLASH_FEE_BPS = 30         # 0.3% in bps
DEFAULT_SLIPPAGE_BPS = 200         # 2% in bps
POOL_FEE_NUMERATOR = 997           # Uniswap V2 style 0.3% pool fee
POOL_FEE_DENOMINATOR = 1000

# Vault manager constants
DEFAULT_SAFETY_RATIO_BPS = 12_000  # 120% in bps

ZERO_ADDRESS = "0x" + "0" * 40
