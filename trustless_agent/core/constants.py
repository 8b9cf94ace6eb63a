"""
Application-wide constants.

Default values for settings and fixed protocol parameters shared across
the inference and wallet adapters.
"""

# API Server
DEFAULT_APP_PORT = 3001

# Inference (Gemini)
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_TEMPERATURE = 0.0
GEMINI_MAX_OUTPUT_TOKENS = 1024
GEMINI_TIMEOUT_SECONDS = 30.0

# Raw model output shown in ModelOutputInvalidError
RAW_PREVIEW_CHARS = 200

# Custodial wallets (Circle developer-controlled wallets)
CIRCLE_API_BASE_URL = "https://api.circle.com/v1/w3s"
CIRCLE_TIMEOUT_SECONDS = 15.0
CIRCLE_FEE_LEVEL = "MEDIUM"
CIRCLE_WALLET_SET_NAME = "trustless-agent-wallet-set"
CIRCLE_ACCOUNT_TYPE = "SCA"

# Entity secret is 32 random bytes, hex encoded
ENTITY_SECRET_BYTES = 32

# Pricing
MAX_AMOUNT_USDC = 1.0
USDC_SYMBOL = "USDC"
