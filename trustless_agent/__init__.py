"""
Trustless Agent Pay - priced and settled agent-initiated payments

A language model classifies the complexity of a request, a fixed price table
turns the complexity into a USDC amount, and a custodial wallet pays the
merchant when payment is required. The model never sets a price directly.

Key modules:
    - api: FastAPI routes and endpoints
    - schemas: Pydantic request/response and domain schemas
    - services: Inference, pricing, wallet and payment logic
    - utils: Decision recovery from malformed model output
    - core: Configuration, constants and errors
"""

__version__ = "0.1.0"
