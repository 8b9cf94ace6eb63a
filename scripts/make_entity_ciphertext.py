#!/usr/bin/env python3
"""
Print an entity secret ciphertext for registration in the Circle console.

Usage:
    python scripts/make_entity_ciphertext.py
"""

import asyncio
import json
import sys

from dotenv import load_dotenv

load_dotenv()

from trustless_agent.core.config import Settings
from trustless_agent.core.errors import AgentPayError
from trustless_agent.services.circle_client import CircleWalletClient
from trustless_agent.services.entity_secret import encrypt_entity_secret


async def make_ciphertext() -> str:
    settings = Settings()
    settings.require("circle_api_key", "circle_entity_secret")

    public_key_pem = await CircleWalletClient(settings).get_entity_public_key()
    return encrypt_entity_secret(settings.circle_entity_secret, public_key_pem)


def main() -> None:
    try:
        ciphertext = asyncio.run(make_ciphertext())
    except AgentPayError as e:
        print("\n❌ make_entity_ciphertext failed:", file=sys.stderr)
        print(e.message, file=sys.stderr)
        if e.details:
            print(json.dumps(e.details, indent=2, default=str), file=sys.stderr)
        sys.exit(1)

    print("\n✅ ENTITY SECRET CIPHERTEXT (paste into Circle Console TEST env):\n")
    print(ciphertext)
    print("\nCircle Console → W3S / Wallets Configurator → Entity Secret → paste → Register\n")


if __name__ == "__main__":
    main()
