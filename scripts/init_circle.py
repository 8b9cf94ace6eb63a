#!/usr/bin/env python3
"""
Provision Circle developer-controlled wallets for the agent.

Creates one wallet set and two SCA wallets (agent, merchant) on
CIRCLE_BLOCKCHAIN, generating an entity secret first if .env has none, and
prints the lines to paste into .env.

Usage:
    python scripts/init_circle.py
"""

import asyncio
import json
import sys

from dotenv import load_dotenv

load_dotenv()

from trustless_agent.core.config import Settings
from trustless_agent.core.constants import CIRCLE_ACCOUNT_TYPE, CIRCLE_WALLET_SET_NAME
from trustless_agent.core.errors import AgentPayError, TransportError
from trustless_agent.services.circle_client import CircleWalletClient
from trustless_agent.services.entity_secret import generate_entity_secret


async def init_circle() -> None:
    settings = Settings()
    settings.require("circle_api_key", "circle_blockchain")

    entity_secret = settings.circle_entity_secret
    if not entity_secret:
        entity_secret = generate_entity_secret()
        settings = settings.model_copy(update={"circle_entity_secret": entity_secret})
        print("\n✅ Generated CIRCLE_ENTITY_SECRET (SAVE THIS IN .env):")
        print(entity_secret)
    else:
        print("✅ Using existing CIRCLE_ENTITY_SECRET from .env")

    client = CircleWalletClient(settings)

    print("\n1) Creating Wallet Set...")
    wallet_set_id = await client.create_wallet_set(CIRCLE_WALLET_SET_NAME)
    print(f"✅ Wallet Set ID: {wallet_set_id}")

    print("\n2) Creating 2 wallets (agent + merchant)...")
    wallets = await client.create_wallets(
        wallet_set_id,
        blockchains=[settings.circle_blockchain],
        count=2,
        account_type=CIRCLE_ACCOUNT_TYPE,
    )
    if len(wallets) < 2:
        raise TransportError(
            "Expected 2 wallets in response but got less.",
            status_code=502,
            details={"wallets": wallets},
        )

    agent_wallet, merchant_wallet = wallets[0], wallets[1]

    print("\n✅ Agent Wallet:")
    print(f"  ID: {agent_wallet.get('id')}")
    print(f"  Address: {agent_wallet.get('address')}")

    print("\n✅ Merchant Wallet:")
    print(f"  ID: {merchant_wallet.get('id')}")
    print(f"  Address: {merchant_wallet.get('address')}")

    print("\n➡️ Paste these into your .env:")
    print(f"CIRCLE_ENTITY_SECRET={entity_secret}")
    print(f"CIRCLE_WALLET_SET_ID={wallet_set_id}")
    print(f"CIRCLE_AGENT_WALLET_ID={agent_wallet.get('id')}")
    print(f"CIRCLE_MERCHANT_WALLET_ID={merchant_wallet.get('id')}")
    print(f"MERCHANT_WALLET_ADDRESS={merchant_wallet.get('address')}")
    print("\nNext: fund the AGENT wallet address from the testnet faucet, then run the app.")


def main() -> None:
    try:
        asyncio.run(init_circle())
    except AgentPayError as e:
        print("\n❌ init_circle failed:", file=sys.stderr)
        if isinstance(e, TransportError) and e.upstream_status is not None:
            print(f"Status: {e.upstream_status}", file=sys.stderr)
        print(e.message, file=sys.stderr)
        if e.details:
            print(f"Body: {json.dumps(e.details, indent=2, default=str)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
