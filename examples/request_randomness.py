#!/usr/bin/env python3
"""
Example: request randomness from the ORAO VRF oracle.

Creates (or loads) an account, funds it from the faucet on test networks,
requests randomness and waits for the oracle to fulfill it.

Usage:
    pip install "orao-vrf[examples]"
    python examples/request_randomness.py

Environment Variables:
    APTOS_NETWORK: mainnet, testnet, devnet or local (default: devnet)
    APTOS_NODE_URL: Fullnode URL override
    APTOS_FAUCET_URL: Faucet URL override
    APTOS_PRIVATE_KEY: Hex private key; a fresh account is generated when unset
    ORAO_VRF_ADDRESS: Oracle address override
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from orao_vrf import (
    LocalAccountSigner,
    OraoVrfClient,
    OraoVrfError,
    configure_logging,
)

# Load .env file
load_dotenv()

FUND_AMOUNT = 100_000_000  # 1 APT in octas
WAIT_TIMEOUT_MS = 120_000


async def main() -> int:
    configure_logging(logging.INFO)

    print("=" * 60)
    print("ORAO VRF - Request Randomness")
    print("=" * 60)

    client = OraoVrfClient.from_env()
    print(f"Client: {client!r}")

    private_key = os.getenv("APTOS_PRIVATE_KEY", "")
    if private_key:
        signer = LocalAccountSigner.from_private_key(private_key, client.ledger)
    else:
        signer = LocalAccountSigner.generate(client.ledger)
        print(f"Generated account {signer.address}")
        hashes = await client.fund_account(signer.address, FUND_AMOUNT)
        print(f"Funded from faucet ({len(hashes)} transaction(s))")

    try:
        result = await client.request(signer)
        print(f"Requested: seed={result.seed_hex}")
        print(f"           tx={result.tx_hash}")

        randomness = await client.wait_fulfilled(
            signer.address, result.seed, timeout_ms=WAIT_TIMEOUT_MS
        )
    except OraoVrfError as e:
        print(f"Failed: {e}")
        return 1

    print(f"Randomness: 0x{randomness.hex()}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
