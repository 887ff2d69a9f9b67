"""
Network and asset registry for x402 v2 responses.

Maps the short network names used by the payments layer ("base",
"base-sepolia", ...) to CAIP-2 chain identifiers and to the USDC contract
address used as the payment asset on that chain.

The tables are built once at import time and never mutated.
"""
from dataclasses import dataclass
from typing import Dict, Optional

# Network used when an unknown network has no asset of its own
DEFAULT_NETWORK = "base"


@dataclass(frozen=True)
class NetworkEntry:
    """A known network: short name, CAIP-2 chain id and default asset."""
    short_id: str
    chain_id: str
    default_asset: Optional[str] = None


NETWORKS: Dict[str, NetworkEntry] = {
    entry.short_id: entry
    for entry in (
        NetworkEntry("base", "eip155:8453", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"),
        NetworkEntry("base-sepolia", "eip155:84532", "0x036CbD53842c5426634e7929541eC2318f3dCF7e"),
        NetworkEntry("ethereum", "eip155:1", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"),
        NetworkEntry("sepolia", "eip155:11155111"),
        NetworkEntry("polygon", "eip155:137", "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"),
        NetworkEntry("arbitrum", "eip155:42161", "0xaf88d065e77c8cC2239327C5EDb3A432268e5831"),
        NetworkEntry("optimism", "eip155:10", "0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85"),
    )
}

# Network mapping to CAIP-2 format
NETWORK_TO_CAIP2: Dict[str, str] = {
    short_id: entry.chain_id for short_id, entry in NETWORKS.items()
}

# USDC contract addresses by network
USDC_ADDRESSES: Dict[str, str] = {
    short_id: entry.default_asset
    for short_id, entry in NETWORKS.items()
    if entry.default_asset
}


def resolve_chain_id(short_id: str) -> str:
    """
    Resolve a short network name to its CAIP-2 chain id.

    Unknown networks are not rejected: the id is synthesized as
    ``eip155:<short_id>`` without checking that such a chain exists.
    """
    return NETWORK_TO_CAIP2.get(short_id, f"eip155:{short_id}")


def resolve_asset(short_id: str) -> str:
    """Resolve the USDC address for a network, falling back to the default network's."""
    return USDC_ADDRESSES.get(short_id) or USDC_ADDRESSES[DEFAULT_NETWORK]
