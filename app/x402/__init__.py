"""
x402 Payment Protocol Integration Module.

This module adapts the agent's payment-required responses to the x402 v2
discovery schema and authenticates calls to the CDP facilitator.

Key components:
- networks: Short network name to CAIP-2 chain id and USDC asset lookup
- pricing: USD price to USDC base unit conversion
- translator: Legacy 402 payload to v2 DiscoveryDocument translation
- middleware: FastAPI middleware rewriting 402 responses (fail-open)
- cdp_auth: Endpoint-bound JWT headers for the CDP facilitator

Configuration is loaded from environment variables via app.core.config.
"""

__version__ = "0.1.0"
