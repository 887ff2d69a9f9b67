"""
CDP (Coinbase Developer Platform) JWT authentication for x402.

Generates short-lived JWTs for authenticating with the CDP x402
facilitator. Each token is bound to a single request (method, host and
path) and expires after JWT_EXPIRES_IN seconds, so a fresh set is created
for every batch of facilitator calls.

Credentials are read from CDP_API_KEY_ID / CDP_API_KEY_SECRET via
app.core.config.
"""
import asyncio
import logging
from typing import Dict, Optional, Tuple

from cdp.auth.utils.jwt import JwtOptions, generate_jwt
from x402.facilitator import FacilitatorConfig

from app.core.config import settings

logger = logging.getLogger(__name__)

# CDP Facilitator URL for mainnet
CDP_FACILITATOR_URL = "https://api.cdp.coinbase.com/platform/v2/x402"
CDP_API_HOST = "api.cdp.coinbase.com"
CDP_X402_PATH = "/platform/v2/x402"

# Token lifetime in seconds
JWT_EXPIRES_IN = 120

# (operation, HTTP method, request path) for each facilitator endpoint
FACILITATOR_ENDPOINTS: Tuple[Tuple[str, str, str], ...] = (
    ("verify", "POST", f"{CDP_X402_PATH}/verify"),
    ("settle", "POST", f"{CDP_X402_PATH}/settle"),
    ("supported", "GET", f"{CDP_X402_PATH}/supported"),
)


class CdpConfigurationError(RuntimeError):
    """Raised when CDP API credentials are not configured."""


def _sign(api_key_id: str, api_key_secret: str, method: str, path: str) -> str:
    return generate_jwt(
        JwtOptions(
            api_key_id=api_key_id,
            api_key_secret=api_key_secret,
            request_method=method,
            request_host=CDP_API_HOST,
            request_path=path,
            expires_in=JWT_EXPIRES_IN,
        )
    )


async def create_cdp_auth_headers(
    api_key_id: Optional[str] = None,
    api_key_secret: Optional[str] = None,
) -> Dict[str, Dict[str, str]]:
    """
    Create auth headers for CDP facilitator requests.

    The three tokens are signed concurrently; the call returns only once
    all of them are available. Signing errors propagate to the caller.

    Args:
        api_key_id: CDP API key id. Uses config if not provided.
        api_key_secret: CDP API key secret. Uses config if not provided.

    Returns:
        Dict with "verify", "settle" and "supported" keys, each holding an
        Authorization header for that endpoint

    Raises:
        CdpConfigurationError: If the key id or secret is missing
    """
    key_id = api_key_id if api_key_id is not None else settings.CDP_API_KEY_ID
    key_secret = api_key_secret if api_key_secret is not None else settings.CDP_API_KEY_SECRET

    if not key_id or not key_secret:
        logger.error("x402: CDP credentials missing, cannot authenticate with facilitator")
        raise CdpConfigurationError(
            "CDP_API_KEY_ID and CDP_API_KEY_SECRET must be set for mainnet"
        )

    tokens = await asyncio.gather(
        *(
            asyncio.to_thread(_sign, key_id, key_secret, method, path)
            for _, method, path in FACILITATOR_ENDPOINTS
        )
    )

    return {
        operation: {"Authorization": f"Bearer {token}"}
        for (operation, _, _), token in zip(FACILITATOR_ENDPOINTS, tokens)
    }


def get_cdp_facilitator_config() -> FacilitatorConfig:
    """Create the facilitator config for x402 with CDP auth."""
    return FacilitatorConfig(
        url=CDP_FACILITATOR_URL,
        create_headers=create_cdp_auth_headers,
    )
