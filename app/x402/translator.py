"""
Translation of legacy 402 payloads into the x402 v2 discovery schema.

The payments layer answers unpaid requests with an ad-hoc body:

    {"error": {"price": "1.00", "network": "base", "payTo": "0x...",
               "facilitatorUrl": "..."},
     "input": {...}}

x402scan and other v2 clients expect instead:

    {"x402Version": 2,
     "accepts": [{"scheme": "exact", "network": "eip155:8453",
                  "amount": "1000000", "payTo": "0x...", ...}],
     "resource": {"url": ..., "description": ..., "mimeType": ...},
     "extensions": {"bazaar": {"info": {"input": {...}}}}}

translate() is a pure function: it never raises for bad input and never
touches the network. Callers switch on the returned Translated /
NotTranslatable outcome.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from app.x402.networks import resolve_asset, resolve_chain_id
from app.x402.pricing import to_base_units
from app.x402.schemas import (
    PAYMENT_SCHEME,
    X402_VERSION,
    BazaarExtension,
    BazaarInfo,
    DiscoveryDocument,
    Extensions,
    PaymentOffer,
    ResourceInfo,
)

DEFAULT_FACILITATOR_URL = "https://x402.org/facilitator"
DEFAULT_DESCRIPTION_PREFIX = "Game theory analysis"
MAX_TIMEOUT_SECONDS = 60
RESOURCE_MIME_TYPE = "application/json"
UNKNOWN_RESOURCE_KEY = "unknown"

REQUIRED_FIELDS = ("price", "network", "payTo")

_ENTRYPOINT_PATTERN = re.compile(r"/entrypoints/([^/?#]+)")

# Bytes h11 and httptools refuse in header values (HTAB is allowed)
_HEADER_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


@dataclass(frozen=True)
class Translated:
    """Successful translation."""
    document: DiscoveryDocument
    price: str
    facilitator_url: Optional[str] = None

    @property
    def offer(self) -> PaymentOffer:
        return self.document.accepts[0]


@dataclass(frozen=True)
class NotTranslatable:
    """The payload cannot be expressed in the v2 schema; keep the original."""
    reason: str


TranslationResult = Union[Translated, NotTranslatable]


def extract_resource_key(request_url: str) -> str:
    """Return the first /entrypoints/{key} segment of a URL, or "unknown"."""
    match = _ENTRYPOINT_PATTERN.search(request_url)
    return match.group(1) if match else UNKNOWN_RESOURCE_KEY


def translate(
    legacy_payload: Any,
    request_url: str,
    description_prefix: str = DEFAULT_DESCRIPTION_PREFIX,
    default_facilitator_url: str = DEFAULT_FACILITATOR_URL,
) -> TranslationResult:
    """
    Build a v2 DiscoveryDocument from a legacy 402 payload.

    Args:
        legacy_payload: Parsed JSON body of the original 402 response
        request_url: Full URL of the request that produced the 402
        description_prefix: Text placed before the resource key in the description
        default_facilitator_url: Facilitator advertised when the payload names none

    Returns:
        Translated with the document, or NotTranslatable with the reason
    """
    if not isinstance(legacy_payload, dict):
        return NotTranslatable(f"body is {type(legacy_payload).__name__}, expected an object")

    error = legacy_payload.get("error")
    if not isinstance(error, dict):
        return NotTranslatable("body has no 'error' object")

    missing = [name for name in REQUIRED_FIELDS if not error.get(name)]
    if missing:
        return NotTranslatable(f"missing required field(s): {', '.join(missing)}")

    network = str(error["network"])
    facilitator_url: Optional[str] = error.get("facilitatorUrl") or None

    resource_key = extract_resource_key(request_url)
    try:
        offer = PaymentOffer(
            scheme=PAYMENT_SCHEME,
            network=resolve_chain_id(network),
            amount=to_base_units(error["price"]),
            pay_to=error["payTo"],
            max_timeout_seconds=MAX_TIMEOUT_SECONDS,
            asset=resolve_asset(network),
            extra={"facilitatorUrl": facilitator_url or default_facilitator_url},
        )
        document = DiscoveryDocument(
            x402_version=X402_VERSION,
            accepts=[offer],
            resource=ResourceInfo(
                url=request_url,
                description=f"{description_prefix}: {resource_key}",
                mime_type=RESOURCE_MIME_TYPE,
            ),
            extensions=Extensions(
                bazaar=BazaarExtension(
                    info=BazaarInfo(input=legacy_payload.get("input") or {}),
                ),
            ),
        )
    except ValidationError as e:
        return NotTranslatable(f"invalid field value: {e.errors()[0]['msg']}")

    return Translated(
        document=document,
        price=str(error["price"]),
        facilitator_url=facilitator_url,
    )


def check_header_value(name: str, value: str) -> str:
    """
    Return value if it can be sent as an HTTP header value, else raise ValueError.

    Servers only check header values while writing the response, after the
    middleware has returned.
    """
    if _HEADER_CONTROL_CHARS.search(value) or value != value.strip(" \t"):
        raise ValueError(f"{name} header value {value!r} contains control characters or edge whitespace")
    value.encode("latin-1")
    return value


def build_discovery_headers(result: Translated) -> Dict[str, str]:
    """
    Headers mirroring the offer for clients that read headers instead of the body.

    X-Facilitator is only set when the legacy payload named a facilitator.

    Raises:
        ValueError: If a mirrored value cannot be sent as a header value
    """
    offer = result.offer
    headers = {
        "Content-Type": "application/json; charset=utf-8",
        "X-Price": result.price,
        "X-Network": offer.network,
        "X-Pay-To": offer.pay_to,
        "X-Asset": offer.asset,
        "X-402-Version": str(X402_VERSION),
    }
    if result.facilitator_url:
        headers["X-Facilitator"] = str(result.facilitator_url)
    return {name: check_header_value(name, value) for name, value in headers.items()}
