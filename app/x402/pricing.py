"""
Price conversion for x402 v2 payment offers.

Legacy 402 payloads carry a human-readable USD price ("0.05"). The v2
schema expects the amount in the asset's smallest unit. USDC has 6 decimals,
so $1.00 = 1,000,000 base units.

Conversion rules:
1. Parse the leading decimal number of the price string
2. Unparseable, negative or non-finite prices become "0"
3. Scale by 10^6 and truncate toward zero (never round up)
"""
import logging
import math
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

# USDC has 6 decimals
USDC_DECIMALS = 6
BASE_UNITS_PER_USDC = 10 ** USDC_DECIMALS

# Leading ASCII decimal literal, e.g. "1", "1.50", ".5", "2e-3", "1.5 USDC"
_DECIMAL_PREFIX = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_price(price: Any) -> Optional[float]:
    """
    Parse a price value into a float.

    Accepts anything whose string form starts with a decimal number, so
    trailing text such as a currency code is ignored.

    Returns:
        The parsed value, or None if no number could be read
    """
    match = _DECIMAL_PREFIX.match(str(price))
    if match is None:
        return None
    return float(match.group(0))


def to_base_units(price: Any) -> str:
    """
    Convert a decimal USD price to USDC base units.

    Args:
        price: Price as a decimal string (e.g. "1.00")

    Returns:
        Base-unit amount as a non-negative integer string ("1000000" for "1.00").
        Invalid or negative prices return "0".
    """
    value = parse_price(price)
    if value is None or not math.isfinite(value) or value < 0:
        logger.debug(f"x402: Price {price!r} is not a valid amount, using 0")
        return "0"
    return str(math.floor(value * BASE_UNITS_PER_USDC))
