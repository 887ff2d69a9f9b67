"""
FastAPI middleware that rewrites 402 responses into the x402 v2 schema.

This module provides HTTP middleware that:
1. Lets the downstream handler run to completion
2. Ignores every response whose status is not 402 Payment Required
3. Parses the legacy 402 body and translates it (see app.x402.translator)
4. Replaces the response with the v2 body and mirrored discovery headers

Translation is fail-open: if the body cannot be parsed or translated, a
warning is logged and the original response is returned unchanged.
"""
import json
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from app.core.config import settings
from app.x402.translator import (
    NotTranslatable,
    build_discovery_headers,
    translate,
)

logger = logging.getLogger(__name__)

PAYMENT_REQUIRED_STATUS = 402


async def read_response_body(response: Response) -> bytes:
    """Drain a streamed downstream response into bytes."""
    body = b""
    async for chunk in response.body_iterator:
        body += chunk
    return body


def restore_response(response: Response, body: bytes) -> Response:
    """
    Rebuild a response whose body iterator has been consumed.

    Status, body bytes and the raw header list (including repeated headers
    such as Set-Cookie) are carried over exactly.
    """
    restored = Response(
        content=body,
        status_code=response.status_code,
        background=getattr(response, "background", None),
    )
    restored.raw_headers = list(response.raw_headers)
    return restored


class X402V2Middleware(BaseHTTPMiddleware):
    """
    x402 v2 response format middleware for FastAPI.

    When X402_V2_ENABLED=true, 402 responses produced by the payments layer
    are rewritten to the v2 discovery format used by x402scan.

    When X402_V2_ENABLED=false, all responses pass through unchanged.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response]
    ) -> Response:
        response = await call_next(request)

        if not settings.X402_V2_ENABLED:
            return response

        # Only transform 402 responses
        if response.status_code != PAYMENT_REQUIRED_STATUS:
            return response

        body = await read_response_body(response)
        original = restore_response(response, body)
        request_url = str(request.url)

        try:
            legacy_payload = json.loads(body)
        except ValueError as e:
            logger.warning(f"x402: Failed to parse 402 response body for {request_url}: {e}")
            return original

        try:
            result = translate(
                legacy_payload,
                request_url,
                description_prefix=settings.X402_RESOURCE_DESCRIPTION_PREFIX,
                default_facilitator_url=settings.X402_FACILITATOR_URL,
            )
            if isinstance(result, NotTranslatable):
                logger.warning(f"x402: Leaving 402 response for {request_url} unchanged: {result.reason}")
                return original

            # Header checks and rendering can fail (control characters, non latin-1 values, NaN in input)
            translated = JSONResponse(
                status_code=response.status_code,
                content=result.document.to_payload(),
                headers=build_discovery_headers(result),
                background=getattr(response, "background", None),
            )
        except Exception as e:
            logger.warning(f"x402: Failed to transform 402 response for {request_url}: {e}")
            return original

        offer = result.offer
        logger.info(
            f"x402: Rewrote 402 response for {request_url} to v2 "
            f"({offer.amount} on {offer.network} to {offer.pay_to})"
        )
        return translated
