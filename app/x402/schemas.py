# app/x402/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Dict, Any

# x402 protocol constants
X402_VERSION = 2
PAYMENT_SCHEME = "exact"


class PaymentOffer(BaseModel):
    """One accepted way to pay for a resource (an entry of `accepts`)."""
    scheme: Literal["exact"] = Field(..., description="Payment scheme.")
    network: str = Field(..., description="CAIP-2 chain identifier, e.g. eip155:8453.")
    amount: str = Field(..., description="Amount in asset base units (integer string).")
    pay_to: str = Field(..., alias="payTo", description="Recipient address, passed through verbatim.")
    max_timeout_seconds: int = Field(..., alias="maxTimeoutSeconds", description="Time allowed to complete payment.")
    asset: str = Field(..., description="Asset contract address.")
    extra: Dict[str, Any] = Field(..., description="Scheme-specific data, e.g. facilitatorUrl.")

    class Config:
        populate_by_name = True


class ResourceInfo(BaseModel):
    """The paid resource being described."""
    url: str = Field(..., description="Full URL of the requested resource.")
    description: str = Field(..., description="Human-readable description.")
    mime_type: str = Field(..., alias="mimeType", description="Response content type.")

    class Config:
        populate_by_name = True


class BazaarInfo(BaseModel):
    """Input/output hints for discovery scanners."""
    input: Optional[Any] = None
    output: Optional[Any] = None


class BazaarExtension(BaseModel):
    info: Optional[BazaarInfo] = None
    schema_: Optional[Any] = Field(None, alias="schema")

    class Config:
        populate_by_name = True


class Extensions(BaseModel):
    bazaar: Optional[BazaarExtension] = None


class DiscoveryDocument(BaseModel):
    """
    x402 v2 Payment Required body, as consumed by x402scan and other
    payment-aware clients.
    """
    x402_version: Literal[2] = Field(..., alias="x402Version")
    accepts: List[PaymentOffer] = Field(..., description="Accepted payment offers.")
    resource: ResourceInfo
    extensions: Optional[Extensions] = None

    class Config:
        populate_by_name = True

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with wire (camelCase) names, leaving out optional fields that were never set."""
        return self.model_dump(by_alias=True, exclude_unset=True)
