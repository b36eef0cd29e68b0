"""
Base Schemas.

Shared request model base and base64 helpers.
"""

import base64

from pydantic import BaseModel, ConfigDict


def b64encode_bytes(data: bytes) -> str:
    """Standard base64 without line wrapping."""
    return base64.b64encode(data).decode("ascii")


def b64encode_text(text: str) -> str:
    """Base64 of the UTF-8 encoding of text."""
    return b64encode_bytes(text.encode("utf-8"))


class RequestModel(BaseModel):
    """
    Base for request bodies sent to the API.

    Optional fields left as None are omitted from the payload rather than
    sent as null.
    """

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict:
        """Serialize to a JSON-ready dict."""
        return self.model_dump(mode="json", exclude_none=True)
