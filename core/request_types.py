"""Shared request data types."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

JSON_CONTENT_TYPE = "application/json"
HTML_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class InboundRequest:
    """Request as received by the front end."""

    method: str
    original_url: str
    headers: Mapping[str, str]
    body: Any = None


@dataclass(frozen=True)
class UpstreamTarget:
    """Upstream base URL and the path prefix that selected it."""

    base_url: str
    prefix: str


@dataclass(frozen=True)
class OutboundRequest:
    """Prepared data for an upstream request."""

    method: str
    url: str
    headers: dict[str, str]
    body: bytes | str | None = None


@dataclass(frozen=True)
class UpstreamResponse:
    """Fully buffered upstream response."""

    status_code: int
    text: str

    @property
    def content_type(self) -> str:
        """Sniff the relay content type from the body.

        A body starting with a JSON object is relayed as JSON, anything else
        as HTML. The upstream content-type header is not consulted.
        """
        if self.text.lstrip().startswith("{"):
            return JSON_CONTENT_TYPE
        return HTML_CONTENT_TYPE
