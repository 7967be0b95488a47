"""Header construction for upstream requests."""

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0.0.0"

# Inbound (lower-case) name -> outbound canonical name
BYBIT_HEADER_MAP: Mapping[str, str] = MappingProxyType(
    {
        "x-bapi-api-key": "X-BAPI-API-KEY",
        "x-bapi-timestamp": "X-BAPI-TIMESTAMP",
        "x-bapi-sign": "X-BAPI-SIGN",
        "x-bapi-recv-window": "X-BAPI-RECV-WINDOW",
        "referer": "Referer",
    }
)

PASSTHROUGH_HEADERS: tuple[str, ...] = ("content-type", "accept")

# Repeats of these keep the first value; other repeats are joined with ", "
SINGLE_VALUE_HEADERS = frozenset({"content-type", "referer"})


def collapse_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Fold inbound headers into one lower-cased value per name.

    ``headers.items()`` on a Starlette ``Headers`` yields every raw pair,
    duplicates included.
    """
    values: dict[str, list[str]] = {}
    for key, value in headers.items():
        values.setdefault(key.lower(), []).append(value)
    return {
        name: items[0] if name in SINGLE_VALUE_HEADERS else ", ".join(items)
        for name, items in values.items()
    }


class HeaderBuilder:
    """Project inbound headers onto the upstream whitelist."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        header_map: Mapping[str, str] = BYBIT_HEADER_MAP,
        passthrough: tuple[str, ...] = PASSTHROUGH_HEADERS,
    ):
        self.user_agent = user_agent
        self.header_map = header_map
        self.passthrough = passthrough

    def build_upstream_headers(self, headers: Mapping[str, str], method: str) -> dict[str, str]:
        """Build upstream headers; anything not whitelisted is dropped."""
        inbound = collapse_headers(headers)
        upstream: dict[str, str] = {"User-Agent": self.user_agent}

        for lower, proper in self.header_map.items():
            if inbound.get(lower):
                upstream[proper] = inbound[lower]

        for name in self.passthrough:
            if inbound.get(name):
                upstream[name] = inbound[name]

        if not upstream.get("content-type") and method.upper() != "GET":
            upstream["Content-Type"] = "application/json"

        return upstream
