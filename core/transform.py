"""Request body parsing and encoding."""

import json
from typing import Any

from core.exceptions import InvalidJSON

BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def _is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json"


class BodyCodec:
    """Parse inbound bodies and encode them for the upstream."""

    def parse_inbound(self, raw_body: bytes, content_type: str | None) -> Any:
        """Parse a raw request body.

        JSON bodies become dicts or lists (objects and arrays only, like a
        strict JSON body parser). Everything else stays raw bytes. An empty
        body yields ``None``.
        """
        if not raw_body:
            return None
        if not _is_json_content_type(content_type):
            return raw_body

        text_body = raw_body.decode("utf-8", errors="replace")
        try:
            body = json.loads(text_body)
        except (json.JSONDecodeError, ValueError) as e:
            raise InvalidJSON(f"Invalid JSON: {e}") from e
        if not isinstance(body, (dict, list)):
            raise InvalidJSON("Invalid JSON: body must be an object or array")
        return body

    def encode_outbound(self, method: str, body: Any) -> bytes | str | None:
        """Return the upstream body, or ``None`` when none should be sent."""
        if method.upper() in BODYLESS_METHODS or body is None:
            return None
        if isinstance(body, (bytes, str)):
            return body
        # Compact form, byte-identical to JSON.stringify
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False)
