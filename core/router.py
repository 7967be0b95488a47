"""Upstream selection and path rewriting."""

from collections.abc import Mapping
from types import MappingProxyType

from core.config import Config
from core.request_types import UpstreamTarget


def strip_prefix(original_url: str, prefix: str) -> str:
    """Remove one leading ``/<prefix>`` from a path+query string.

    Paths that do not start with the prefix are returned untouched.
    """
    marker = f"/{prefix}"
    if original_url.startswith(marker):
        return original_url[len(marker):]
    return original_url


def build_upstream_url(original_url: str, target: UpstreamTarget) -> str:
    """Join the rewritten path onto the target base URL."""
    return f"{target.base_url}{strip_prefix(original_url, target.prefix)}"


class TargetResolver:
    """Map path prefixes to upstream targets."""

    def __init__(self, targets: Mapping[str, UpstreamTarget]):
        self._targets = MappingProxyType(dict(targets))

    @classmethod
    def from_config(cls, config: Config) -> "TargetResolver":
        return cls(
            {
                "mainnet": UpstreamTarget(config.upstream.mainnet_url, "mainnet"),
                "testnet": UpstreamTarget(config.upstream.testnet_url, "testnet"),
            }
        )

    def resolve(self, prefix: str) -> UpstreamTarget:
        """Return the target registered for ``prefix``."""
        try:
            return self._targets[prefix]
        except KeyError:
            raise LookupError(f"No upstream registered for prefix {prefix!r}") from None
