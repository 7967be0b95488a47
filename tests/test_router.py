import pytest

from core.config import Config, UpstreamSettings
from core.request_types import UpstreamTarget
from core.router import TargetResolver, build_upstream_url, strip_prefix

MAINNET = UpstreamTarget("https://api.bybit.com", "mainnet")
TESTNET = UpstreamTarget("https://api-demo-testnet.bybit.com", "testnet")


@pytest.mark.parametrize(
    ("original", "expected"),
    [
        ("/mainnet/v5/market/time", "/v5/market/time"),
        ("/mainnet/v5/order/realtime?category=linear&symbol=BTCUSDT", "/v5/order/realtime?category=linear&symbol=BTCUSDT"),
        ("/mainnet/", "/"),
        ("/mainnet", ""),
        ("/mainnet?x=1", "?x=1"),
    ],
)
def test_strip_prefix(original, expected):
    assert strip_prefix(original, "mainnet") == expected


def test_strip_prefix_removes_only_one_occurrence():
    assert strip_prefix("/mainnet/mainnet/x", "mainnet") == "/mainnet/x"


def test_strip_prefix_must_anchor_at_start():
    assert strip_prefix("/v5/mainnet/x", "mainnet") == "/v5/mainnet/x"


def test_strip_prefix_without_match_is_noop():
    assert strip_prefix("/testnet/v5/x", "mainnet") == "/testnet/v5/x"


def test_build_upstream_url_mainnet():
    url = build_upstream_url("/mainnet/v5/market/tickers?category=spot", MAINNET)
    assert url == "https://api.bybit.com/v5/market/tickers?category=spot"


def test_build_upstream_url_testnet():
    url = build_upstream_url("/testnet/v5/account/wallet-balance", TESTNET)
    assert url == "https://api-demo-testnet.bybit.com/v5/account/wallet-balance"


def test_resolver_from_default_config():
    resolver = TargetResolver.from_config(Config())
    assert resolver.resolve("mainnet") == MAINNET
    assert resolver.resolve("testnet") == TESTNET


def test_resolver_uses_configured_urls():
    config = Config(upstream=UpstreamSettings(mainnet_url="http://mirror.local"))
    resolver = TargetResolver.from_config(config)
    assert resolver.resolve("mainnet").base_url == "http://mirror.local"


def test_resolver_unknown_prefix():
    resolver = TargetResolver.from_config(Config())
    with pytest.raises(LookupError):
        resolver.resolve("devnet")
