"""Pytest configuration and fixtures."""

import pytest

from aex402.accounts import Pool, encode_pool
from tests.helpers import make_pool


@pytest.fixture
def pool() -> Pool:
    """A balanced, unpaused 2-token pool."""
    return make_pool()


@pytest.fixture
def pool_bytes(pool: Pool) -> bytes:
    """Raw account bytes of the `pool` fixture."""
    return encode_pool(pool)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every AEX402_* override from the environment."""
    for name in ("AEX402_PROGRAM_ID", "AEX402_SLIPPAGE_BPS", "AEX402_MAX_IMBALANCE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
