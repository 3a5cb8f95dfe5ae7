"""Root conftest: shared test configuration."""

import pytest

from shardid.config import get_settings
from shardid.core.tenant_id import TenantId

EXAMPLE_TENANT_ID = "1f359dd625e519a1a4e8d7509690f6fc"

# Settings read the process environment; tests must not inherit a real shard config
_SHARD_ENV_VARS = (
    "SHARD_NUMBER", "SHARD_COUNT", "SHARD_STRIPE_SIZE", "LOG_LEVEL", "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    for name in _SHARD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def example_tenant() -> TenantId:
    return TenantId.parse(EXAMPLE_TENANT_ID)
