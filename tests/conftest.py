"""
Pytest configuration for the streamcache test suite.

This configuration sets up:
- Test discovery paths
- Shared fixtures following the FakeRepository pattern
- Test markers for categorization
- Request and status-queue fixtures (builders live in tests/helpers.py)
"""

import asyncio
import sys
from pathlib import Path

import fakeredis.aioredis
import pytest
from pydantic import SecretStr

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from streamcache.core.config import Settings  # noqa: E402
from streamcache.models.domain import CompletionRequest  # noqa: E402
from tests.helpers import message  # noqa: E402


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """
    Register custom markers for test categorization.

    - unit: tests for individual components
    - integration: tests wiring the client to real adapters (fake Redis)
    """
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line(
        "markers", "integration: Integration tests for component interactions"
    )


# =============================================================================
# Settings Fixture
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """
    Create test settings with safe defaults.

    Every field is passed explicitly so OPENAI_* variables in the
    environment do not leak into tests.
    """
    return Settings(
        api_key="test-openai-key",
        base_url="",
        url="",
        api_version="",
        api_type="OPEN_AI",
        org_id="",
        user="",
        default_model="gpt-4-turbo-preview",
        azure_deployment="",
        set_seed=False,
        cache_key="",
        cache_redis_url=None,
    )


@pytest.fixture
def unauthenticated_settings(test_settings: Settings) -> Settings:
    """Settings with neither API key nor endpoint."""
    return test_settings.model_copy(update={"api_key": SecretStr("")})


# =============================================================================
# FakeRedis Fixtures
# =============================================================================


@pytest.fixture
def fake_redis():
    """
    Create a fake Redis client for testing.

    Values are compressed bytes, so responses are not decoded.
    """
    return fakeredis.aioredis.FakeRedis(decode_responses=False)


@pytest.fixture
def redis_store(fake_redis):
    """RedisCacheStore backed by fake Redis."""
    from streamcache.services.cache import RedisCacheStore

    return RedisCacheStore(redis_client=fake_redis)


# =============================================================================
# Request and Queue Fixtures
# =============================================================================


@pytest.fixture
def simple_request() -> CompletionRequest:
    """The canonical two-message request with an empty model."""
    return CompletionRequest(
        messages=[message("system", "be terse"), message("user", "2+2?")],
        model="",
    )


@pytest.fixture
def status_queue() -> asyncio.Queue:
    """Unbounded status sink."""
    return asyncio.Queue()
