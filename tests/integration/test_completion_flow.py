"""
Integration tests for the completion flow.

These tests run the full client stack: request compilation, cache key
derivation, the OpenAI transport over a scripted SDK client, chunk
assembly, and a Redis-backed cache store.
"""

import pytest
from pydantic import SecretStr

from streamcache.models.domain import StatusKind
from streamcache.providers.openai import OpenAITransport
from streamcache.services.cache import RedisCacheStore
from streamcache.services.compiler import INTERNAL_SYSTEM_PROMPT
from streamcache.services.orchestrator import CompletionClient, TransactionCounter
from tests.helpers import drain


pytestmark = pytest.mark.integration


def build_client(settings, sdk_client, store) -> CompletionClient:
    return CompletionClient(
        settings,
        transport=OpenAITransport(settings, client=sdk_client),
        cache_store=store,
        counter=TransactionCounter(),
    )


class TestLiveThenCached:
    @pytest.mark.asyncio
    async def test_live_call_then_replay(self, test_settings, sdk_client, redis_store, simple_request, status_queue) -> None:
        client = build_client(test_settings, sdk_client, redis_store)

        live = await client.call(simple_request, status_queue)
        cached = await client.call(simple_request, status_queue)
        events = await drain(status_queue)

        assert live == cached
        assert live.text == "4"
        assert sdk_client.chat.completions.create.await_count == 1
        finals = [e for e in events if e.kind == StatusKind.FINAL]
        assert [e.cached for e in finals] == [False, True]
        assert [e.completion_id for e in finals] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_wire_request_sent_to_sdk(self, test_settings, sdk_client, redis_store, simple_request) -> None:
        settings = test_settings.model_copy(update={"set_seed": True, "user": "alice"})
        client = build_client(settings, sdk_client, redis_store)

        await client.call(simple_request)

        kwargs = sdk_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4-turbo-preview"
        assert kwargs["stream"] is True
        assert kwargs["temperature"] == 0.0
        assert kwargs["user"] == "alice"
        assert isinstance(kwargs["seed"], int)
        system, user = kwargs["messages"]
        assert system["role"] == "system"
        assert system["content"].startswith(INTERNAL_SYSTEM_PROMPT)
        assert system["content"].endswith("be terse")
        assert user == {"role": "user", "content": "2+2?"}

    @pytest.mark.asyncio
    async def test_clients_with_different_keys_do_not_share_entries(self, test_settings, sdk_client, redis_store, simple_request) -> None:
        other_settings = test_settings.model_copy(update={"api_key": SecretStr("other-key")})

        await build_client(test_settings, sdk_client, redis_store).call(simple_request)
        await build_client(other_settings, sdk_client, redis_store).call(simple_request)

        assert sdk_client.chat.completions.create.await_count == 2

    @pytest.mark.asyncio
    async def test_shared_cache_key_shares_entries(self, test_settings, sdk_client, redis_store, simple_request) -> None:
        first = test_settings.model_copy(update={"cache_key": "team"})
        second = first.model_copy(update={"api_key": SecretStr("other-key")})

        await build_client(first, sdk_client, redis_store).call(simple_request)
        await build_client(second, sdk_client, redis_store).call(simple_request)

        assert sdk_client.chat.completions.create.await_count == 1


class TestAzureDeployment:
    @pytest.mark.asyncio
    async def test_default_model_sent_as_deployment(self, test_settings, sdk_client, redis_store, simple_request) -> None:
        settings = test_settings.model_copy(
            update={
                "api_type": "AZURE",
                "base_url": "https://example.openai.azure.com",
                "azure_deployment": "gpt4-prod",
            }
        )
        client = build_client(settings, sdk_client, redis_store)

        await client.call(simple_request)

        assert sdk_client.chat.completions.create.call_args.kwargs["model"] == "gpt4-prod"


class TestRealRedis:
    @pytest.mark.asyncio
    async def test_entry_survives_new_client(self, test_settings, sdk_client, clean_redis, simple_request) -> None:
        await build_client(test_settings, sdk_client, RedisCacheStore(clean_redis)).call(simple_request)
        replay = await build_client(test_settings, sdk_client, RedisCacheStore(clean_redis)).call(simple_request)

        assert replay.text == "4"
        assert sdk_client.chat.completions.create.await_count == 1
        assert len(await clean_redis.keys("streamcache:completion:*")) == 1
