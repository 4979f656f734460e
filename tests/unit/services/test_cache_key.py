"""
Tests for Cache Key and Seed Derivation
"""

from streamcache.core import hashing
from streamcache.models.requests import (
    ChatCompletionRequest,
    FunctionCall,
    Message,
    ToolCall,
)
from streamcache.services.cache_key import (
    cache_key,
    cache_key_base,
    seed,
    strip_tool_call_ids,
)


def conversation(call_id: str) -> ChatCompletionRequest:
    return ChatCompletionRequest(
        model="gpt-4",
        temperature=0.0,
        messages=[
            Message(role="user", content="weather in Oslo?"),
            Message(
                role="assistant",
                tool_calls=[
                    ToolCall(
                        id=call_id,
                        function=FunctionCall(name="get_weather", arguments='{"city":"Oslo"}'),
                    )
                ],
            ),
            Message(role="tool", content="sunny", tool_call_id=call_id, name="get_weather"),
        ],
    )


class TestCacheKeyBase:
    def test_explicit_cache_key_wins(self, test_settings) -> None:
        settings = test_settings.model_copy(update={"cache_key": "shared-team-cache"})

        assert cache_key_base(settings) == "shared-team-cache"

    def test_derived_from_key_and_endpoint(self, test_settings) -> None:
        assert cache_key_base(test_settings) == hashing.id("test-openai-key", "")

    def test_different_endpoints_differ(self, test_settings) -> None:
        other = test_settings.model_copy(update={"base_url": "http://localhost:8000/v1"})

        assert cache_key_base(test_settings) != cache_key_base(other)


class TestCacheKey:
    def test_same_request_same_key(self) -> None:
        assert cache_key("base", conversation("call_1")) == cache_key("base", conversation("call_1"))

    def test_base_changes_key(self) -> None:
        assert cache_key("a", conversation("call_1")) != cache_key("b", conversation("call_1"))

    def test_tool_call_ids_change_key(self) -> None:
        assert cache_key("base", conversation("call_1")) != cache_key("base", conversation("call_2"))

    def test_temperature_changes_key(self) -> None:
        warm = conversation("call_1").model_copy(update={"temperature": 0.5})

        assert cache_key("base", conversation("call_1")) != cache_key("base", warm)


class TestSeed:
    def test_tool_call_ids_do_not_change_seed(self) -> None:
        assert seed(conversation("call_1")) == seed(conversation("call_2"))

    def test_content_changes_seed(self) -> None:
        other = conversation("call_1")
        other.messages[0].content = "weather in Bergen?"

        assert seed(conversation("call_1")) != seed(other)

    def test_strip_leaves_original_untouched(self) -> None:
        original = conversation("call_1")

        stripped = strip_tool_call_ids(original)

        assert stripped.messages[1].tool_calls[0].id == ""
        assert stripped.messages[2].tool_call_id is None
        assert original.messages[1].tool_calls[0].id == "call_1"
        assert original.messages[2].tool_call_id == "call_1"
