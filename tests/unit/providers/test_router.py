"""
Tests for Model Router

Test Categories:
- Identity mapping for plain OpenAI endpoints
- Single-deployment mapping for Azure endpoints
"""

import pytest

from streamcache.providers.router import ModelRouter


class TestIdentityRouter:
    def test_default_router_passes_models_through(self) -> None:
        router = ModelRouter()

        assert router.is_identity is True
        assert router.map("gpt-4") == "gpt-4"
        assert router.map("") == ""

    def test_from_settings_for_openai_is_identity(self, test_settings) -> None:
        settings = test_settings.model_copy(update={"azure_deployment": "ignored"})

        assert ModelRouter.from_settings(settings).is_identity is True


class TestDeploymentRouter:
    def test_only_default_model_is_mapped(self) -> None:
        router = ModelRouter.from_deployment("gpt-4-turbo-preview", "gpt4-prod")

        assert router.map("gpt-4-turbo-preview") == "gpt4-prod"
        assert router.map("gpt-3.5-turbo") == ""

    def test_empty_deployment_gives_identity(self) -> None:
        assert ModelRouter.from_deployment("gpt-4", "").is_identity is True

    @pytest.mark.parametrize("api_type", ["AZURE", "AZURE_AD"])
    def test_from_settings_for_azure(self, test_settings, api_type) -> None:
        settings = test_settings.model_copy(
            update={"api_type": api_type, "azure_deployment": "gpt4-prod"}
        )
        router = ModelRouter.from_settings(settings)

        assert router.map(settings.default_model) == "gpt4-prod"
        assert router.map("other") == ""

    def test_table_is_copied(self) -> None:
        table = {"a": "b"}
        router = ModelRouter(table)
        table["a"] = "c"

        assert router.map("a") == "b"
