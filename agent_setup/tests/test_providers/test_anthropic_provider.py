"""
Tests for the Anthropic provider.
"""

import httpx
import pytest

from agent_setup.providers.anthropic import ANTHROPIC_API_VERSION, AnthropicProvider


class TestAnthropicProvider:

    def test_collect_rejects_wrong_prefix(self, make_context, prompts):
        provider = AnthropicProvider(make_context())
        prompts.feed("n", "sk-proj-123", "sk-ant-api03-abc")

        provider.collect()

        assert provider.api_key == "sk-ant-api03-abc"
        assert provider.get_variables()[0].value == "sk-ant-api03-abc"

    def test_validate_success(self, make_context):
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            return httpx.Response(200, json={"data": [], "has_more": False})

        provider = AnthropicProvider(make_context(handler))
        provider.api_key = "sk-ant-key"
        provider.is_configured = True

        assert provider.validate() is True
        assert seen["headers"]["x-api-key"] == "sk-ant-key"
        assert seen["headers"]["anthropic-version"] == ANTHROPIC_API_VERSION

    def test_validate_error_body(self, make_context):
        def handler(request):
            return httpx.Response(401, json={"type": "error", "error": {"type": "authentication_error"}})

        provider = AnthropicProvider(make_context(handler))
        provider.api_key = "sk-ant-bad"
        provider.is_configured = True

        assert provider.validate() is False

    def test_validate_transport_error(self, make_context):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        provider = AnthropicProvider(make_context(handler))
        provider.api_key = "sk-ant-key"
        provider.is_configured = True

        assert provider.validate() is False

    def test_validate_non_json_body(self, make_context):
        provider = AnthropicProvider(make_context(lambda r: httpx.Response(502, text="Bad Gateway")))
        provider.api_key = "sk-ant-key"
        provider.is_configured = True

        assert provider.validate() is False
