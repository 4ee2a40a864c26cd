"""
Tests for the Logfire provider.
"""

from agent_setup.providers.logfire import LOGFIRE_LOGS_ENDPOINT, LOGFIRE_TRACES_ENDPOINT, LogfireProvider


class TestLogfireProvider:

    def test_collect_with_default_environment(self, make_context, prompts):
        provider = LogfireProvider(make_context())
        prompts.feed("pylf_token", "")

        provider.collect()

        assert provider.validate() is True
        assert {v.key: v.value for v in provider.get_variables()} == {
            "LOGFIRE_TOKEN": "pylf_token",
            "LOGFIRE_ENVIRONMENT": "development",
            "LOGFIRE_TRACES_ENDPOINT": LOGFIRE_TRACES_ENDPOINT,
            "LOGFIRE_LOGS_ENDPOINT": LOGFIRE_LOGS_ENDPOINT,
        }

    def test_unconfigured_is_valid(self, make_context):
        assert LogfireProvider(make_context()).validate() is True
