"""
Slack app providers.

The deployment needs two Slack apps: one that ingests public channel history
and one that answers @mentions. Both are created from a published manifest
and differ only in naming and the variables they write.
"""

import json
from typing import Any, Dict, List, Optional

import httpx

from agent_setup.config.schema import EnvironmentVariable, SlackAppInfo, SlackTokens
from agent_setup.errors import ClipboardError
from agent_setup.providers.base import Provider
from agent_setup.utils.http import download_json
from agent_setup.utils.logger import logger
from agent_setup.utils.platform import copy_to_clipboard
from agent_setup.validators.tokens import (
    SLACK_APP_TOKEN_PREFIX,
    SLACK_BOT_TOKEN_PREFIX,
    prefix_validator,
)

SLACK_APPS_URL = "https://api.slack.com/apps/"
SLACK_AUTH_TEST_URL = "https://slack.com/api/auth.test"


def customize_manifest(manifest: Dict[str, Any], name: str, description: str) -> Dict[str, Any]:
    """Return a copy of the manifest with the app and bot user renamed."""
    manifest = json.loads(json.dumps(manifest))

    display = manifest.setdefault("display_information", {})
    display["name"] = name
    display["description"] = description

    bot_user = (manifest.get("features") or {}).get("bot_user")
    if isinstance(bot_user, dict):
        bot_user["display_name"] = name

    return manifest


class SlackProvider(Provider):
    """Walks the user through creating a Slack app and collecting its tokens."""

    required = True
    app: SlackAppInfo

    def __init__(self, context):
        super().__init__(context)
        self.tokens: Optional[SlackTokens] = None

    @property
    def app_token_key(self) -> str:
        return f"SLACK_{self.app.type.upper()}_APP_TOKEN"

    @property
    def bot_token_key(self) -> str:
        return f"SLACK_{self.app.type.upper()}_BOT_TOKEN"

    @property
    def variable_keys(self) -> List[str]:
        return [self.app_token_key, self.bot_token_key]

    def _collect(self) -> None:
        manifest = download_json(self.http, self.app.manifest_url)

        app_name = self.ask(
            f"App name (press Enter for '{self.app.default_name}')",
            default=self.app.default_name,
        )
        app_description = self.ask(
            f"App description (press Enter for '{self.app.default_description}')",
            default=self.app.default_description,
        )
        manifest = customize_manifest(manifest, app_name, app_description)

        self.console.print("\nSlack App Creation Steps:")
        self.console.print(
            '1. Click "Create New App" -> "From a manifest" -> Choose your workspace'
        )
        if self.ask_yes_no(f"Open {SLACK_APPS_URL}?", default=True):
            self.open_in_browser(SLACK_APPS_URL)
        self.prompts.press_enter_to_continue(
            "Press Enter after selecting your workspace and clicking Next..."
        )

        self.console.print("\n2. Copy the manifest below and paste it into the App creation wizard:")
        self.console.print_json(manifest)
        try:
            copy_to_clipboard(json.dumps(manifest, indent=2))
            self.info("The manifest has been copied to your clipboard")
        except ClipboardError as e:
            logger.debug("Clipboard unavailable", error=str(e))

        self.prompts.press_enter_to_continue("Press Enter after creating the app...")

        self.console.print("\n3. Navigate to: Basic Information -> App-Level Tokens")
        self.console.print(
            '4. Click "Generate Token and Scopes" -> Enter a Token Name -> '
            'Add "connections:write" scope -> Generate\n'
        )
        app_token = self.ask_secret(
            f"Please paste your {app_name} App-Level Token (starts with '{SLACK_APP_TOKEN_PREFIX}')",
            validator=prefix_validator(SLACK_APP_TOKEN_PREFIX),
        )

        self.console.print("\n5. Navigate to: App Home -> Show Tabs -> Enable the Messages tab setting")
        self.console.print(
            '6. Check "Allow users to send Slash commands and messages from the messages tab"'
        )
        self.console.print('7. Navigate to: Install App -> Click "Install to [Workspace]"')
        self.console.print('8. After installation, copy the "Bot User OAuth Token"\n')
        bot_token = self.ask_secret(
            f"Please paste your {app_name} Bot User OAuth Token (starts with '{SLACK_BOT_TOKEN_PREFIX}')",
            validator=prefix_validator(SLACK_BOT_TOKEN_PREFIX),
        )

        self.tokens = SlackTokens(app_token=app_token, bot_token=bot_token)

    def _validate(self) -> bool:
        tokens = self._require(self.tokens)
        try:
            response = self.http.get(
                SLACK_AUTH_TEST_URL,
                headers={"Authorization": f"Bearer {tokens.bot_token}"},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Slack token check failed", app=self.app.type, error=str(e))
            self.error("Could not reach the Slack API")
            return False

        if not isinstance(data, dict) or data.get("ok") is not True:
            error = data.get("error") if isinstance(data, dict) else None
            logger.warning("Slack rejected bot token", app=self.app.type, error=error)
            self.error(f"Invalid Slack bot token{f' ({error})' if error else ''}")
            return False

        self.success(f"Validated {self.name} tokens for team {data.get('team') or 'unknown'}")
        return True

    def _variables(self) -> List[EnvironmentVariable]:
        return [
            EnvironmentVariable(key=self.app_token_key, value=self.tokens.app_token),
            EnvironmentVariable(key=self.bot_token_key, value=self.tokens.bot_token),
        ]


class IngestSlackProvider(SlackProvider):
    name = "Slack Ingest App"
    description = "Receives all messages/reactions from public channels"
    app = SlackAppInfo(
        type="ingest",
        manifest_url="https://raw.githubusercontent.com/timescale/tiger-slack/main/slack-app-manifest.json",
        default_name="tiger-slack-ingest",
        default_description="Receives all messages/reactions from public channels",
    )


class AgentSlackProvider(SlackProvider):
    name = "Slack Agent App"
    description = "Answers @mentions of the agent"
    app = SlackAppInfo(
        type="agent",
        manifest_url="https://raw.githubusercontent.com/timescale/tiger-agents-for-work/main/slack-manifest.json",
        default_name="eon",
        default_description="TigerData Knowledge Base Agent",
    )
