"""
Pydantic models for the values the setup wizard reads and writes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EnvironmentVariable(BaseModel):
    """One KEY=value line of the .env file. A None value means declared but unset."""

    key: str
    value: Optional[str] = None

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Environment variable key cannot be empty")
        if "=" in v or "\n" in v:
            raise ValueError(f"Invalid environment variable key: {v!r}")
        return v

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and ("\n" in v or "\r" in v):
            raise ValueError("Environment variable value cannot contain line breaks")
        return v


class McpServerConfig(BaseModel):
    """An entry of mcp_config.json describing one auxiliary MCP server."""

    model_config = ConfigDict(extra="allow")

    url: str
    disabled: Optional[bool] = None
    tool_prefix: Optional[str] = None

    def to_registry_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


class DatabaseParameters(BaseModel):
    """Connection parameters for the TimescaleDB instance."""

    service_id: Optional[str] = None
    host: str
    port: int = 5432
    database: str
    user: str
    password: str = ""


class ServiceEndpoint(BaseModel):
    model_config = ConfigDict(extra="allow")

    host: Optional[str] = None
    port: Optional[int] = None


class TigerService(BaseModel):
    """A service record as printed by `tiger service list/create -o json`."""

    model_config = ConfigDict(extra="allow")

    service_id: str
    name: Optional[str] = None
    status: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    role: Optional[str] = None
    initial_password: Optional[str] = None
    endpoint: Optional[ServiceEndpoint] = None

    @property
    def resolved_host(self) -> Optional[str]:
        if self.host:
            return self.host
        return self.endpoint.host if self.endpoint else None

    @property
    def resolved_port(self) -> Optional[int]:
        if self.port:
            return self.port
        return self.endpoint.port if self.endpoint else None

    @property
    def label(self) -> str:
        name = self.name or "unnamed"
        return f"{name} ({self.service_id}) - {self.status or 'UNKNOWN'}"


class SlackAppInfo(BaseModel):
    """Where to find a Slack app manifest and how to name the app by default."""

    type: str = Field(description="Variable infix, e.g. INGEST or AGENT")
    manifest_url: str
    default_name: str
    default_description: str


class SlackTokens(BaseModel):
    app_token: str
    bot_token: str
