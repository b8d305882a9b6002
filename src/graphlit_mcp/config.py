"""Configuration management using pydantic-settings."""

import logging
import os
from typing import Dict, List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

# Exit status used when the deployment is missing a credential
EXIT_CONFIGURATION_ERROR = 1


class MissingCredentialsError(Exception):
    """Raised when a tool needs credentials that are not configured."""

    def __init__(self, tool: str, missing: List[str]):
        self.tool = tool
        self.missing = missing
        super().__init__(
            f"Please set {', '.join(missing)} environment variable"
            f"{'s' if len(missing) > 1 else ''} for {tool}."
        )


class Settings(BaseSettings):
    """Platform and server settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Platform credentials
    organization_id: str = Field(
        default="",
        description="Graphlit organization ID",
    )
    environment_id: str = Field(
        default="",
        description="Graphlit environment ID",
    )
    jwt_secret: str = Field(
        default="",
        description="JWT secret for signing tokens",
    )

    # Data API
    api_uri: str = Field(
        default="https://data-scus.graphlit.io/api/v1/graphql",
        description="Graphlit GraphQL endpoint",
    )
    listing_limit: int = Field(
        default=100,
        description="Maximum number of entities returned by resource listings",
    )

    # Tool catalog
    enabled_tools: List[str] = Field(
        default_factory=list,
        description="Tool names to expose (empty = all tools). Credentials of listed tools are validated at startup.",
    )

    # Transport
    transport: str = Field(
        default="stdio",
        description="MCP transport: 'stdio' or 'streamable-http'",
    )
    http_host: str = Field(
        default="127.0.0.1",
        description="HTTP server host",
    )
    http_port: int = Field(
        default=8000,
        description="HTTP server port",
    )
    http_auth_username: str = Field(
        default="",
        description="HTTP basic auth username (leave empty to disable auth)",
    )
    http_auth_password: str = Field(
        default="",
        description="HTTP basic auth password (leave empty to disable auth)",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )

    def missing_platform_credentials(self) -> list[str]:
        """Return the environment variable names of unset platform credentials."""
        missing = []
        if not self.organization_id:
            missing.append("GRAPHLIT_ORGANIZATION_ID")
        if not self.environment_id:
            missing.append("GRAPHLIT_ENVIRONMENT_ID")
        if not self.jwt_secret:
            missing.append("GRAPHLIT_JWT_SECRET")
        return missing

    def is_tool_enabled(self, name: str) -> bool:
        """Check if a tool is part of the served catalog."""
        return not self.enabled_tools or name in self.enabled_tools

    def is_http_auth_enabled(self) -> bool:
        """Check if HTTP basic authentication is enabled."""
        return bool(self.http_auth_username and self.http_auth_password)


# Connector credentials required by each tool, as ConnectorSettings field names
TOOL_CREDENTIALS: Dict[str, Tuple[str, ...]] = {
    "listMicrosoftTeamsTeams": (
        "microsoft_teams_client_id",
        "microsoft_teams_client_secret",
        "microsoft_teams_refresh_token",
    ),
    "listMicrosoftTeamsChannels": (
        "microsoft_teams_client_id",
        "microsoft_teams_client_secret",
        "microsoft_teams_refresh_token",
    ),
    "listSlackChannels": ("slack_bot_token",),
    "listSharePointLibraries": (
        "sharepoint_client_id",
        "sharepoint_client_secret",
        "sharepoint_refresh_token",
    ),
    "listSharePointFolders": (
        "sharepoint_client_id",
        "sharepoint_client_secret",
        "sharepoint_refresh_token",
    ),
    "ingestSharePointFiles": (
        "sharepoint_account_name",
        "sharepoint_client_id",
        "sharepoint_client_secret",
        "sharepoint_refresh_token",
    ),
    "ingestOneDriveFiles": (
        "onedrive_folder_id",
        "onedrive_client_id",
        "onedrive_client_secret",
        "onedrive_refresh_token",
    ),
    "ingestGoogleDriveFiles": (
        "google_drive_folder_id",
        "google_drive_client_id",
        "google_drive_client_secret",
        "google_drive_refresh_token",
    ),
    "ingestDropboxFiles": (
        "dropbox_app_key",
        "dropbox_app_secret",
        "dropbox_redirect_uri",
        "dropbox_refresh_token",
    ),
    "ingestBoxFiles": (
        "box_client_id",
        "box_client_secret",
        "box_redirect_uri",
        "box_refresh_token",
    ),
    "ingestGitHubFiles": ("github_personal_access_token",),
    "ingestNotionPages": ("notion_api_key", "notion_database_id"),
    "ingestMicrosoftTeamsMessages": (
        "microsoft_teams_client_id",
        "microsoft_teams_client_secret",
        "microsoft_teams_refresh_token",
    ),
    "ingestSlackMessages": ("slack_bot_token",),
    "ingestDiscordMessages": ("discord_bot_token",),
    "ingestGoogleEmail": (
        "google_email_refresh_token",
        "google_email_client_id",
        "google_email_client_secret",
    ),
    "ingestMicrosoftEmail": (
        "microsoft_email_refresh_token",
        "microsoft_email_client_id",
        "microsoft_email_client_secret",
    ),
    "ingestLinearIssues": ("linear_api_key",),
    "ingestGitHubIssues": ("github_personal_access_token",),
    "ingestJiraIssues": ("jira_email", "jira_token"),
}


class ConnectorSettings(BaseSettings):
    """Per-connector credentials, read from unprefixed environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    slack_bot_token: str = ""
    discord_bot_token: str = ""

    google_email_refresh_token: str = ""
    google_email_client_id: str = ""
    google_email_client_secret: str = ""

    microsoft_email_refresh_token: str = ""
    microsoft_email_client_id: str = ""
    microsoft_email_client_secret: str = ""

    microsoft_teams_client_id: str = ""
    microsoft_teams_client_secret: str = ""
    microsoft_teams_refresh_token: str = ""

    sharepoint_account_name: str = ""
    sharepoint_client_id: str = ""
    sharepoint_client_secret: str = ""
    sharepoint_refresh_token: str = ""

    onedrive_folder_id: str = ""
    onedrive_client_id: str = ""
    onedrive_client_secret: str = ""
    onedrive_refresh_token: str = ""

    google_drive_folder_id: str = ""
    google_drive_client_id: str = ""
    google_drive_client_secret: str = ""
    google_drive_refresh_token: str = ""

    dropbox_app_key: str = ""
    dropbox_app_secret: str = ""
    dropbox_redirect_uri: str = ""
    dropbox_refresh_token: str = ""

    box_client_id: str = ""
    box_client_secret: str = ""
    box_redirect_uri: str = ""
    box_refresh_token: str = ""

    github_personal_access_token: str = ""

    notion_api_key: str = ""
    notion_database_id: str = ""

    linear_api_key: str = ""

    jira_email: str = ""
    jira_token: str = ""

    def missing_for(self, tool: str) -> list[str]:
        """Return the environment variable names a tool needs but lacks."""
        return [
            field.upper()
            for field in TOOL_CREDENTIALS.get(tool, ())
            if not getattr(self, field)
        ]

    def require(self, tool: str) -> Dict[str, str]:
        """
        Resolve the credentials a tool needs.

        Args:
            tool: Tool name as registered in the catalog

        Returns:
            Mapping of field name to credential value

        Raises:
            MissingCredentialsError: If any required credential is unset
        """
        missing = self.missing_for(tool)
        if missing:
            raise MissingCredentialsError(tool, missing)
        return {field: getattr(self, field) for field in TOOL_CREDENTIALS.get(tool, ())}


def terminate(reason: str) -> None:
    """Stop the whole process because the deployment is misconfigured."""
    logger.critical(reason)
    logging.shutdown()
    # Hard exit: the event loop and transport tasks must not keep serving
    os._exit(EXIT_CONFIGURATION_ERROR)


def validate_startup(settings: "Settings", connectors: ConnectorSettings) -> None:
    """
    Check deployment configuration before serving any request.

    Platform credentials are always required; connector credentials only for
    tools listed explicitly in ``enabled_tools``.
    """
    missing = settings.missing_platform_credentials()
    for tool in settings.enabled_tools:
        missing.extend(
            name for name in connectors.missing_for(tool) if name not in missing
        )

    if missing:
        terminate(f"Please set {', '.join(missing)} environment variable(s).")


# Global settings instances
settings = Settings()
connectors = ConnectorSettings()
