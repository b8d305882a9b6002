"""Connector discovery and feed ingestion tools.

Every ingestion tool creates one feed on the platform and returns its
identifier. Credentials come from ConnectorSettings; a missing credential
aborts the process (see ``GraphlitMCP.call_tool``).
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import Field

from .base import DEFAULT_READ_LIMIT, ToolContext, entity_id, to_json


DEFAULT_RSS_READ_LIMIT = 25


def _read_limit(description: str):
    return Annotated[Optional[int], Field(description=description)]


def register(ctx: ToolContext) -> None:
    """Register connector listing and feed ingestion tools."""

    async def create_feed(feed: Dict[str, Any]) -> str:
        async with ctx.client() as client:
            created = await client.create_feed(feed)
        return to_json(entity_id(created))

    # Connector discovery

    @ctx.tool(
        "listMicrosoftTeamsTeams",
        """Lists available Microsoft Teams teams.
        Returns a list of Microsoft Teams teams, where the team identifier can be used with listMicrosoftTeamsChannels to enumerate Microsoft Teams channels.""",
    )
    async def list_microsoft_teams_teams() -> str:
        creds = ctx.connectors.require("listMicrosoftTeamsTeams")
        async with ctx.client() as client:
            teams = await client.query_microsoft_teams_teams(
                {"refreshToken": creds["microsoft_teams_refresh_token"]}
            )
        return to_json(teams)

    @ctx.tool(
        "listMicrosoftTeamsChannels",
        """Lists available Microsoft Teams channels.
        Returns a list of Microsoft Teams channels, where the channel identifier can be used with ingestMicrosoftTeamsMessages to ingest messages into Graphlit knowledge base.""",
    )
    async def list_microsoft_teams_channels(
        teamId: Annotated[str, Field(description="Microsoft Teams team identifier.")],
    ) -> str:
        creds = ctx.connectors.require("listMicrosoftTeamsChannels")
        async with ctx.client() as client:
            channels = await client.query_microsoft_teams_channels(
                {"refreshToken": creds["microsoft_teams_refresh_token"]},
                teamId,
            )
        return to_json(channels)

    @ctx.tool(
        "listSlackChannels",
        """Lists available Slack channels.
        Returns a list of Slack channels, where the channel name can be used with ingestSlackMessages to ingest messages into Graphlit knowledge base.""",
    )
    async def list_slack_channels() -> str:
        creds = ctx.connectors.require("listSlackChannels")
        async with ctx.client() as client:
            channels = await client.query_slack_channels({"token": creds["slack_bot_token"]})
        return to_json(channels)

    def share_point_properties(tool: str) -> Dict[str, Any]:
        creds = ctx.connectors.require(tool)
        return {
            "authenticationType": "USER",
            "clientId": creds["sharepoint_client_id"],
            "clientSecret": creds["sharepoint_client_secret"],
            "refreshToken": creds["sharepoint_refresh_token"],
        }

    @ctx.tool(
        "listSharePointLibraries",
        """Lists available SharePoint libraries.
        Returns a list of SharePoint libraries, where the selected libraryId can be used with listSharePointFolders to enumerate SharePoint folders in a library.""",
    )
    async def list_share_point_libraries() -> str:
        properties = share_point_properties("listSharePointLibraries")
        async with ctx.client() as client:
            libraries = await client.query_share_point_libraries(properties)
        return to_json(libraries)

    @ctx.tool(
        "listSharePointFolders",
        """Lists available SharePoint folders.
        Returns a list of SharePoint folders, which can be used with ingestSharePointFiles to ingest files into Graphlit knowledge base.""",
    )
    async def list_share_point_folders(
        libraryId: Annotated[str, Field(description="SharePoint library identifier.")],
    ) -> str:
        properties = share_point_properties("listSharePointFolders")
        async with ctx.client() as client:
            folders = await client.query_share_point_folders(properties, libraryId)
        return to_json(folders)

    # Cloud storage

    @ctx.tool(
        "ingestSharePointFiles",
        """Ingests files from SharePoint library into Graphlit knowledge base.
        Accepts a SharePoint libraryId and an optional folderId to ingest files from a specific SharePoint folder.
        Libraries can be enumerated with listSharePointLibraries and library folders with listSharePointFolders.
        Accepts an optional read limit for the number of files to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_share_point_files(
        libraryId: Annotated[str, Field(description="SharePoint library identifier.")],
        folderId: Annotated[Optional[str], Field(description="SharePoint folder identifier, optional.")] = None,
        readLimit: _read_limit("Number of files to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestSharePointFiles")
        return await create_feed({
            "name": "SharePoint",
            "type": "SITE",
            "site": {
                "type": "SHARE_POINT",
                "sharePoint": {
                    "authenticationType": "USER",
                    "accountName": creds["sharepoint_account_name"],
                    "clientId": creds["sharepoint_client_id"],
                    "clientSecret": creds["sharepoint_client_secret"],
                    "refreshToken": creds["sharepoint_refresh_token"],
                    "libraryId": libraryId,
                    "folderId": folderId,
                },
                "isRecursive": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestOneDriveFiles",
        """Ingests files from OneDrive folder into Graphlit knowledge base.
        Accepts an optional read limit for the number of files to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_one_drive_files(
        readLimit: _read_limit("Number of files to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestOneDriveFiles")
        return await create_feed({
            "name": "OneDrive",
            "type": "SITE",
            "site": {
                "type": "ONE_DRIVE",
                "oneDrive": {
                    "folderId": creds["onedrive_folder_id"],
                    "clientId": creds["onedrive_client_id"],
                    "clientSecret": creds["onedrive_client_secret"],
                    "refreshToken": creds["onedrive_refresh_token"],
                },
                "isRecursive": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestGoogleDriveFiles",
        """Ingests files from Google Drive folder into Graphlit knowledge base.
        Accepts an optional read limit for the number of files to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_google_drive_files(
        readLimit: _read_limit("Number of files to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestGoogleDriveFiles")
        return await create_feed({
            "name": "Google Drive",
            "type": "SITE",
            "site": {
                "type": "GOOGLE_DRIVE",
                "googleDrive": {
                    "folderId": creds["google_drive_folder_id"],
                    "clientId": creds["google_drive_client_id"],
                    "clientSecret": creds["google_drive_client_secret"],
                    "refreshToken": creds["google_drive_refresh_token"],
                },
                "isRecursive": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestDropboxFiles",
        """Ingests files from Dropbox folder into Graphlit knowledge base.
        Accepts optional relative path to Dropbox folder (i.e. /Pictures), and an optional read limit for the number of files to ingest.
        If no path provided, ingests files from root Dropbox folder.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_dropbox_files(
        path: Annotated[Optional[str], Field(description="Relative path to Dropbox folder, optional.")] = None,
        readLimit: _read_limit("Number of files to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestDropboxFiles")
        return await create_feed({
            "name": "Dropbox",
            "type": "SITE",
            "site": {
                "type": "DROPBOX",
                "dropbox": {
                    "path": path,
                    "appKey": creds["dropbox_app_key"],
                    "appSecret": creds["dropbox_app_secret"],
                    "redirectUri": creds["dropbox_redirect_uri"],
                    "refreshToken": creds["dropbox_refresh_token"],
                },
                "isRecursive": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestBoxFiles",
        """Ingests files from Box folder into Graphlit knowledge base.
        Accepts optional Box folder identifier, and an optional read limit for the number of files to ingest.
        If no folder identifier provided, ingests files from root Box folder (i.e. "0").
        Folder identifier can be inferred from Box URL. https://app.box.com/folder/123456 -> folder identifier is "123456".
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_box_files(
        folderId: Annotated[str, Field(description="Box folder identifier, optional. Defaults to root folder.")] = "0",
        readLimit: _read_limit("Number of files to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestBoxFiles")
        return await create_feed({
            "name": "Box",
            "type": "SITE",
            "site": {
                "type": "BOX",
                "box": {
                    "folderId": folderId,
                    "clientId": creds["box_client_id"],
                    "clientSecret": creds["box_client_secret"],
                    "redirectUri": creds["box_redirect_uri"],
                    "refreshToken": creds["box_refresh_token"],
                },
                "isRecursive": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestGitHubFiles",
        """Ingests files from GitHub repository into Graphlit knowledge base.
        Accepts GitHub repository owner and repository name and an optional read limit for the number of files to ingest.
        For example, for GitHub repository (https://github.com/openai/tiktoken), 'openai' is the repository owner, and 'tiktoken' is the repository name.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_github_files(
        repositoryName: Annotated[str, Field(description="GitHub repository name.")],
        repositoryOwner: Annotated[str, Field(description="GitHub repository owner.")],
        readLimit: _read_limit("Number of files to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestGitHubFiles")
        return await create_feed({
            "name": "GitHub",
            "type": "SITE",
            "site": {
                "type": "GIT_HUB",
                "github": {
                    "repositoryOwner": repositoryOwner,
                    "repositoryName": repositoryName,
                    "personalAccessToken": creds["github_personal_access_token"],
                },
                "isRecursive": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestNotionPages",
        """Ingests pages from Notion database into Graphlit knowledge base.
        Accepts an optional read limit for the number of messages to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_notion_pages(
        readLimit: _read_limit("Number of pages to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestNotionPages")
        return await create_feed({
            "name": "Notion",
            "type": "NOTION",
            "notion": {
                "type": "DATABASE",
                "identifiers": [creds["notion_database_id"]],
                "token": creds["notion_api_key"],
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    # Messaging

    @ctx.tool(
        "ingestMicrosoftTeamsMessages",
        """Ingests messages from Microsoft Teams channel into Graphlit knowledge base.
        Accepts Microsoft Teams team identifier and channel identifier, and an optional read limit for the number of messages to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_microsoft_teams_messages(
        teamId: Annotated[str, Field(description="Microsoft Teams team identifier.")],
        channelId: Annotated[str, Field(description="Microsoft Teams channel identifier.")],
        readLimit: _read_limit("Number of messages to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestMicrosoftTeamsMessages")
        return await create_feed({
            "name": f"Microsoft Teams [{teamId}/{channelId}]",
            "type": "MICROSOFT_TEAMS",
            "microsoftTeams": {
                "type": "PAST",
                "clientId": creds["microsoft_teams_client_id"],
                "clientSecret": creds["microsoft_teams_client_secret"],
                "refreshToken": creds["microsoft_teams_refresh_token"],
                "channelId": channelId,
                "teamId": teamId,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestSlackMessages",
        """Ingests messages from Slack channel into Graphlit knowledge base.
        Accepts Slack channel name and an optional read limit for the number of messages to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_slack_messages(
        channelName: Annotated[str, Field(description="Slack channel name.")],
        readLimit: _read_limit("Number of messages to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestSlackMessages")
        return await create_feed({
            "name": f"Slack [{channelName}]",
            "type": "SLACK",
            "slack": {
                "type": "PAST",
                "channel": channelName,
                "token": creds["slack_bot_token"],
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestDiscordMessages",
        """Ingests messages from Discord channel into Graphlit knowledge base.
        Accepts Discord channel name and an optional read limit for the number of messages to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_discord_messages(
        channelName: Annotated[str, Field(description="Discord channel name.")],
        readLimit: _read_limit("Number of messages to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestDiscordMessages")
        return await create_feed({
            "name": f"Discord [{channelName}]",
            "type": "DISCORD",
            "discord": {
                "type": "PAST",
                "channel": channelName,
                "token": creds["discord_bot_token"],
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestRedditPosts",
        """Ingests posts from Reddit subreddit into Graphlit knowledge base.
        Accepts a subreddit name and an optional read limit for the number of posts to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_reddit_posts(
        subredditName: Annotated[str, Field(description="Subreddit name.")],
        readLimit: _read_limit("Number of posts to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        return await create_feed({
            "name": f"Reddit [{subredditName}]",
            "type": "REDDIT",
            "reddit": {
                "subredditName": subredditName,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    # Email

    @ctx.tool(
        "ingestGoogleEmail",
        """Ingests emails from Google Email account into Graphlit knowledge base.
        Accepts an optional read limit for the number of emails to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_google_email(
        readLimit: _read_limit("Number of emails to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestGoogleEmail")
        return await create_feed({
            "name": "Google Email",
            "type": "EMAIL",
            "email": {
                "type": "GOOGLE_EMAIL",
                "google": {
                    "type": "PAST",
                    "refreshToken": creds["google_email_refresh_token"],
                    "clientId": creds["google_email_client_id"],
                    "clientSecret": creds["google_email_client_secret"],
                },
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestMicrosoftEmail",
        """Ingests emails from Microsoft Email account into Graphlit knowledge base.
        Accepts an optional read limit for the number of emails to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_microsoft_email(
        readLimit: _read_limit("Number of emails to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestMicrosoftEmail")
        return await create_feed({
            "name": "Microsoft Email",
            "type": "EMAIL",
            "email": {
                "type": "MICROSOFT_EMAIL",
                "microsoft": {
                    "type": "PAST",
                    "refreshToken": creds["microsoft_email_refresh_token"],
                    "clientId": creds["microsoft_email_client_id"],
                    "clientSecret": creds["microsoft_email_client_secret"],
                },
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    # Issues

    @ctx.tool(
        "ingestLinearIssues",
        """Ingests issues from Linear project into Graphlit knowledge base.
        Accepts Linear project name and an optional read limit for the number of issues to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_linear_issues(
        projectName: Annotated[str, Field(description="Linear project name.")],
        readLimit: _read_limit("Number of issues to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestLinearIssues")
        return await create_feed({
            "name": f"Linear [{projectName}]",
            "type": "ISSUE",
            "issue": {
                "type": "LINEAR",
                "linear": {
                    "project": projectName,
                    "key": creds["linear_api_key"],
                },
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestGitHubIssues",
        """Ingests issues from GitHub repository into Graphlit knowledge base.
        Accepts GitHub repository owner and repository name and an optional read limit for the number of issues to ingest.
        For example, for GitHub repository (https://github.com/openai/tiktoken), 'openai' is the repository owner, and 'tiktoken' is the repository name.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_github_issues(
        repositoryName: Annotated[str, Field(description="GitHub repository name.")],
        repositoryOwner: Annotated[str, Field(description="GitHub repository owner.")],
        readLimit: _read_limit("Number of issues to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestGitHubIssues")
        return await create_feed({
            "name": f"GitHub [{repositoryOwner}/{repositoryName}]",
            "type": "ISSUE",
            "issue": {
                "type": "GIT_HUB_ISSUES",
                "github": {
                    "repositoryName": repositoryName,
                    "repositoryOwner": repositoryOwner,
                    "personalAccessToken": creds["github_personal_access_token"],
                },
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestJiraIssues",
        """Ingests issues from Atlassian Jira repository into Graphlit knowledge base.
        Accepts Atlassian Jira server URL and project name, and an optional read limit for the number of issues to ingest.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_jira_issues(
        url: Annotated[str, Field(description="Atlassian Jira server URL.")],
        projectName: Annotated[str, Field(description="Atlassian Jira project name.")],
        readLimit: _read_limit("Number of issues to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        creds = ctx.connectors.require("ingestJiraIssues")
        return await create_feed({
            "name": f"Jira [{projectName}]",
            "type": "ISSUE",
            "issue": {
                "type": "ATLASSIAN_JIRA",
                "jira": {
                    "uri": url,
                    "project": projectName,
                    "email": creds["jira_email"],
                    "token": creds["jira_token"],
                },
                "includeAttachments": True,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    # Web

    @ctx.tool(
        "webCrawl",
        """Crawls web pages from web site into Graphlit knowledge base.
        Accepts a URL and an optional read limit for the number of pages to crawl.
        Uses sitemap.xml to discover pages to be crawled from website.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def web_crawl(
        url: Annotated[str, Field(description="Web site URL.")],
        readLimit: _read_limit("Number of web pages to ingest, optional. Defaults to 100.") = None,
    ) -> str:
        return await create_feed({
            "name": f"Web [{url}]",
            "type": "WEB",
            "web": {
                "uri": url,
                "readLimit": readLimit or DEFAULT_READ_LIMIT,
            },
        })

    @ctx.tool(
        "ingestRSS",
        """Ingests posts from RSS feed into Graphlit knowledge base.
        For podcast RSS feeds, audio will be downloaded, transcribed and ingested into Graphlit knowledge base.
        Accepts RSS URL and an optional read limit for the number of posts to read.
        Executes asynchronously and returns the feed identifier.""",
    )
    async def ingest_rss(
        url: Annotated[str, Field(description="RSS feed URL.")],
        readLimit: _read_limit("Number of posts to ingest, optional. Defaults to 25.") = None,
    ) -> str:
        return await create_feed({
            "name": f"RSS [{url}]",
            "type": "RSS",
            "rss": {
                "uri": url,
                "readLimit": readLimit or DEFAULT_RSS_READ_LIMIT,
            },
        })
