"""Credential lookup and IDE configuration for the MCP server."""

import json
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from feedbucket_mcp.models.config import DEFAULT_BASE_URL
from feedbucket_mcp.services.feedbucket_client import (
    FeedbucketApiError,
    FeedbucketClient,
)

logger = logging.getLogger(__name__)

SERVER_MODULE = "feedbucket_mcp.handlers.mcp_server"


class SetupError(Exception):
    """Setup cannot continue; the message tells the user what to do."""

    pass


@dataclass
class FeedbucketCredentials:
    """Everything the MCP server needs to run against one project."""

    project_id: str
    private_key: str
    project_name: str
    website_url: str
    api_key: str | None = None

    @property
    def server_name(self) -> str:
        """MCP server name derived from the project name."""
        slug = re.sub(r"[^a-z0-9]", "-", self.project_name.lower())
        return f"feedbucket-{re.sub(r'-+', '-', slug)}"

    def server_env(self) -> dict[str, str]:
        env = {
            "FEEDBUCKET_PROJECT_ID": self.project_id,
            "FEEDBUCKET_PRIVATE_KEY": self.private_key,
        }
        if self.api_key:
            env["FEEDBUCKET_API_KEY"] = self.api_key
        return env


def mask_secret(value: str) -> str:
    """Show only the first and last four characters of a secret."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


class SetupService:
    """Fetches project credentials and writes MCP client configuration."""

    def __init__(
        self,
        client: FeedbucketClient | None = None,
        python_executable: str | None = None,
    ):
        self.client = client or FeedbucketClient(base_url=DEFAULT_BASE_URL)
        self.python_executable = python_executable or sys.executable

    def fetch_credentials(
        self, project_id: str, api_key: str | None = None
    ) -> FeedbucketCredentials:
        """
        Read the private key and project details from the project endpoint.

        Raises:
            SetupError: If the project is protected, missing, or exposes no
                private key.
        """
        path = f"/projects/{project_id}"
        if api_key:
            path += f"?feedbucketKey={api_key}"

        logger.info("Fetching project data from Feedbucket API...")
        try:
            data = self.client.request(path)
        except FeedbucketApiError as e:
            if e.status in (401, 403):
                raise SetupError(
                    "This project requires authentication. Please provide the API key:\n"
                    f"  setup_mcp.py --project-id {project_id} --api-key YOUR_KEY"
                ) from e
            if e.status == 404:
                raise SetupError(
                    f"Project not found: {project_id}. Please check the project ID."
                ) from e
            raise SetupError(f"Feedbucket API error: {e.message}") from e

        project = data.get("project") if isinstance(data, dict) else None
        if not project:
            raise SetupError(
                "This project is protected and requires an API key (feedbucketKey).\n"
                "Open your website with ?feedbucketKey=YOUR_SECRET in the URL; that "
                "value is your API key. Then run:\n"
                f"  setup_mcp.py --project-id {project_id} --api-key YOUR_KEY"
            )

        private_key = project.get("private_key")
        if not private_key:
            raise SetupError(
                "Could not retrieve private key from Feedbucket API. "
                "The project may have restricted access."
            )

        return FeedbucketCredentials(
            project_id=project_id,
            private_key=private_key,
            project_name=project.get("name") or project_id,
            website_url=project.get("url") or "",
            api_key=api_key,
        )

    def server_config(self, credentials: FeedbucketCredentials) -> dict[str, Any]:
        """The ``mcpServers`` entry that launches this server."""
        return {
            "command": self.python_executable,
            "args": ["-m", SERVER_MODULE],
            "env": credentials.server_env(),
        }

    def claude_command(self, credentials: FeedbucketCredentials) -> str:
        """Equivalent ``claude mcp add`` command line."""
        lines = [f"claude mcp add {credentials.server_name}"]
        for key, value in credentials.server_env().items():
            lines.append(f'  -e {key}="{value}"')
        lines.append(f'  -- "{self.python_executable}" -m {SERVER_MODULE}')
        return " \\\n".join(lines)

    def write_server_config(
        self, config_path: Path, credentials: FeedbucketCredentials
    ) -> str:
        """Merge this project's server entry into an MCP JSON config file.

        Other servers already in the file are kept. Returns the server name.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config: dict[str, Any] = {}
        if config_path.exists():
            try:
                config = json.loads(config_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError:
                logger.warning(
                    f"Could not parse existing config at {config_path}, "
                    "creating new one"
                )
            if not isinstance(config, dict):
                config = {}

        servers = config.get("mcpServers")
        if not isinstance(servers, dict):
            servers = config["mcpServers"] = {}
        servers[credentials.server_name] = self.server_config(credentials)

        config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
        logger.info(f"Wrote MCP server {credentials.server_name} to {config_path}")
        return credentials.server_name


def claude_config_path(scope: str, cwd: Path | None = None, home: Path | None = None) -> Path:
    """Claude Code config file for ``project`` or ``user`` scope."""
    if scope == "project":
        return (cwd or Path.cwd()) / ".mcp.json"
    return (home or Path.home()) / ".claude" / "mcp.json"


def cursor_config_path(cwd: Path | None = None) -> Path:
    return (cwd or Path.cwd()) / ".cursor" / "mcp.json"
