#!/usr/bin/env python3
"""
Feedbucket MCP Setup

Finds the Feedbucket project on a website, fetches its credentials and
configures the MCP server for Claude Code and/or Cursor.

Usage:
    python scripts/setup_mcp.py https://your-website.com [secret]
    python scripts/setup_mcp.py --project-id ABC123 [--api-key KEY]
    python scripts/setup_mcp.py https://your-website.com --extract
    python scripts/setup_mcp.py   (interactive)

Where to find the secret:
    Feedbucket Dashboard -> Project Settings -> Widget Settings ->
    "Trigger Feedbucket using a query string".
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import requests

from feedbucket_mcp.services.setup_service import (
    FeedbucketCredentials,
    SetupError,
    SetupService,
    claude_config_path,
    cursor_config_path,
    mask_secret,
)
from feedbucket_mcp.services.site_scraper import ProjectIdNotFoundError, SiteScraper

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

MANUAL_PROJECT_ID_HELP = """
Could not automatically extract the project ID from the page.

To get your Project ID manually:
  1. Open your website in a browser
  2. Open DevTools (F12) -> Console
  3. Run: document.querySelector('[data-feedbucket]')?.dataset.feedbucket
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Configure the Feedbucket MCP server for Claude Code or Cursor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("website_url", nargs="?", help="Website with Feedbucket installed")
    parser.add_argument("secret", nargs="?", help="Feedbucket query string secret")
    parser.add_argument("--project-id", help="Skip website discovery and use this project ID")
    parser.add_argument("--api-key", help="feedbucketKey for protected projects")
    parser.add_argument(
        "--extract",
        action="store_true",
        help="Only print the credentials and config, don't write files",
    )

    targets = parser.add_mutually_exclusive_group()
    targets.add_argument(
        "--claude", dest="target", action="store_const", const="claude",
        help="Configure Claude Code only",
    )
    targets.add_argument(
        "--cursor", dest="target", action="store_const", const="cursor",
        help="Configure Cursor only",
    )
    targets.add_argument(
        "--both", dest="target", action="store_const", const="both",
        help="Configure Claude Code and Cursor (default)",
    )

    scopes = parser.add_mutually_exclusive_group()
    scopes.add_argument(
        "--project-scope", dest="scope", action="store_const", const="project",
        help="Write Claude Code config to ./.mcp.json (default)",
    )
    scopes.add_argument(
        "--user-scope", dest="scope", action="store_const", const="user",
        help="Write Claude Code config to ~/.claude/mcp.json",
    )
    parser.set_defaults(target="both", scope="project")
    return parser.parse_args(argv)


def resolve_project(args: argparse.Namespace) -> tuple[str, str | None]:
    """Return (project_id, api_key) from arguments, the website, or prompts."""
    api_key = args.api_key or args.secret
    if args.project_id:
        return args.project_id, api_key

    website_url = args.website_url
    if not website_url:
        website_url = input("Enter your website URL: ").strip()
        if not website_url:
            raise SetupError("Website URL is required")
        api_key = input("Enter your Feedbucket secret (press Enter if public): ").strip() or None

    print("\n[1] Extracting Feedbucket project ID from website")
    try:
        site = SiteScraper().discover(website_url, api_key)
    except ProjectIdNotFoundError:
        print(MANUAL_PROJECT_ID_HELP)
        project_id = input("Enter your Feedbucket Project ID: ").strip()
        if not project_id:
            raise SetupError("Project ID is required")
        return project_id, api_key
    except requests.exceptions.RequestException as e:
        raise SetupError(f"Failed to fetch website: {e}") from e

    print(f"  Found project ID: {site.project_id}")
    return site.project_id, site.api_key


def print_extracted(service: SetupService, credentials: FeedbucketCredentials) -> None:
    print("\nClaude Code (run this command):")
    print(service.claude_command(credentials))
    print("\nCursor (add to .cursor/mcp.json):")
    config = {"mcpServers": {credentials.server_name: service.server_config(credentials)}}
    print(json.dumps(config, indent=2))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    service = SetupService()

    try:
        project_id, api_key = resolve_project(args)

        if api_key:
            print(f"  Using secret: {mask_secret(api_key)}")
        else:
            print("  No secret provided - assuming public project")

        print("\n[2] Fetching credentials from Feedbucket API")
        credentials = service.fetch_credentials(project_id, api_key)
        print(f"  Project: {credentials.project_name}")
        print(f"  Website: {credentials.website_url}")
        print(f"  Private key: {mask_secret(credentials.private_key)}")

        if args.extract:
            print_extracted(service, credentials)
            return 0

        print("\n[3] Configuring MCP servers")
        if args.target in ("claude", "both"):
            path = claude_config_path(args.scope)
            service.write_server_config(path, credentials)
            print(f"  Claude Code configured at {path}")
        if args.target in ("cursor", "both"):
            path = cursor_config_path()
            service.write_server_config(path, credentials)
            print(f"  Cursor configured at {path}")
    except SetupError as e:
        logger.error(str(e))
        return 1

    print(f"\nSetup complete. Server name: {credentials.server_name}")
    print("Restart Claude Code / Cursor to load the new MCP server, then try:")
    print('  "Show me unresolved feedback from Feedbucket"')
    return 0


if __name__ == "__main__":
    sys.exit(main())
