"""Tests for the setup_mcp command line."""

from unittest.mock import patch

import pytest

import setup_mcp
from feedbucket_mcp.services.setup_service import FeedbucketCredentials, SetupError
from feedbucket_mcp.services.site_scraper import ProjectIdNotFoundError, SiteProject


class TestParseArgs:
    def test_defaults(self):
        args = setup_mcp.parse_args(["https://example.com", "s3cr3t"])

        assert args.website_url == "https://example.com"
        assert args.secret == "s3cr3t"
        assert args.target == "both"
        assert args.scope == "project"
        assert args.extract is False

    def test_target_and_scope(self):
        args = setup_mcp.parse_args(["--project-id", "ABC", "--cursor", "--user-scope"])

        assert args.project_id == "ABC"
        assert args.target == "cursor"
        assert args.scope == "user"

    def test_targets_are_exclusive(self):
        with pytest.raises(SystemExit):
            setup_mcp.parse_args(["--claude", "--cursor"])


class TestResolveProject:
    def test_project_id_skips_discovery(self):
        args = setup_mcp.parse_args(["--project-id", "ABC", "--api-key", "key"])

        assert setup_mcp.resolve_project(args) == ("ABC", "key")

    @patch("setup_mcp.SiteScraper")
    def test_discovers_from_website(self, mock_scraper):
        mock_scraper.return_value.discover.return_value = SiteProject(
            project_id="AbCdEf1234567890XyZq",
            api_key="s3cr3t",
            source_url="https://example.com/?feedbucketKey=s3cr3t",
        )
        args = setup_mcp.parse_args(["https://example.com", "s3cr3t"])

        assert setup_mcp.resolve_project(args) == ("AbCdEf1234567890XyZq", "s3cr3t")
        mock_scraper.return_value.discover.assert_called_once_with(
            "https://example.com", "s3cr3t"
        )

    @patch("builtins.input", return_value="ManualProjectId12345")
    @patch("setup_mcp.SiteScraper")
    def test_falls_back_to_prompt(self, mock_scraper, mock_input):
        mock_scraper.return_value.discover.side_effect = ProjectIdNotFoundError("none")
        args = setup_mcp.parse_args(["https://example.com"])

        assert setup_mcp.resolve_project(args) == ("ManualProjectId12345", None)

    @patch("builtins.input", return_value="")
    def test_interactive_requires_url(self, mock_input):
        with pytest.raises(SetupError):
            setup_mcp.resolve_project(setup_mcp.parse_args([]))


class TestMain:
    """Tests for the end-to-end setup flow with the API mocked."""

    CREDENTIALS = FeedbucketCredentials(
        project_id="ABC",
        private_key="priv-key-123456",
        project_name="Acme",
        website_url="https://example.com",
    )

    @patch("setup_mcp.SetupService.fetch_credentials")
    def test_extract_prints_config(self, mock_fetch, capsys):
        mock_fetch.return_value = self.CREDENTIALS

        assert setup_mcp.main(["--project-id", "ABC", "--extract"]) == 0

        output = capsys.readouterr().out
        assert "claude mcp add feedbucket-acme" in output
        assert '"mcpServers"' in output
        assert "priv-key-123456" in output

    @patch("setup_mcp.cursor_config_path")
    @patch("setup_mcp.claude_config_path")
    @patch("setup_mcp.SetupService.fetch_credentials")
    def test_writes_both_configs(
        self, mock_fetch, mock_claude_path, mock_cursor_path, tmp_path
    ):
        mock_fetch.return_value = self.CREDENTIALS
        mock_claude_path.return_value = tmp_path / ".mcp.json"
        mock_cursor_path.return_value = tmp_path / ".cursor" / "mcp.json"

        assert setup_mcp.main(["--project-id", "ABC"]) == 0

        assert (tmp_path / ".mcp.json").exists()
        assert (tmp_path / ".cursor" / "mcp.json").exists()
        mock_claude_path.assert_called_once_with("project")

    @patch("setup_mcp.SetupService.fetch_credentials")
    def test_setup_error_returns_1(self, mock_fetch):
        mock_fetch.side_effect = SetupError("Project not found: ABC")

        assert setup_mcp.main(["--project-id", "ABC"]) == 1
