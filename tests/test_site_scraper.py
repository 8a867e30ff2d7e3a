"""Tests for website project id discovery."""

import unittest
from unittest.mock import Mock

import requests

from feedbucket_mcp.services.site_scraper import (
    ProjectIdNotFoundError,
    SiteScraper,
    build_site_url,
    find_project_id,
)

PROJECT_ID = "AbCdEf1234567890XyZq"


class TestFindProjectId:
    def test_data_attribute(self):
        html = f'<html><body><div data-feedbucket="{PROJECT_ID}"></div></body></html>'

        assert find_project_id(html) == PROJECT_ID

    def test_iife_loader(self):
        html = (
            "<script>(function(k){var s=document.createElement('script');"
            "s.src='https://cdn.feedbucket.app/assets/feedbucket.js';"
            "s.dataset.feedbucket=k;document.head.appendChild(s);"
            f"}})('{PROJECT_ID}')</script>"
        )

        assert find_project_id(html) == PROJECT_ID

    def test_script_query_param(self):
        html = (
            '<script src="https://cdn.feedbucket.app/assets/feedbucket.js'
            f'?id={PROJECT_ID}"></script>'
        )

        assert find_project_id(html) == PROJECT_ID

    def test_json_escaped_attribute(self):
        html = f'<script>window.__DATA__ = "{{\\"data-feedbucket\\":\\"{PROJECT_ID}\\"}}"</script>'

        assert find_project_id(html) == PROJECT_ID

    def test_short_attribute_value_ignored(self):
        assert find_project_id('<div data-feedbucket="abc"></div>') is None

    def test_no_widget(self):
        assert find_project_id("<html><body>No widget here</body></html>") is None


class TestBuildSiteUrl:
    def test_adds_scheme_and_path(self):
        assert build_site_url("example.com") == "https://example.com/"

    def test_adds_secret(self):
        assert (
            build_site_url("https://example.com", "s3cr3t")
            == "https://example.com/?feedbucketKey=s3cr3t"
        )

    def test_keeps_existing_query(self):
        assert (
            build_site_url("https://example.com/page?lang=en", "s3cr3t")
            == "https://example.com/page?lang=en&feedbucketKey=s3cr3t"
        )


class TestSiteScraper(unittest.TestCase):
    def setUp(self):
        self.scraper = SiteScraper(timeout=5)
        self.scraper.session = Mock()

    def _page(self, html):
        response = Mock()
        response.text = html
        response.raise_for_status.return_value = None
        return response

    def test_discover(self):
        self.scraper.session.get.return_value = self._page(
            f'<div data-feedbucket="{PROJECT_ID}"></div>'
        )

        site = self.scraper.discover("example.com", "s3cr3t")

        self.scraper.session.get.assert_called_once_with(
            "https://example.com/?feedbucketKey=s3cr3t", timeout=5
        )
        self.assertEqual(site.project_id, PROJECT_ID)
        self.assertEqual(site.api_key, "s3cr3t")

    def test_discover_reads_secret_from_url(self):
        self.scraper.session.get.return_value = self._page(
            f'<div data-feedbucket="{PROJECT_ID}"></div>'
        )

        site = self.scraper.discover("https://example.com/?feedbucketKey=fromurl")

        self.assertEqual(site.api_key, "fromurl")

    def test_not_found(self):
        self.scraper.session.get.return_value = self._page("<html></html>")

        with self.assertRaises(ProjectIdNotFoundError):
            self.scraper.discover("example.com")

    def test_http_error_propagates(self):
        response = self._page("")
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        self.scraper.session.get.return_value = response

        with self.assertRaises(requests.exceptions.HTTPError):
            self.scraper.discover("example.com")
