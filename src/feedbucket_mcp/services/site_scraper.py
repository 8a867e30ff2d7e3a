"""Discover the Feedbucket project id embedded in a website.

The widget is installed in several ways (data attribute, IIFE loader,
script query param), so discovery tries the embed patterns in turn.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

API_KEY_PARAM = "feedbucketKey"

# Project ids are 15-25 character alphanumeric strings
PROJECT_ID_PATTERNS = [
    # data-feedbucket="X", data-feedbucket":"X" and JSON-escaped variants
    re.compile(r"data-feedbucket\\?[\"']?\\?:\s*\\?[\"']?([a-zA-Z0-9]{15,25})\\?[\"']?"),
    # IIFE loader: ...feedbucket.js ... })('projectId')
    re.compile(
        r"feedbucket\.js[\s\S]{0,300}?\}\s*\)\s*\(\s*['\"]([a-zA-Z0-9]{15,25})['\"]\s*\)"
    ),
    # s.dataset.feedbucket=k ... ('projectId')
    re.compile(
        r"dataset\.feedbucket\s*=\s*k[\s\S]{0,100}?\(['\"]([a-zA-Z0-9]{15,25})['\"]\)"
    ),
    # feedbucket.js?id=projectId
    re.compile(r"feedbucket\.js\?.*?(?:id|project|key)=([a-zA-Z0-9]{15,25})"),
    # Any 20 character quoted id near "feedbucket"
    re.compile(r"feedbucket[\s\S]{0,150}?[\"']([a-zA-Z0-9]{20})[\"']"),
]

VALID_PROJECT_ID = re.compile(r"^[a-zA-Z0-9]{15,25}$")


class ProjectIdNotFoundError(Exception):
    """The page does not embed a project id, usually because it is loaded dynamically."""

    pass


@dataclass
class SiteProject:
    """Project id discovered on a website."""

    project_id: str
    api_key: str | None
    source_url: str


def build_site_url(website_url: str, secret: str | None = None) -> str:
    """Normalize a website URL and attach the ``feedbucketKey`` secret."""
    url = website_url.strip()
    if not urlparse(url).scheme:
        url = f"https://{url}"

    parsed = urlparse(url)
    if not parsed.path:
        parsed = parsed._replace(path="/")
    if secret:
        query = parse_qs(parsed.query)
        query[API_KEY_PARAM] = [secret]
        parsed = parsed._replace(query=urlencode(query, doseq=True))
    return urlunparse(parsed)


def find_project_id(html: str) -> str | None:
    """Return the first project id found in ``html``, or None."""
    soup = BeautifulSoup(html, "html.parser")
    tag = soup.find(attrs={"data-feedbucket": True})
    if tag is not None:
        candidate = str(tag.get("data-feedbucket", "")).strip()
        if VALID_PROJECT_ID.match(candidate):
            return candidate

    for pattern in PROJECT_ID_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


class SiteScraper:
    """Fetches a website and extracts its Feedbucket project id."""

    def __init__(self, timeout: float = 15):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
            "Accept": "text/html,application/xhtml+xml",
        })

    def discover(self, website_url: str, secret: str | None = None) -> SiteProject:
        """
        Fetch the website and find the embedded project id.

        Args:
            website_url: Website with the Feedbucket widget installed
            secret: Optional query-string secret for protected projects

        Raises:
            requests.exceptions.RequestException: If the page cannot be fetched
            ProjectIdNotFoundError: If no embed pattern matches
        """
        url = build_site_url(website_url, secret)
        logger.info(f"Fetching {website_url}")

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()

        project_id = find_project_id(response.text)
        if not project_id:
            raise ProjectIdNotFoundError(
                f"No Feedbucket project id found in {website_url}"
            )

        api_key = secret or parse_qs(urlparse(url).query).get(API_KEY_PARAM, [None])[0]
        logger.info(f"Found project ID {project_id} in page HTML")
        return SiteProject(project_id=project_id, api_key=api_key, source_url=url)
