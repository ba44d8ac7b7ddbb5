"""
Article retrieval from the Wiktionary API.

Fetches the current wikitext of a page through the MediaWiki action API
(formatversion=2, so pages and revisions come back as plain lists).
"""

import logging
from typing import Optional, Protocol

import requests

logger = logging.getLogger(__name__)

# MediaWiki action API endpoint
WIKTIONARY_API_URL = "https://en.wiktionary.org/w/api.php"

# User agent for requests (Wikimedia requires a descriptive user agent)
USER_AGENT = "wiktioparse/0.1 (https://github.com/wiktioparse/wiktioparse)"

# Seconds before a request is abandoned
REQUEST_TIMEOUT = 30


class Fetcher(Protocol):
    def fetch(self, title: str) -> Optional[list[str]]:
        """Return the article's wikitext lines, or None if unavailable."""
        ...


def extract_content(payload: dict) -> Optional[str]:
    """Pull the revision text out of a formatversion=2 query response."""
    try:
        page = payload["query"]["pages"][0]
        if page.get("missing") or page.get("invalid"):
            return None
        return page["revisions"][0]["content"]
    except (KeyError, IndexError, TypeError):
        return None


class WiktionaryClient:
    """Fetcher for a live MediaWiki site."""

    def __init__(
        self,
        api_url: str = WIKTIONARY_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
        self.session = session

    def fetch(self, title: str) -> Optional[list[str]]:
        params = {
            "action": "query",
            "prop": "revisions",
            "rvprop": "content",
            "format": "json",
            "formatversion": "2",
            "titles": title,
        }
        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Request for {title!r} failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Malformed response for {title!r}: {e}")
            return None

        content = extract_content(payload)
        if content is None:
            logger.warning(f"No article content for {title!r}")
            return None

        logger.debug(f"Fetched {title!r} ({len(content):,} chars)")
        return content.split("\n")
