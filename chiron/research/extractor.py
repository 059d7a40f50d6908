"""
Content Extractor - downloads whitelisted pages and pulls out readable text

Fetching uses requests, parsing uses BeautifulSoup. Each known domain has an
ordered list of CSS selectors for its main content region; the first region
with substantial text wins, otherwise the whole <body> is used.
"""

import logging
import textwrap
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urljoin

import requests
from bs4 import BeautifulSoup

from chiron.config import Config
from chiron.errors import ExtractionError, FetchError, UrlNotWhitelistedError
from chiron.research.models import ResearchResult
from chiron.research.url_validator import UrlValidator

logger = logging.getLogger(__name__)

# (domain fragment, selectors) checked in order
DOMAIN_SELECTORS: List[Tuple[str, List[str]]] = [
    ("wikipedia.org", [
        "#mw-content-text",
        "#bodyContent",
        ".mw-parser-output",
    ]),
    ("psychologytoday.com", [
        ".entry-content",
        ".article-content",
        ".post-content",
        "main article",
        "article",
    ]),
]

DEFAULT_SELECTORS = [
    "main",
    "article",
    ".content",
    "#content",
    ".post-content",
    ".entry-content",
]

REDIRECT_STATUSES = (301, 302, 303, 307, 308)
MAX_REDIRECTS = 5

# Never part of readable content
STRIP_TAGS = ["script", "style", "noscript"]


def selectors_for(url: str) -> List[str]:
    """Content selectors to try for this URL, most specific first"""
    for fragment, selectors in DOMAIN_SELECTORS:
        if fragment in url:
            return selectors
    return DEFAULT_SELECTORS


def normalize_text(text: str) -> str:
    """Trim every line and drop the empty ones"""
    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def to_markdown(text: str, width: int = Config.MARKDOWN_WRAP_WIDTH) -> str:
    """Wrap each paragraph at a fixed width for model consumption"""
    paragraphs = []
    for line in text.splitlines():
        line = " ".join(line.split())
        if line:
            paragraphs.append(textwrap.fill(line, width=width))
    return "\n\n".join(paragraphs)


def wikipedia_article_url(topic: str) -> str:
    """Canonical article URL for a topic or title"""
    title = "_".join(topic.strip().split())
    if title:
        title = title[0].upper() + title[1:]
    return Config.WIKIPEDIA_BASE_URL + quote(title, safe="_()',-")


class ContentExtractor:
    """Fetch + extract pipeline for whitelisted research pages"""

    def __init__(
        self,
        url_validator: Optional[UrlValidator] = None,
        session: Optional[requests.Session] = None,
        timeout: float = Config.HTTP_TIMEOUT,
        user_agent: str = Config.USER_AGENT,
        min_content_length: int = Config.MIN_CONTENT_LENGTH,
        wrap_width: int = Config.MARKDOWN_WRAP_WIDTH
    ):
        self.url_validator = url_validator or UrlValidator()
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent
        self.min_content_length = min_content_length
        self.wrap_width = wrap_width

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent}

    def fetch(self, url: str) -> ResearchResult:
        """
        Download a whitelisted page and extract its readable content.

        Raises:
            UrlNotWhitelistedError: host, or a redirect target, not on the allow-list
            FetchError: network failure or non-2xx status
            ExtractionError: nothing readable on the page
        """
        if not self.url_validator.is_whitelisted(url):
            raise UrlNotWhitelistedError(url)

        domain = self.url_validator.get_domain(url) or "unknown"
        logger.info(f"Fetching content from {domain}...")

        html = self._get_whitelisted(url).text
        logger.info(f"Downloaded {len(html)} characters, extracting content...")

        content = self.extract_main_content(html, url)
        markdown = to_markdown(content, width=self.wrap_width)
        if not markdown.strip():
            raise ExtractionError(f"No content found at {url}")

        return ResearchResult(
            url=url,
            title=self.extract_title(html) or "Untitled",
            content=markdown,
            source_domain=domain
        )

    def _get_whitelisted(self, url: str) -> requests.Response:
        """
        GET with redirects followed by hand, re-checking every hop.

        Raises:
            UrlNotWhitelistedError: a redirect points off the allow-list
            FetchError: network failure, non-2xx status or a redirect loop
        """
        current = url
        for _ in range(MAX_REDIRECTS + 1):
            try:
                response = self.session.get(
                    current,
                    headers=self.headers,
                    timeout=self.timeout,
                    allow_redirects=False
                )
            except requests.exceptions.RequestException as e:
                logger.warning(f"Fetch failed for {current}: {e}")
                raise FetchError(f"Failed to fetch {current}: {e}") from e

            if response.status_code not in REDIRECT_STATUSES:
                try:
                    response.raise_for_status()
                except requests.exceptions.RequestException as e:
                    logger.warning(f"Fetch failed for {current}: {e}")
                    raise FetchError(f"Failed to fetch {current}: {e}") from e
                return response

            location = response.headers.get("Location")
            if not location:
                raise FetchError(f"Redirect from {current} has no Location header")
            target = urljoin(current, location)
            if not self.url_validator.is_whitelisted(target):
                logger.warning(f"Refusing redirect from {current} to {target}")
                raise UrlNotWhitelistedError(target)
            logger.debug(f"Following redirect {current} -> {target}")
            current = target

        raise FetchError(f"Too many redirects fetching {url}")

    def extract_main_content(self, html: str, url: str) -> str:
        """
        Pull the main content region out of an HTML document.

        Falls back to the <body> text, or to the whole document when the
        markup never opens a <body> tag.
        """
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(STRIP_TAGS):
            tag.decompose()

        for selector in selectors_for(url):
            element = soup.select_one(selector)
            if element is None:
                continue
            content = normalize_text(element.get_text(separator="\n"))
            if len(content) > self.min_content_length:
                logger.debug(f"Using content region '{selector}' ({len(content)} chars)")
                return content

        body = soup.body
        if body is None:
            logger.debug("No <body> element, falling back to the whole document")
            for tag in soup(["head", "title"]):
                tag.decompose()
            return normalize_text(soup.get_text(separator="\n"))
        logger.debug("No content region qualified, falling back to <body>")
        return normalize_text(body.get_text(separator="\n"))

    def extract_title(self, html: str) -> Optional[str]:
        """<title> text, else the first <h1>, else None"""
        soup = BeautifulSoup(html, "html.parser")

        if soup.title is not None:
            title = soup.title.get_text().strip()
            if title:
                return title

        h1 = soup.find("h1")
        if h1 is not None:
            title = h1.get_text().strip()
            if title:
                return title

        return None

    def search_wikipedia(self, topic: str) -> ResearchResult:
        """Fetch the canonical Wikipedia article for a topic"""
        return self.fetch(wikipedia_article_url(topic))

    def find_wikipedia_title(self, topic: str, limit: int = Config.WIKIPEDIA_SEARCH_LIMIT) -> Optional[str]:
        """
        Best-matching article title from the MediaWiki search API.

        Raises:
            FetchError: network failure, non-2xx status or unreadable payload
        """
        params = {
            "action": "query",
            "list": "search",
            "srsearch": topic,
            "srlimit": str(limit),
            "format": "json",
        }
        try:
            response = self.session.get(
                Config.WIKIPEDIA_API_URL,
                params=params,
                headers=self.headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Wikipedia search failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Wikipedia search returned invalid JSON: {e}") from e

        query = data.get("query", {}) if isinstance(data, dict) else None
        results = query.get("search", []) if isinstance(query, dict) else None
        if not isinstance(results, list):
            raise FetchError(f"Wikipedia search returned an unexpected payload for '{topic}'")
        titles = [
            item["title"] for item in results
            if isinstance(item, dict) and isinstance(item.get("title"), str) and item["title"]
        ]
        logger.info(f"Wikipedia search for '{topic}' returned {len(titles)} results")
        return titles[0] if titles else None

    def close(self) -> None:
        self.session.close()
