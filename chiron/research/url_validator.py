"""
URL whitelist validation

The only thing standing between the research agent and arbitrary internet
content. The host is read with urllib3's parser, the same one requests uses
when it connects, and matching is exact on that host name.
"""

import logging
from typing import Iterable, Optional

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from chiron.config import Config

logger = logging.getLogger(__name__)


class UrlValidator:
    """Exact-host allow-list check"""

    def __init__(self, whitelisted_domains: Optional[Iterable[str]] = None):
        domains = whitelisted_domains if whitelisted_domains is not None else Config.WHITELISTED_DOMAINS
        self.whitelisted_domains = frozenset(d.lower() for d in domains)

    def get_domain(self, url: str) -> Optional[str]:
        """
        Host name of the URL, or None if it cannot be parsed.

        URLs with a backslash or userinfo are treated as unparseable: parsers
        disagree on where their host ends.
        """
        if not isinstance(url, str) or "\\" in url:
            return None
        try:
            parts = parse_url(url)
        except (LocationParseError, ValueError):
            return None
        if not parts.scheme or not parts.host or parts.auth is not None:
            return None
        return parts.host.lower()

    def is_whitelisted(self, url: str) -> bool:
        """True only if the URL parses and its host is on the allow-list"""
        domain = self.get_domain(url)
        if domain is None:
            logger.debug(f"Rejected unparseable URL: {url!r}")
            return False
        allowed = domain in self.whitelisted_domains
        if not allowed:
            logger.info(f"Rejected non-whitelisted domain: {domain}")
        return allowed
