"""
Error types shared across Chiron.

Agents convert most of these into user-visible content; GenerationError is
the one that is allowed to abort a conversational turn.
"""


class ChironError(Exception):
    """Base class for all Chiron errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class GenerationError(ChironError):
    """Raised when the text-generation backend cannot be reached or answers badly."""


class FetchError(ChironError):
    """Raised when a research page cannot be downloaded (network error, non-2xx status)."""


class UrlNotWhitelistedError(ChironError):
    """Raised when a fetch targets a domain outside the allow-list."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"URL not whitelisted: {url}")


class ExtractionError(ChironError):
    """Raised when no readable content can be extracted from a page."""
