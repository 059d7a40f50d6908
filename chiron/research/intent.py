"""
Research intent detection

Fast, pattern-based classification of user text into one of four research
intents. Classification is a pure function of the input and the fixed tables
below; nothing here touches the network.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple


@dataclass(frozen=True)
class ResearchIntent:
    """Base class for the research intent variants"""
    kind = "none"


@dataclass(frozen=True)
class DirectUrl(ResearchIntent):
    """A URL was given - research it automatically"""
    url: str
    kind = "direct_url"


@dataclass(frozen=True)
class ExplicitResearch(ResearchIntent):
    """The user asked for research - run it automatically"""
    terms: Tuple[str, ...]
    kind = "explicit_research"


@dataclass(frozen=True)
class SuggestedResearch(ResearchIntent):
    """A bare question - offer research, don't fetch"""
    terms: Tuple[str, ...]
    kind = "suggested_research"


@dataclass(frozen=True)
class NoIntent(ResearchIntent):
    """Nothing to research"""
    kind = "none"


# Raw URLs first, then markdown links. Group 1, when present, is the URL.
URL_PATTERNS: List[Pattern] = [
    re.compile(r"https?://[^\s)]+"),
    re.compile(r"\[.*?\]\((https?://[^\s)]+)\)"),
]

# Checked in order; the first phrase contained in the input is the one removed.
# Compound phrases come before the bare "research" they contain.
RESEARCH_KEYWORDS: Tuple[str, ...] = (
    "can we research",
    "let's research",
    "research further",
    "research this",
    "research",
    "tell me about",
    "what is",
    "explain",
    "look up",
    "find information",
    "search for",
    "more about",
    "definition of",
)

QUESTION_PREFIXES: Tuple[str, ...] = ("what", "how", "why")

FALLBACK_TOPIC = "general topic"
MIN_TOPIC_LENGTH = 3


def _strip_leading_article(text: str) -> str:
    text = text.strip()
    while text.startswith("the "):
        text = text[len("the "):]
    return text.strip()


def _first_group(match: "re.Match") -> str:
    return match.group(1)


# (pattern, extractor) pairs, first match with a usable topic wins
QUESTION_TEMPLATES: List[Tuple[Pattern, Callable[["re.Match"], str]]] = [
    (re.compile(r"what is (.+?)(?:\?|$)"), _first_group),
    (re.compile(r"what are (.+?)(?:\?|$)"), _first_group),
    (re.compile(r"how does (.+?) work(?:\?|$)"), _first_group),
    (re.compile(r"how do (.+?) work(?:\?|$)"), _first_group),
    (re.compile(r"tell me about (.+?)(?:\?|$)"), _first_group),
    (re.compile(r"explain (.+?)(?:\?|$)"), _first_group),
]


def extract_research_topic(text_lower: str, keywords: Tuple[str, ...] = RESEARCH_KEYWORDS) -> str:
    """
    Remove the first matching research phrase and return what is left.

    Trailing sentence punctuation is dropped so the topic can be turned into
    an article title. Topics shorter than three characters become
    "general topic".
    """
    topic = text_lower
    for keyword in keywords:
        if keyword in text_lower:
            topic = text_lower.replace(keyword, "")
            break

    topic = _strip_leading_article(topic).rstrip("?!.").strip()
    topic = " ".join(topic.split())

    if len(topic) < MIN_TOPIC_LENGTH:
        topic = FALLBACK_TOPIC
    return topic


def extract_question_topic(text_lower: str) -> str:
    """Topic of a question ("what are X", "how does X work", ...), or "" if none"""
    for pattern, extractor in QUESTION_TEMPLATES:
        match = pattern.search(text_lower)
        if not match:
            continue
        cleaned = _strip_leading_article(extractor(match))
        if cleaned and len(cleaned) > 2:
            return cleaned
    return ""


class IntentClassifier:
    """Classifies free text into a ResearchIntent"""

    def __init__(
        self,
        url_patterns: Optional[List[Pattern]] = None,
        research_keywords: Optional[Tuple[str, ...]] = None
    ):
        self.url_patterns = url_patterns or URL_PATTERNS
        self.research_keywords = tuple(k.lower() for k in (research_keywords or RESEARCH_KEYWORDS))

    def extract_url(self, text: str) -> Optional[str]:
        """First URL in the text; for markdown links, the inner URL"""
        for pattern in self.url_patterns:
            match = pattern.search(text)
            if match:
                if match.re.groups >= 1:
                    return match.group(1)
                return match.group(0)
        return None

    def detect_intent(self, text: str) -> ResearchIntent:
        """
        Classify the text.

        Priority: URL > explicit research phrase > question pattern > nothing.
        """
        text_lower = text.lower()

        url = self.extract_url(text)
        if url:
            return DirectUrl(url)

        if any(keyword in text_lower for keyword in self.research_keywords):
            topic = extract_research_topic(text_lower, self.research_keywords)
            return ExplicitResearch((topic,))

        if text_lower.startswith(QUESTION_PREFIXES) or "?" in text_lower:
            topic = extract_question_topic(text_lower)
            if topic:
                return SuggestedResearch((topic,))

        return NoIntent()
