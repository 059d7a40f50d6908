"""
Research retrieval pipeline

intent detection -> URL whitelisting -> fetch/extract -> LLM post-processing
"""

from .intent import (
    IntentClassifier,
    ResearchIntent,
    DirectUrl,
    ExplicitResearch,
    SuggestedResearch,
    NoIntent,
)
from .url_validator import UrlValidator
from .extractor import ContentExtractor
from .post_processor import ResearchPostProcessor
from .models import ResearchResult, ProcessedResearch

__all__ = [
    "IntentClassifier",
    "ResearchIntent",
    "DirectUrl",
    "ExplicitResearch",
    "SuggestedResearch",
    "NoIntent",
    "UrlValidator",
    "ContentExtractor",
    "ResearchPostProcessor",
    "ResearchResult",
    "ProcessedResearch",
]
