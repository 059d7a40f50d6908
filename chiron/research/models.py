"""
Data models for research retrieval
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResearchResult(BaseModel):
    """Readable content extracted from one fetched page"""
    url: str
    title: str
    content: str
    source_domain: str
    extracted_at: datetime = Field(default_factory=_utc_now)


class ProcessedResearch(BaseModel):
    """Structured summary produced by the language model"""
    summary: str
    key_facts: List[str]
    relevant_sections: List[str]
    therapeutic_relevance: str
