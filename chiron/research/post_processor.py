"""
Research Post-Processor - turns extracted page text into a structured summary

The language model is asked for a bare JSON object. If what comes back can't
be parsed, a degraded result is built from the raw text instead; only
transport failures from the backend are allowed to escape.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from chiron.config import Config
from chiron.models.base import BaseLLM
from chiron.research.models import ProcessedResearch

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are a mental health research assistant. Extract key information from this content about: {query}

Content:
{content}

IMPORTANT: Respond with ONLY a valid JSON object, no markdown formatting, no explanation. Use this exact structure:

{{
    "summary": "Write a 2-3 sentence summary of the main points",
    "key_facts": ["Write 3-5 important facts as separate strings"],
    "relevant_sections": ["List 2-3 main topic areas covered"],
    "therapeutic_relevance": "Explain how this information helps with mental health treatment"
}}

JSON response:"""

FALLBACK_SUMMARY_CHARS = 300
FALLBACK_ERROR_CHARS = 100
PARSE_FAILED_FACT = "JSON parsing failed - showing raw content"
FALLBACK_RELEVANCE = "Content available but needs manual processing"


def build_prompt(content: str, query: str, max_content_chars: int = Config.MAX_CONTENT_CHARS) -> str:
    if len(content) > max_content_chars:
        content = content[:max_content_chars]
    return PROMPT_TEMPLATE.format(query=query, content=content)


def clean_response(response: str) -> str:
    """Strip surrounding whitespace and a markdown code fence, if any"""
    cleaned = response.strip()
    for prefix in ("```json", "```JSON", "```"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix):]
            break
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def fallback_research(cleaned_response: str, error: Exception) -> ProcessedResearch:
    """Degraded result used when the model's answer isn't the JSON we asked for"""
    error_fact = f"Error: {error}"[:FALLBACK_ERROR_CHARS]
    return ProcessedResearch(
        summary=cleaned_response[:FALLBACK_SUMMARY_CHARS] + "...",
        key_facts=[PARSE_FAILED_FACT, error_fact],
        relevant_sections=[],
        therapeutic_relevance=FALLBACK_RELEVANCE
    )


def parse_response(response: str) -> ProcessedResearch:
    """Parse a model answer, degrading instead of raising on bad JSON"""
    cleaned = clean_response(response)
    try:
        return ProcessedResearch.model_validate_json(cleaned)
    except (ValidationError, ValueError, TypeError) as e:
        logger.warning(f"JSON parsing failed: {str(e)[:200]}")
        logger.debug(f"Raw response: {response}")
        return fallback_research(cleaned, e)


class ResearchPostProcessor:
    """Sends extracted content to a generator and parses the structured answer"""

    def __init__(self, max_content_chars: int = Config.MAX_CONTENT_CHARS):
        self.max_content_chars = max_content_chars

    async def process(
        self,
        generator: BaseLLM,
        content: str,
        query: str,
        model_name: Optional[str] = None
    ) -> ProcessedResearch:
        """
        Summarize research content.

        Raises:
            GenerationError: the backend call itself failed
        """
        prompt = build_prompt(content, query, self.max_content_chars)
        logger.info(f"Analyzing content with {model_name or generator.model}...")
        response = await generator.generate(model_name, prompt)
        return parse_response(response)
