"""
Research Agent - fetches evidence-based information from whitelisted sources.

This agent:
1. Classifies the user's research intent (URL, explicit request, question)
2. Re-validates URLs against the domain whitelist
3. Fetches and extracts the page content (Wikipedia, Psychology Today)
4. Has the language model summarize it into structured research
"""

import asyncio
import time
from typing import Dict, List, Optional

from chiron.agents.base_agent import AgentConfig, AgentRequest, AgentResponse, BaseAgent, Capability
from chiron.config import Config
from chiron.errors import ExtractionError, FetchError, GenerationError, UrlNotWhitelistedError
from chiron.models.base import BaseLLM
from chiron.research.extractor import ContentExtractor, wikipedia_article_url
from chiron.research.intent import (
    DirectUrl,
    ExplicitResearch,
    IntentClassifier,
    ResearchIntent,
    SuggestedResearch,
)
from chiron.research.models import ProcessedResearch, ResearchResult
from chiron.research.post_processor import ResearchPostProcessor
from chiron.research.url_validator import UrlValidator

NOT_WHITELISTED_MESSAGE = "❌ URL not whitelisted. Only Wikipedia and Psychology Today are supported."
NO_RESEARCH_MESSAGE = "I don't see any research requests in your message."


def format_research(heading: str, result: ResearchResult, processed: ProcessedResearch) -> str:
    """Markdown block shown to the user for one piece of research"""
    key_facts = "\n".join(f"• {fact}" for fact in processed.key_facts)
    return (
        f"📚 **{heading}**\n\n"
        f"**{result.title}**\n\n"
        f"{processed.summary}\n\n"
        f"**Key Facts:**\n{key_facts}\n\n"
        f"**Therapeutic Relevance:** {processed.therapeutic_relevance}\n\n"
        f"*Source: {result.url}*"
    )


class ResearchAgent(BaseAgent):
    """Agent that researches mental health topics on whitelisted sites."""

    def __init__(
        self,
        generator: Optional[BaseLLM] = None,
        config: Optional[Dict] = None,
        classifier: Optional[IntentClassifier] = None,
        url_validator: Optional[UrlValidator] = None,
        extractor: Optional[ContentExtractor] = None,
        post_processor: Optional[ResearchPostProcessor] = None
    ):
        """
        Initialize Research Agent.

        Args:
            generator: Text generator used when the request context has none
            config: Configuration dictionary with:
                - use_search_api: bool, resolve topics through the MediaWiki
                  search API instead of guessing the article URL
            classifier, url_validator, extractor, post_processor: pipeline
                stages, defaults are built when omitted
        """
        super().__init__(agent_name="research", config=config)

        self.generator = generator
        self.classifier = classifier or IntentClassifier()
        self.url_validator = url_validator or UrlValidator()
        self.extractor = extractor or ContentExtractor(url_validator=self.url_validator)
        self.post_processor = post_processor or ResearchPostProcessor()

        self.use_search_api = self.config.get("use_search_api", Config.WIKIPEDIA_USE_SEARCH_API)
        self.confidences = AgentConfig.get_research_confidences()

        self.logger.info(f"Research Agent initialized with use_search_api={self.use_search_api}")

    def analyze_intent(self, text: str) -> ResearchIntent:
        return self.classifier.detect_intent(text)

    async def capabilities(self) -> List[Capability]:
        return [
            Capability(
                name="url_research",
                description="Fetch and analyze content from whitelisted URLs",
                input_types=["url", "text_with_url"],
                output_types=["research_result", "processed_research"]
            ),
            Capability(
                name="wikipedia_search",
                description="Search Wikipedia for mental health topics",
                input_types=["mental_health_query"],
                output_types=["research_result"]
            ),
            Capability(
                name="intent_detection",
                description="Detect research intent in user messages",
                input_types=["text"],
                output_types=["research_intent"]
            ),
        ]

    def _confidence_for(self, intent: ResearchIntent) -> float:
        return self.confidences.get(intent.kind, AgentConfig.NO_INTENT_CONFIDENCE)

    async def can_handle(self, request: AgentRequest) -> float:
        return self._confidence_for(self.analyze_intent(request.input))

    async def execute(self, request: AgentRequest) -> AgentResponse:
        """
        Run the research pipeline for the request.

        Intent is classified again here rather than reused from can_handle.

        Raises:
            GenerationError: the language model could not be reached
        """
        self._log_processing(request.input)
        start_time = time.perf_counter()
        intent = self.analyze_intent(request.input)

        if isinstance(intent, DirectUrl):
            response = await self._research_url(intent.url, request, start_time)
        elif isinstance(intent, ExplicitResearch):
            topic = intent.terms[0] if intent.terms else AgentConfig.DEFAULT_RESEARCH_TOPIC
            response = await self._research_topic(topic, request, start_time)
        elif isinstance(intent, SuggestedResearch):
            topic = intent.terms[0] if intent.terms else AgentConfig.DEFAULT_RESEARCH_TOPIC
            response = self._create_response(
                content=(
                    f"🔍 I noticed you mentioned '{topic}'. Would you like me to research "
                    f"this topic for you? I can search Wikipedia for evidence-based information."
                ),
                confidence=self._confidence_for(intent),
                processing_time_ms=self._elapsed_ms(start_time)
            )
        else:
            response = self._error_response(NO_RESEARCH_MESSAGE, self._elapsed_ms(start_time))

        self._log_success(
            f"Research turn complete: intent={intent.kind}, "
            f"confidence={response.metadata.confidence:.2f}"
        )
        return response

    async def _research_url(self, url: str, request: AgentRequest, start_time: float) -> AgentResponse:
        if not self.url_validator.is_whitelisted(url):
            self.logger.warning(f"Refusing non-whitelisted URL: {url}")
            return self._error_response(NOT_WHITELISTED_MESSAGE, self._elapsed_ms(start_time))

        result = await self._fetch(url, start_time)
        if isinstance(result, AgentResponse):
            return result

        processed = await self._summarize(result, request.input, request)
        return self._research_response(
            format_research(f"Research from {result.source_domain}", result, processed),
            result,
            start_time
        )

    async def _research_topic(self, topic: str, request: AgentRequest, start_time: float) -> AgentResponse:
        self.logger.info(f"Searching Wikipedia for '{topic}'...")

        if self.use_search_api:
            try:
                title = await asyncio.to_thread(self.extractor.find_wikipedia_title, topic)
            except FetchError as e:
                return self._error_response(f"❌ Wikipedia search failed: {e}", self._elapsed_ms(start_time))
            if title is None:
                return self._error_response(
                    f"❌ No Wikipedia articles found for '{topic}'",
                    self._elapsed_ms(start_time)
                )
            url = wikipedia_article_url(title)
        else:
            url = wikipedia_article_url(topic)

        result = await self._fetch(url, start_time)
        if isinstance(result, AgentResponse):
            return result

        processed = await self._summarize(result, topic, request)
        return self._research_response(
            format_research(f"Research: {topic}", result, processed),
            result,
            start_time
        )

    async def _fetch(self, url: str, start_time: float):
        """ResearchResult on success, otherwise a ready-made error response"""
        try:
            return await asyncio.to_thread(self.extractor.fetch, url)
        except UrlNotWhitelistedError:
            return self._error_response(NOT_WHITELISTED_MESSAGE, self._elapsed_ms(start_time))
        except FetchError as e:
            self._log_error(e)
            return self._error_response(f"❌ Research failed: {e}", self._elapsed_ms(start_time))
        except ExtractionError as e:
            self.logger.warning(str(e))
            return self._error_response(f"❌ No content found at {url}", self._elapsed_ms(start_time))

    async def _summarize(self, result: ResearchResult, query: str, request: AgentRequest) -> ProcessedResearch:
        generator = request.context.generator or self.generator
        if generator is None:
            raise GenerationError("No text generator configured for research processing")
        return await self.post_processor.process(
            generator,
            result.content,
            query,
            model_name=request.context.model_name or None
        )

    def _research_response(self, content: str, result: ResearchResult, start_time: float) -> AgentResponse:
        return self._create_response(
            content=content,
            confidence=AgentConfig.RESEARCH_RESULT_CONFIDENCE,
            processing_time_ms=self._elapsed_ms(start_time),
            sources=[result.url],
            content_type="markdown",
            resources_used=[result.url]
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)

    async def cleanup(self) -> None:
        self.extractor.close()
