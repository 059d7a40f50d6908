"""
Unit tests for research intent detection.
"""

import pytest

from chiron.research.intent import (
    DirectUrl,
    ExplicitResearch,
    IntentClassifier,
    NoIntent,
    SuggestedResearch,
    extract_question_topic,
    extract_research_topic,
)


@pytest.fixture
def classifier() -> IntentClassifier:
    return IntentClassifier()


class TestUrlDetection:
    """URLs always win and are returned verbatim."""

    def test_bare_url(self, classifier: IntentClassifier) -> None:
        intent = classifier.detect_intent("Can you read https://en.wikipedia.org/wiki/Depression")
        assert intent == DirectUrl("https://en.wikipedia.org/wiki/Depression")

    def test_markdown_link_yields_inner_url(self, classifier: IntentClassifier) -> None:
        intent = classifier.detect_intent("Check out [this article](https://www.psychologytoday.com/anxiety)")
        assert intent == DirectUrl("https://www.psychologytoday.com/anxiety")

    def test_url_beats_research_keyword(self, classifier: IntentClassifier) -> None:
        intent = classifier.detect_intent("Please research http://example.com/page for me")
        assert intent == DirectUrl("http://example.com/page")

    def test_url_case_is_preserved(self, classifier: IntentClassifier) -> None:
        intent = classifier.detect_intent("see https://en.wikipedia.org/wiki/Major_Depressive_Disorder")
        assert intent.url == "https://en.wikipedia.org/wiki/Major_Depressive_Disorder"

    def test_extract_url_none_without_scheme(self, classifier: IntentClassifier) -> None:
        assert classifier.extract_url("visit en.wikipedia.org sometime") is None


class TestExplicitResearch:
    """Trigger phrases produce an auto-executed research request."""

    def test_research_keyword(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("research depression") == ExplicitResearch(("depression",))

    def test_leading_article_is_stripped(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("Tell me about the amygdala") == ExplicitResearch(("amygdala",))

    def test_session_phrase_removed_whole(self, classifier: IntentClassifier) -> None:
        intent = classifier.detect_intent("Can we research cognitive behavioral therapy")
        assert intent == ExplicitResearch(("cognitive behavioral therapy",))

    def test_trailing_question_mark_dropped(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("What is anxiety?") == ExplicitResearch(("anxiety",))

    def test_short_topic_falls_back(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("research") == ExplicitResearch(("general topic",))
        assert classifier.detect_intent("explain it") == ExplicitResearch(("general topic",))

    def test_extract_research_topic_uses_first_matching_phrase(self) -> None:
        assert extract_research_topic("look up the stress response") == "stress response"


class TestSuggestedResearch:
    """Bare questions only suggest research."""

    def test_what_are(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("What are panic attacks?") == SuggestedResearch(("panic attacks",))

    def test_how_does_work(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("How does mindfulness work?") == SuggestedResearch(("mindfulness",))

    def test_question_without_template_is_no_intent(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("Why do I feel this way?") == NoIntent()
        assert classifier.detect_intent("How are you?") == NoIntent()

    def test_extract_question_topic(self) -> None:
        assert extract_question_topic("what are the symptoms?") == "symptoms"
        assert extract_question_topic("how do we?") == ""


class TestNoIntent:

    def test_small_talk(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("I had a good day today") == NoIntent()

    def test_empty(self, classifier: IntentClassifier) -> None:
        assert classifier.detect_intent("") == NoIntent()


def test_classification_is_idempotent(classifier: IntentClassifier) -> None:
    for text in ["research depression", "What are panic attacks?", "hello", "https://en.wikipedia.org/wiki/X"]:
        assert classifier.detect_intent(text) == classifier.detect_intent(text)


def test_variant_kinds() -> None:
    assert DirectUrl("u").kind == "direct_url"
    assert ExplicitResearch(("t",)).kind == "explicit_research"
    assert SuggestedResearch(("t",)).kind == "suggested_research"
    assert NoIntent().kind == "none"
