"""
Crisis keyword detection
"""
import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

CRISIS_KEYWORDS = ["suicide", "kill myself", "hurt myself", "end it all"]

CRISIS_RESOURCES = (
    "• National Suicide Prevention Lifeline: 988\n"
    "• Crisis Text Line: Text HOME to 741741\n"
    "• Emergency Services: 911"
)


class CrisisDetector:
    """Case-insensitive keyword match against known crisis phrases"""

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        self.keywords = [k.lower() for k in (keywords or CRISIS_KEYWORDS)]

    def matched_keywords(self, text: str) -> List[str]:
        text_lower = text.lower()
        return [k for k in self.keywords if k in text_lower]

    def detect_crisis(self, text: str) -> bool:
        matches = self.matched_keywords(text)
        if matches:
            # Keyword names only; never log the message itself
            logger.warning(f"Crisis indicators detected: {matches}")
        return bool(matches)
