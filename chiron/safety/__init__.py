"""Safety checks applied around the agent layer."""
from .crisis_detection import CrisisDetector
from .filters import SafetyFilters

__all__ = ["CrisisDetector", "SafetyFilters"]
