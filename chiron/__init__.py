"""
Chiron - Mental Health Conversational Assistant

Agent coordination layer plus a research agent that pulls evidence-based
information from whitelisted sources (Wikipedia, Psychology Today) and
summarizes it with a local or hosted language model.
"""

__version__ = "0.1.0"
