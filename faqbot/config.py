"""Configuration module for FaqBot"""

import os
from pathlib import Path

# Base directories
BASE_DIR = Path(os.environ.get("FAQBOT_HOME", Path.home() / ".faqbot"))
DATA_DIR = BASE_DIR / "data"
KNOWLEDGE_BASE_FILE = DATA_DIR / "knowledge_base.json"

# Knowledge store format
KNOWLEDGE_FORMAT_VERSION = 1

# Matching settings
HIGH_CONFIDENCE = 0.55  # tuned for short FAQs, can be lowered with more data
MEDIUM_CONFIDENCE = 0.30

# Common English function words dropped before vectorizing
STOPWORDS = frozenset({
    "a", "an", "the", "is", "are", "was", "were", "am", "i", "you", "he", "she", "it",
    "and", "or", "of", "to", "in", "on", "for", "with", "that", "this", "these", "those",
    "what", "how", "why", "when", "which", "do", "does", "did", "please", "me",
})

# CLI settings
CLI_PROMPT = "You"
CLI_ASSISTANT = "FaqBot"
CLI_WIDTH = 62
THINKING_DELAY = 0.3  # seconds, simulated thinking before each reply
TYPEWRITER_DELAY = 0.013
