"""FaqBot - a small, deterministic FAQ chatbot"""

__version__ = "0.1.0"
__author__ = "FaqBot contributors"
__powered_by__ = "bag-of-words cosine matching"

from .knowledge import KnowledgeBase, KnowledgeStoreError, QAPair
from .matcher import ChatbotCore, Match, MatchThresholds

__all__ = [
    "ChatbotCore",
    "KnowledgeBase",
    "KnowledgeStoreError",
    "Match",
    "MatchThresholds",
    "QAPair",
]
