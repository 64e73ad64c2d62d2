import pytest

from faqbot import config
from faqbot.knowledge import KnowledgeBase, seed_default
from faqbot.matcher import ChatbotCore


@pytest.fixture
def kb():
    """Seeded knowledge base with the four starter pairs."""
    return seed_default(KnowledgeBase())


@pytest.fixture
def bot(kb):
    return ChatbotCore(kb)


@pytest.fixture
def name_bot():
    kb = KnowledgeBase()
    kb.add("what is your name", "I am JavaBot - a demo chatbot.")
    return ChatbotCore(kb)


@pytest.fixture
def no_delays(monkeypatch):
    """Disable the CLI typewriter and thinking pauses."""
    monkeypatch.setattr(config, "TYPEWRITER_DELAY", 0)
    monkeypatch.setattr(config, "THINKING_DELAY", 0)
