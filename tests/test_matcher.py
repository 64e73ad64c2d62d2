"""Tests for the matching engine and its confidence tiers."""

import logging
import math

import pytest

from faqbot import matcher
from faqbot.knowledge import KnowledgeBase
from faqbot.matcher import ChatbotCore, Match, MatchThresholds
from faqbot.nlp import Tokenizer
from faqbot.rules import RESPONSES, Rule


def test_high_confidence_returns_stored_answer(name_bot):
    expected = 2 / math.sqrt(6)  # {s, your, name} against {your, name}
    best = name_bot.best_match("what's your name?")
    assert best.index == 0
    assert best.score == pytest.approx(expected)
    assert best.score >= 0.55

    reply = name_bot.respond("what's your name?")
    assert reply.startswith("I am JavaBot - a demo chatbot.")
    assert reply == f"I am JavaBot - a demo chatbot. (confidence: {expected:.2f})"
    assert reply.endswith("(confidence: 0.82)")


def test_medium_confidence_suggests_candidate():
    kb = KnowledgeBase()
    kb.add("how can i save knowledge", "Use the save command.")
    bot = ChatbotCore(kb)

    reply = bot.respond("save my files")  # 1/3 overlap
    assert reply.startswith('I think you might mean: "how can i save knowledge"')
    assert "Answer: Use the save command." in reply
    assert "teach me" in reply
    assert reply.endswith("(conf: 0.33)")


def test_low_score_falls_back(bot):
    assert bot.respond("weather tomorrow") == RESPONSES["fallback"]


def test_teach_intent_after_failed_match(bot):
    assert bot.respond("please create an faq entry") == RESPONSES["teach"]
    assert bot.respond("Teach you something new") == RESPONSES["teach"]


def test_strong_match_wins_over_teach_intent():
    kb = KnowledgeBase()
    kb.add("teach faq", "Use train.")
    bot = ChatbotCore(kb)
    assert bot.respond("teach faq").startswith("Use train.")


@pytest.mark.parametrize("message", ["", "   \t\n", None, 17])
def test_empty_input_prompts_without_scoring(bot, monkeypatch, message):
    def boom(*_):
        raise AssertionError("should not vectorize")

    monkeypatch.setattr(matcher, "vectorize", boom)
    assert bot.respond(message) == RESPONSES["empty"]


def test_greeting_short_circuits_scoring():
    kb = KnowledgeBase()
    kb.add("hello", "Stored hello answer")
    bot = ChatbotCore(kb)
    assert bot.respond("hello") == RESPONSES["greet"]
    assert bot.respond("HELLO!") == RESPONSES["greet"]


def test_thanks_and_help_rules(bot):
    assert bot.respond("Thank you!") == RESPONSES["thanks"]
    assert bot.respond("I need some help") == RESPONSES["help"]


def test_ties_keep_earliest_index():
    kb = KnowledgeBase()
    kb.add("reset password", "first")
    kb.add("reset password", "second")
    bot = ChatbotCore(kb)
    assert bot.best_match("reset password").index == 0
    assert bot.respond("reset password") == "first (confidence: 1.00)"


def test_empty_knowledge_base_has_no_candidates():
    bot = ChatbotCore(KnowledgeBase())
    assert bot.best_match("anything at all") == Match(-1, 0.0)
    assert bot.respond("anything at all") == RESPONSES["fallback"]


def test_cache_tracks_knowledge_base_through_additions():
    kb = KnowledgeBase()
    bot = ChatbotCore(kb)
    assert len(bot.cache) == 0
    for i in range(5):
        kb.add(f"question number {i}", f"answer {i}")
        bot.rebuild_cache()
        assert len(bot.cache) == len(kb.all())


def test_rebuild_is_idempotent(bot):
    first = bot.cache
    bot.rebuild_cache()
    assert bot.cache == first
    assert bot.is_fresh


def test_stale_cache_answers_from_last_snapshot(bot, kb):
    kb.add("what is the weather", "Sunny.")
    assert not bot.is_fresh
    assert len(bot.cache) == 4
    assert bot.respond("weather?") == RESPONSES["fallback"]

    bot.rebuild_cache()
    assert bot.is_fresh
    assert bot.respond("weather?") == "Sunny. (confidence: 1.00)"


def test_teach_rebuilds(bot):
    bot.teach("where do you live", "In your terminal.")
    assert bot.is_fresh
    assert len(bot.cache) == 5
    assert bot.respond("where do you live?").startswith("In your terminal.")


def test_teach_rejects_blank(bot):
    with pytest.raises(ValueError):
        bot.teach("", "answer")
    assert len(bot.cache) == 4


def test_set_knowledge_base_rebuilds(bot):
    other = KnowledgeBase()
    other.add("favourite colour", "Blue.")
    bot.set_knowledge_base(other)
    assert bot.kb is other
    assert len(bot.cache) == 1
    assert bot.is_fresh
    assert bot.respond("favourite colour").startswith("Blue.")


def test_custom_thresholds(name_bot):
    strict = ChatbotCore(name_bot.kb, thresholds=MatchThresholds(high=0.9, medium=0.5))
    assert strict.respond("what's your name?").startswith("I think you might mean:")

    stricter = ChatbotCore(name_bot.kb, thresholds=MatchThresholds(high=0.95, medium=0.9))
    assert stricter.respond("what's your name?") == RESPONSES["fallback"]


@pytest.mark.parametrize("high,medium", [(0.2, 0.5), (1.5, 0.3), (0.5, -0.1)])
def test_invalid_thresholds(high, medium):
    with pytest.raises(ValueError):
        MatchThresholds(high=high, medium=medium)


def test_default_thresholds():
    t = MatchThresholds()
    assert (t.high, t.medium) == (0.55, 0.30)


def test_custom_tokenizer_changes_matching():
    kb = KnowledgeBase()
    kb.add("what is your name", "Named.")
    bot = ChatbotCore(kb, tokenizer=Tokenizer(stopwords={"your"}))
    # only "what", "is", "name" remain on both sides
    assert bot.respond("what is name") == "Named. (confidence: 1.00)"


def test_custom_rule_tables(bot):
    rules = [Rule("ping", lambda t: t == "ping", "pong")]
    custom = ChatbotCore(bot.kb, pre_rules=rules, post_rules=[])
    assert custom.respond("PING") == "pong"
    assert custom.respond("hello") == RESPONSES["fallback"]
    assert custom.respond("teach me") == RESPONSES["fallback"]


@pytest.mark.parametrize("message,tier", [
    ("what's your name?", "high confidence"),
    ("your favourite", "medium confidence"),
    ("weather tomorrow", "No rule matched"),
])
def test_chosen_tier_is_logged(name_bot, caplog, message, tier):
    with caplog.at_level(logging.DEBUG, logger="faqbot.matcher"):
        name_bot.respond(message)
    assert tier in caplog.text
