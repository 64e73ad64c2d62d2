"""Phrase rules checked around similarity matching"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

# Fixed replies
RESPONSES = {
    "empty": "Say something, I'm listening!",
    "greet": "Hello! How can I help you today?",
    "thanks": "You're welcome! Anything else I can help with?",
    "help": "I can answer FAQs, take new Q/A pairs, or save/load my memory. Try asking a question.",
    "teach": (
        "You can train me using the 'train' command. "
        "Provide a question and answer to add to my knowledge base."
    ),
    "fallback": (
        "I'm not sure I understand. You can rephrase, "
        "or teach me the correct response with the 'train' command."
    ),
}

_GREET_RE = re.compile(r"\b(hi|hello|hey)\b")
_THANKS_RE = re.compile(r"\b(thanks|thank you|thx)\b")
_HELP_RE = re.compile(r"\b(help|support|assist)\b")
_TEACH_RE = re.compile(r"\bteach\b")
_ADD_FAQ_RE = re.compile(r"\b(add|create|train)\b.*\bfaq\b", re.S)


@dataclass(frozen=True)
class Rule:
    """A named predicate over lower-cased text and the reply it triggers"""

    name: str
    predicate: Callable[[str], bool]
    response: str

    def matches(self, text: str) -> bool:
        return bool(self.predicate(text))


def _wants_to_teach(text: str) -> bool:
    return bool(_TEACH_RE.search(text) or _ADD_FAQ_RE.search(text))


# Checked before scoring, first hit wins
PRE_MATCH_RULES = (
    Rule("greet", _GREET_RE.search, RESPONSES["greet"]),
    Rule("thanks", _THANKS_RE.search, RESPONSES["thanks"]),
    Rule("help", _HELP_RE.search, RESPONSES["help"]),
)

# Checked only when no stored answer scored high enough
POST_MATCH_RULES = (
    Rule("teach", _wants_to_teach, RESPONSES["teach"]),
)


def first_match(rules: Sequence[Rule], text: str) -> Optional[Rule]:
    """Return the first rule whose predicate holds for text, or None"""
    for rule in rules:
        if rule.matches(text):
            return rule
    return None
