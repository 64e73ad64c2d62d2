"""Matching engine - scores a message against every stored question and picks a reply"""

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

from . import config
from .knowledge import KnowledgeBase, QAPair
from .nlp import TermVector, Tokenizer, cosine, vectorize
from .rules import POST_MATCH_RULES, PRE_MATCH_RULES, RESPONSES, Rule, first_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchThresholds:
    """Score cut-offs for answering outright and for suggesting a candidate"""

    high: float = config.HIGH_CONFIDENCE
    medium: float = config.MEDIUM_CONFIDENCE

    def __post_init__(self):
        if not 0.0 <= self.medium <= self.high <= 1.0:
            raise ValueError(
                f"thresholds must satisfy 0 <= medium <= high <= 1, got medium={self.medium}, high={self.high}"
            )


class Match(NamedTuple):
    index: int
    score: float


class _Cache(NamedTuple):
    revision: int
    pairs: Tuple[QAPair, ...]
    vectors: Tuple[TermVector, ...]


class ChatbotCore:
    """
    Single-turn responder over a knowledge base.

    Keeps one term vector per stored question. The cache is rebuilt in full
    and published with a single assignment, so readers see either the old
    cache or the new one. The pairs the cache was built from are kept with
    it, so answers always line up with the vectors that scored them.

    Not synchronized: callers must not mutate the knowledge base or call
    rebuild_cache() while another call is in flight.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        thresholds: Optional[MatchThresholds] = None,
        tokenizer: Optional[Tokenizer] = None,
        pre_rules: Optional[Sequence[Rule]] = None,
        post_rules: Optional[Sequence[Rule]] = None,
    ):
        self.kb = knowledge_base
        self.thresholds = thresholds or MatchThresholds()
        self.tokenizer = tokenizer or Tokenizer()
        self.pre_rules = tuple(PRE_MATCH_RULES if pre_rules is None else pre_rules)
        self.post_rules = tuple(POST_MATCH_RULES if post_rules is None else post_rules)
        self._cache = _Cache(-1, (), ())
        self.rebuild_cache()

    # ── cache ────────────────────────────────────────────────────────────
    def rebuild_cache(self):
        """Recompute every question vector from the current knowledge base"""
        pairs = self.kb.all()
        vectors = tuple(vectorize(self.tokenizer.tokenize(p.question)) for p in pairs)
        self._cache = _Cache(self.kb.revision, pairs, vectors)
        logger.info(f"Rebuilt question cache with {len(vectors)} entries")

    def set_knowledge_base(self, knowledge_base: KnowledgeBase):
        """Swap the backing knowledge base and rebuild immediately"""
        self.kb = knowledge_base
        self.rebuild_cache()

    def teach(self, question: str, answer: str) -> QAPair:
        """Add a Q/A pair and rebuild the cache in one step"""
        pair = self.kb.add(question, answer)
        self.rebuild_cache()
        return pair

    @property
    def cache(self) -> Tuple[TermVector, ...]:
        return self._cache.vectors

    @property
    def is_fresh(self) -> bool:
        """True when the cache reflects the current knowledge base"""
        cache = self._cache
        return cache.pairs is self.kb.all() and cache.revision == self.kb.revision

    # ── matching ─────────────────────────────────────────────────────────
    def best_match(self, message) -> Match:
        """Highest-scoring stored question; ties keep the earliest index"""
        return self._score(self._cache, message)

    def _score(self, cache: _Cache, message) -> Match:
        v = vectorize(self.tokenizer.tokenize(message))

        best_score = 0.0
        best_idx = -1
        for i, qv in enumerate(cache.vectors):
            score = cosine(v, qv)
            if score > best_score:
                best_score, best_idx = score, i
        return Match(best_idx, best_score)

    def respond(self, message) -> str:
        """Primary respond method, never raises"""
        m = message.strip() if isinstance(message, str) else ""
        if not m:
            return RESPONSES["empty"]

        low = m.lower()
        rule = first_match(self.pre_rules, low)
        if rule:
            logger.debug(f"Rule '{rule.name}' matched")
            return rule.response

        cache = self._cache
        best = self._score(cache, m)
        logger.debug(f"Best match index={best.index} score={best.score:.3f}")

        if best.index >= 0 and best.score >= self.thresholds.high:
            pair = cache.pairs[best.index]
            logger.debug("Tier: high confidence, answering directly")
            return f"{pair.answer} (confidence: {best.score:.2f})"

        if best.index >= 0 and best.score >= self.thresholds.medium:
            pair = cache.pairs[best.index]
            logger.debug("Tier: medium confidence, suggesting candidate")
            return (
                f'I think you might mean: "{pair.question}"\n'
                f"Answer: {pair.answer}\n"
                "(If this isn't what you meant, you can teach me with the 'train' command.)\n"
                f"(conf: {best.score:.2f})"
            )

        logger.debug("Tier: low confidence, trying fallback rules")
        rule = first_match(self.post_rules, low)
        if rule:
            logger.debug(f"Rule '{rule.name}' matched after scoring")
            return rule.response

        logger.debug("No rule matched, using fallback reply")
        return RESPONSES["fallback"]
