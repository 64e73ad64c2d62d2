"""Knowledge base module for storing question/answer pairs"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from . import config

logger = logging.getLogger(__name__)


class KnowledgeStoreError(Exception):
    """Raised when the knowledge base cannot be saved or loaded"""


@dataclass(frozen=True)
class QAPair:
    """Single question/answer record"""

    question: str
    answer: str
    created: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict:
        return {
            "question": self.question,
            "answer": self.answer,
            "created": self.created.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "QAPair":
        created = data.get("created")
        return cls(
            question=data["question"],
            answer=data["answer"],
            created=datetime.fromisoformat(created) if created else datetime.now(),
        )

    def __str__(self):
        return f"{self.question} -> {self.answer}"


class KnowledgeBase:
    """
    Ordered, append-only collection of QAPair records.

    Adding a pair replaces the internal tuple rather than mutating it, so a
    snapshot returned by all() never changes under its holder. Every change
    bumps `revision`.
    """

    def __init__(self, pairs=()):
        self._pairs: Tuple[QAPair, ...] = tuple(pairs)
        self.revision = 0

    def add(self, question: str, answer: str) -> QAPair:
        """Add a new question/answer pair"""
        question = (question or "").strip()
        answer = (answer or "").strip()
        if not question or not answer:
            raise ValueError("Both question and answer are required")

        pair = QAPair(question, answer)
        self._pairs = self._pairs + (pair,)
        self.revision += 1
        logger.debug(f"Added Q/A pair: {question[:50]}")
        return pair

    def all(self) -> Tuple[QAPair, ...]:
        """Snapshot of all pairs, in insertion order"""
        return self._pairs

    def is_empty(self) -> bool:
        return not self._pairs

    def __len__(self):
        return len(self._pairs)

    def __iter__(self) -> Iterator[QAPair]:
        return iter(self._pairs)

    def get_statistics(self) -> Dict:
        """Get knowledge base statistics"""
        if not self._pairs:
            return {"total_pairs": 0, "oldest": None, "newest": None}

        created = [p.created for p in self._pairs]
        return {
            "total_pairs": len(self._pairs),
            "oldest": min(created).isoformat(),
            "newest": max(created).isoformat(),
        }

    def to_dict(self) -> Dict:
        return {
            "version": config.KNOWLEDGE_FORMAT_VERSION,
            "saved_at": datetime.now().isoformat(),
            "faq": [p.to_dict() for p in self._pairs],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "KnowledgeBase":
        return cls(QAPair.from_dict(d) for d in data.get("faq", []))


def seed_default(kb: KnowledgeBase) -> KnowledgeBase:
    """Populate a fresh knowledge base with the starter FAQ"""
    kb.add("what is your name", "I am FaqBot - a demo chatbot.")
    kb.add("how can i save knowledge", "Use the 'save' command to persist Q/A pairs.")
    kb.add("how to train you", "The 'train' command lets you add a question and its answer to my memory.")
    kb.add("what can you do", "I can answer FAQs, be trained with new Q/A, and save/load my memory.")
    return kb


def save_knowledge_base(kb: KnowledgeBase, path: Optional[Path] = None) -> Path:
    """Save knowledge base to disk as JSON"""
    path = Path(path or config.KNOWLEDGE_BASE_FILE)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(kb.to_dict(), f, indent=2, ensure_ascii=False)
    except (OSError, TypeError) as e:
        raise KnowledgeStoreError(f"could not write {path}: {e}") from e

    logger.info(f"Saved {len(kb)} Q/A pairs to {path}")
    return path


def load_knowledge_base(path: Optional[Path] = None) -> KnowledgeBase:
    """Load knowledge base from disk"""
    path = Path(path or config.KNOWLEDGE_BASE_FILE)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        kb = KnowledgeBase.from_dict(data)
    except OSError as e:
        raise KnowledgeStoreError(f"could not read {path}: {e}") from e
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise KnowledgeStoreError(f"corrupt knowledge file {path}: {e}") from e

    logger.info(f"Loaded {len(kb)} Q/A pairs from {path}")
    return kb


def load_or_seed(path: Optional[Path] = None) -> KnowledgeBase:
    """Load the saved knowledge base, or start a seeded one if none is usable"""
    try:
        return load_knowledge_base(path)
    except KnowledgeStoreError as e:
        logger.info(f"No usable knowledge base ({e}), starting with defaults")
        return seed_default(KnowledgeBase())
