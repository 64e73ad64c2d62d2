"""Bag-of-words text utilities: tokenizing, term vectors and cosine similarity"""

import re
import math
from collections import Counter
from typing import Dict, Iterable, List, Optional

import numpy as np

from . import config

# Sparse term -> weight map, unit length unless empty
TermVector = Dict[str, float]

# Anything that is not an ASCII letter or digit separates tokens
_SPLIT_RE = re.compile(r"[^a-z0-9]+")


class Tokenizer:
    """
    Lower-cases text, splits it on non-alphanumeric runs and drops stop words.
    Duplicates are kept, term frequency matters to the vectorizer.
    """

    def __init__(self, stopwords: Optional[Iterable[str]] = None):
        self.stopwords = frozenset(config.STOPWORDS if stopwords is None else stopwords)

    def tokenize(self, text) -> List[str]:
        """Split text into content-bearing tokens"""
        if not isinstance(text, str):
            return []

        tokens = []
        for tok in _SPLIT_RE.split(text.lower()):
            if not tok or tok in self.stopwords:
                continue
            tokens.append(tok)
        return tokens

    __call__ = tokenize


_default_tokenizer = Tokenizer()


def tokenize(text) -> List[str]:
    """Tokenize with the default stop-word set"""
    return _default_tokenizer.tokenize(text)


def vectorize(tokens: Iterable[str]) -> TermVector:
    """Build an L2-normalized term-frequency vector from a token sequence"""
    counts = Counter(tokens)
    if not counts:
        return {}

    norm = float(np.linalg.norm(np.fromiter(counts.values(), dtype=float)))
    if norm <= 0:
        return {}
    return {term: count / norm for term, count in counts.items()}


def cosine(a: TermVector, b: TermVector) -> float:
    """
    Cosine similarity between two unit vectors.

    Both inputs are already normalized, so the sparse dot product is the
    cosine. Iterates the smaller map; fsum keeps the result independent of
    argument order.
    """
    small, large = (a, b) if len(a) < len(b) else (b, a)
    total = math.fsum(
        weight * large[term] for term, weight in small.items() if term in large
    )
    return min(total, 1.0)
