"""Pairwise similarity and distance functions.

Every function is pure. Set and frequency based metrics work on the raw
whitespace tokens of the text, vector metrics on equal-length numpy arrays,
and edit distances on the raw character strings.
"""

from typing import AbstractSet, Hashable, Optional, Sequence, Set, Tuple

import numpy as np

from .errors import DegenerateInput, DimensionMismatch, LengthMismatch
from .vectorizer import term_frequencies

NAN = float("nan")


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        raise DegenerateInput(
            "Zero denominator", field="denominator", value=denominator
        )
    return numerator / denominator


def word_ngrams(words: Sequence[str], n: int) -> Set[Tuple[str, ...]]:
    return {tuple(words[i : i + n]) for i in range(len(words) - n + 1)}


def _token_set(text: str, ngram: Optional[int] = None) -> Set[Hashable]:
    words = text.split()
    if ngram:
        return set(word_ngrams(words, ngram))
    return set(words)


def jaccard_index(set1: AbstractSet[Hashable], set2: AbstractSet[Hashable]) -> float:
    try:
        return _ratio(len(set1 & set2), len(set1 | set2))
    except DegenerateInput:
        return NAN


def jaccard_similarity(text1: str, text2: str, ngram: Optional[int] = None) -> float:
    """Intersection over union of the word (or word n-gram) sets.

    NaN when both sets are empty.
    """
    return jaccard_index(_token_set(text1, ngram), _token_set(text2, ngram))


def overlap_index(set1: AbstractSet[Hashable], set2: AbstractSet[Hashable]) -> float:
    try:
        return _ratio(len(set1 & set2), min(len(set1), len(set2)))
    except DegenerateInput:
        return NAN


def overlap_coefficient(text1: str, text2: str) -> float:
    """Shared words over the size of the smaller word set, NaN if it is empty."""
    return overlap_index(_token_set(text1), _token_set(text2))


def vector_cosine(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    a = np.asarray(vec1, dtype=float)
    b = np.asarray(vec2, dtype=float)
    _check_dimensions(a, b)
    try:
        score = _ratio(float(np.dot(a, b)), float(np.linalg.norm(a) * np.linalg.norm(b)))
    except DegenerateInput:
        return 0.0
    return min(1.0, max(-1.0, score))


def cosine_similarity(text1: str, text2: str) -> float:
    """Cosine of word frequency vectors restricted to the words both texts use."""
    freq1 = term_frequencies(text1.split())
    freq2 = term_frequencies(text2.split())
    common = [word for word in freq1 if word in freq2]
    if not common:
        return 0.0
    vec1 = [freq1[word] for word in common]
    vec2 = [freq2[word] for word in common]
    return max(0.0, vector_cosine(vec1, vec2))


def _check_dimensions(vec1: np.ndarray, vec2: np.ndarray) -> None:
    if vec1.shape != vec2.shape:
        raise DimensionMismatch(
            f"Vectors must have the same length, got {vec1.shape} and {vec2.shape}",
            field="vectors",
            value=(vec1.shape, vec2.shape),
        )


def euclidean_distance(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    a = np.asarray(vec1, dtype=float)
    b = np.asarray(vec2, dtype=float)
    _check_dimensions(a, b)
    return float(np.linalg.norm(a - b))


def euclidean_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    return 1.0 / (1.0 + euclidean_distance(vec1, vec2))


def levenshtein_distance(str1: str, str2: str) -> int:
    """Edit distance by dynamic programming, one table row at a time."""
    if not str2:
        return len(str1)
    if not str1:
        return len(str2)

    previous = list(range(len(str2) + 1))
    for i, char1 in enumerate(str1, start=1):
        current = [i]
        for j, char2 in enumerate(str2, start=1):
            cost = 0 if char1 == char2 else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def normalized_levenshtein_distance(text1: str, text2: str) -> float:
    try:
        return _ratio(levenshtein_distance(text1, text2), max(len(text1), len(text2)))
    except DegenerateInput:
        return 0.0


def levenshtein_similarity(text1: str, text2: str) -> float:
    return 1.0 - normalized_levenshtein_distance(text1, text2)


def hamming_distance(str1: str, str2: str) -> int:
    if len(str1) != len(str2):
        raise LengthMismatch(
            f"Strings must be of equal length, got {len(str1)} and {len(str2)}",
            field="strings",
            value=(len(str1), len(str2)),
        )
    return sum(1 for a, b in zip(str1, str2) if a != b)


def normalized_hamming_distance(str1: str, str2: str) -> float:
    distance = hamming_distance(str1, str2)
    try:
        return _ratio(distance, len(str1))
    except DegenerateInput:
        return 0.0


def hamming_similarity(str1: str, str2: str) -> float:
    return 1.0 - normalized_hamming_distance(str1, str2)
