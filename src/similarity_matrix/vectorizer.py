from collections import Counter
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from .errors import UnknownStrategy
from .preprocess import Tokenizer


class CorpusStatistics(Protocol):
    """Provider of term weights computed across a small corpus."""

    def vectorize(
        self, documents: Sequence[Sequence[str]], vocabulary: Sequence[str]
    ) -> List[np.ndarray]: ...


class PairTfIdf:
    """TF-IDF over the documents being compared, fitted with scikit-learn.

    Documents arrive already tokenized, so the analyzer passes them through
    and the pair vocabulary fixes the column order.
    """

    def vectorize(
        self, documents: Sequence[Sequence[str]], vocabulary: Sequence[str]
    ) -> List[np.ndarray]:
        if not vocabulary:
            return [np.zeros(0) for _ in documents]
        model = TfidfVectorizer(vocabulary=list(vocabulary), analyzer=lambda tokens: tokens)
        weights = model.fit_transform([list(tokens) for tokens in documents]).toarray()
        return [row.astype(float) for row in weights]


def build_vocabulary(*token_sequences: Sequence[str]) -> List[str]:
    """Unique tokens of all sequences, in order of first appearance."""
    return list(dict.fromkeys(token for tokens in token_sequences for token in tokens))


def bow_vectorize(tokens: Sequence[str], vocabulary: Sequence[str]) -> np.ndarray:
    counts = Counter(tokens)
    return np.array([counts.get(term, 0) for term in vocabulary], dtype=float)


def one_hot_vectorize(tokens: Sequence[str], vocabulary: Sequence[str]) -> np.ndarray:
    present = set(tokens)
    return np.array([1.0 if term in present else 0.0 for term in vocabulary])


class Vectorizer:
    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        corpus_statistics: Optional[CorpusStatistics] = None,
    ) -> None:
        self.tokenizer = tokenizer or Tokenizer()
        self.corpus_statistics = corpus_statistics or PairTfIdf()

    def vectorize(
        self, tokens: Sequence[str], vocabulary: Sequence[str], scheme: str = "bow"
    ) -> np.ndarray:
        if scheme == "bow":
            return bow_vectorize(tokens, vocabulary)
        if scheme == "one_hot":
            return one_hot_vectorize(tokens, vocabulary)
        if scheme == "tfidf":
            return self.corpus_statistics.vectorize([tokens], vocabulary)[0]
        raise UnknownStrategy(
            f"Unknown vectorize method: {scheme}", field="scheme", value=scheme
        )

    def vectorize_pair(
        self,
        text1: str,
        text2: str,
        tokenize_method: str = "word",
        scheme: str = "bow",
    ) -> Tuple[np.ndarray, np.ndarray]:
        tokens1 = self.tokenizer.remove_stopwords(
            self.tokenizer.tokenize(text1, tokenize_method)
        )
        tokens2 = self.tokenizer.remove_stopwords(
            self.tokenizer.tokenize(text2, tokenize_method)
        )
        vocabulary = build_vocabulary(tokens1, tokens2)

        if scheme == "tfidf":
            vec1, vec2 = self.corpus_statistics.vectorize([tokens1, tokens2], vocabulary)
            return vec1, vec2
        return (
            self.vectorize(tokens1, vocabulary, scheme),
            self.vectorize(tokens2, vocabulary, scheme),
        )


def term_frequencies(tokens: Sequence[str]) -> Dict[str, int]:
    return dict(Counter(tokens))
