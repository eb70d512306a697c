from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import ParameterValidationError, UnknownStrategy

TOKENIZE_METHODS: Tuple[str, ...] = ("word", "character", "bigram", "trigram")
VECTORIZE_METHODS: Tuple[str, ...] = ("bow", "one_hot", "tfidf")

DEFAULT_METRICS: Tuple[str, ...] = (
    "cosine_similarity",
    "euclidean_similarity",
    "jaccard_similarity",
    "levenshtein_similarity",
    "overlap_similarity",
    "winnowing_similarity",
)
OPTIONAL_METRICS: Tuple[str, ...] = (
    "jaccard_bigram_similarity",
    "hamming_similarity",
)
METRIC_NAMES: Tuple[str, ...] = DEFAULT_METRICS + OPTIONAL_METRICS


@dataclass(frozen=True)
class Document:
    doc_id: str
    text: str
    metadata: Optional[dict] = None


@dataclass
class MatrixConfig:
    tokenize_method: str = "word"
    vectorize_method: str = "bow"
    metrics: Sequence[str] = DEFAULT_METRICS
    k: int = 3
    w: int = 4
    jaccard_ngram: Optional[int] = None
    stopword_language: Optional[str] = "english"
    max_workers: int = 1

    def validate(self) -> None:
        if self.tokenize_method not in TOKENIZE_METHODS:
            raise UnknownStrategy(
                f"Unknown tokenization method: {self.tokenize_method}",
                field="tokenize_method",
                value=self.tokenize_method,
            )
        if self.vectorize_method not in VECTORIZE_METHODS:
            raise UnknownStrategy(
                f"Unknown vectorize method: {self.vectorize_method}",
                field="vectorize_method",
                value=self.vectorize_method,
            )
        if not self.metrics:
            raise ParameterValidationError(
                "At least one metric must be requested", field="metrics", value=self.metrics
            )
        for name in self.metrics:
            if name not in METRIC_NAMES:
                raise UnknownStrategy(
                    f"Unknown metric: {name}. Available: {', '.join(METRIC_NAMES)}",
                    field="metrics",
                    value=name,
                )
        for label in ("k", "w", "max_workers"):
            value = getattr(self, label)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ParameterValidationError(
                    f"{label} must be a positive integer, got {value!r}",
                    field=label,
                    value=value,
                )
        if self.jaccard_ngram is not None and (
            not isinstance(self.jaccard_ngram, int)
            or isinstance(self.jaccard_ngram, bool)
            or self.jaccard_ngram < 1
        ):
            raise ParameterValidationError(
                f"jaccard_ngram must be a positive integer, got {self.jaccard_ngram!r}",
                field="jaccard_ngram",
                value=self.jaccard_ngram,
            )


@dataclass
class MatrixResult:
    doc_ids: List[str]
    matrices: Dict[str, np.ndarray] = field(default_factory=dict)
    process_time: float = 0.0

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        return {
            name: pd.DataFrame(matrix, index=self.doc_ids, columns=self.doc_ids)
            for name, matrix in self.matrices.items()
        }

    def to_lists(self) -> Dict[str, List[List[Optional[float]]]]:
        """Plain nested lists with ``None`` in place of NaN, for JSON output."""
        return {
            name: [
                [None if np.isnan(value) else float(value) for value in row]
                for row in matrix
            ]
            for name, matrix in self.matrices.items()
        }
