import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from . import metrics
from .errors import DegenerateInput, DimensionMismatch, GenerationCancelled, LengthMismatch
from .models import Document, MatrixConfig, MatrixResult
from .preprocess import Tokenizer, load_stopwords
from .vectorizer import CorpusStatistics, Vectorizer
from .winnowing import WinnowingEngine

MetricFn = Callable[[str, str], float]
DocumentInput = Union[Document, Tuple[str, str]]

_PER_PAIR_ERRORS = (LengthMismatch, DimensionMismatch, DegenerateInput)
_PROGRESS_EVERY = 1000


class MatrixGenerator:
    """Builds one square similarity matrix per requested metric."""

    def __init__(
        self,
        config: Optional[MatrixConfig] = None,
        tokenizer: Optional[Tokenizer] = None,
        corpus_statistics: Optional[CorpusStatistics] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.config = config or MatrixConfig()
        self.config.validate()
        self.tokenizer = tokenizer or Tokenizer(
            stopwords=load_stopwords(self.config.stopword_language)
        )
        self.vectorizer = Vectorizer(self.tokenizer, corpus_statistics)
        self.winnower = WinnowingEngine(
            k=self.config.k, w=self.config.w, tokenizer=self.tokenizer
        )
        self.cancel_event = cancel_event
        self._metrics: Dict[str, MetricFn] = self._resolve_metrics(self.config.metrics)

    @property
    def metric_names(self) -> List[str]:
        return list(self._metrics)

    def _resolve_metrics(self, names: Sequence[str]) -> Dict[str, MetricFn]:
        available: Dict[str, MetricFn] = {
            "cosine_similarity": metrics.cosine_similarity,
            "euclidean_similarity": self._euclidean_similarity,
            "jaccard_similarity": partial(
                metrics.jaccard_similarity, ngram=self.config.jaccard_ngram
            ),
            "jaccard_bigram_similarity": partial(metrics.jaccard_similarity, ngram=2),
            "levenshtein_similarity": metrics.levenshtein_similarity,
            "overlap_similarity": metrics.overlap_coefficient,
            "winnowing_similarity": self.winnower.similarity,
            "hamming_similarity": metrics.hamming_similarity,
        }
        return {name: available[name] for name in dict.fromkeys(names)}

    def _euclidean_similarity(self, text1: str, text2: str) -> float:
        vec1, vec2 = self.vectorizer.vectorize_pair(
            text1,
            text2,
            tokenize_method=self.config.tokenize_method,
            scheme=self.config.vectorize_method,
        )
        return metrics.euclidean_similarity(vec1, vec2)

    def score_pair(self, text1: str, text2: str) -> Dict[str, float]:
        scores: Dict[str, float] = {}
        for name, metric in self._metrics.items():
            try:
                scores[name] = float(metric(text1, text2))
            except _PER_PAIR_ERRORS as exc:
                logging.debug("Metric %s not applicable: %s", name, exc)
                scores[name] = float("nan")
        return scores

    def generate(self, documents: Iterable[DocumentInput]) -> MatrixResult:
        docs = [_as_document(item) for item in documents]
        size = len(docs)
        matrices = {name: np.full((size, size), np.nan) for name in self._metrics}
        pairs = [(i, j) for i in range(size) for j in range(size) if i != j]

        start = time.perf_counter()
        workers = min(self.config.max_workers, max(len(pairs), 1))
        logging.info(
            "Computing %d metrics for %d documents (%d pairs) using %d workers",
            len(matrices),
            size,
            len(pairs),
            workers,
        )

        if workers <= 1:
            for done, (i, j) in enumerate(pairs, start=1):
                self._check_cancelled()
                self._store(matrices, i, j, self.score_pair(docs[i].text, docs[j].text))
                _log_progress(done, len(pairs))
        else:
            self._generate_parallel(docs, pairs, matrices, workers)

        process_time = round(time.perf_counter() - start, 2)
        logging.info("Process Time: %.2fs", process_time)
        return MatrixResult(
            doc_ids=[doc.doc_id for doc in docs],
            matrices=matrices,
            process_time=process_time,
        )

    def _generate_parallel(
        self,
        docs: List[Document],
        pairs: List[Tuple[int, int]],
        matrices: Dict[str, np.ndarray],
        workers: int,
    ) -> None:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_pair = {
                executor.submit(self._pair_worker, docs[i].text, docs[j].text): (i, j)
                for i, j in pairs
            }
            for done, future in enumerate(as_completed(future_to_pair), start=1):
                i, j = future_to_pair[future]
                scores = future.result()
                if scores is not None:
                    self._store(matrices, i, j, scores)
                _log_progress(done, len(pairs))
        self._check_cancelled()

    def _pair_worker(self, text1: str, text2: str) -> Optional[Dict[str, float]]:
        if self.cancel_event is not None and self.cancel_event.is_set():
            return None
        return self.score_pair(text1, text2)

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise GenerationCancelled("Matrix generation cancelled")

    @staticmethod
    def _store(matrices: Dict[str, np.ndarray], i: int, j: int, scores: Dict[str, float]) -> None:
        for name, score in scores.items():
            matrices[name][i, j] = score


def _as_document(item: DocumentInput) -> Document:
    if isinstance(item, Document):
        return item
    doc_id, text = item
    return Document(doc_id=str(doc_id), text=text)


def _log_progress(done: int, total: int) -> None:
    if done % _PROGRESS_EVERY == 0:
        logging.info("Processed %d/%d pairs", done, total)


def generate_matrices(
    documents: Iterable[DocumentInput],
    config: Optional[MatrixConfig] = None,
    tokenizer: Optional[Tokenizer] = None,
) -> MatrixResult:
    return MatrixGenerator(config=config, tokenizer=tokenizer).generate(documents)
