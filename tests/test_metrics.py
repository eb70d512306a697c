import itertools
import math

import pytest

from similarity_matrix import metrics
from similarity_matrix.errors import DimensionMismatch, LengthMismatch

TEXT_LIKE = "I like to read."
TEXT_LOVE = "I love to read."

SAMPLES = [
    TEXT_LIKE,
    TEXT_LOVE,
    "During weekends, I like to read books.",
    "I love to read books on Saturday and Sunday.",
    "The research is about similarity calculation.",
]


class TestScenarioSimilarTexts:
    def test_jaccard(self):
        assert metrics.jaccard_similarity(TEXT_LIKE, TEXT_LOVE) == pytest.approx(0.6)

    def test_overlap(self):
        assert metrics.overlap_coefficient(TEXT_LIKE, TEXT_LOVE) == pytest.approx(0.75)

    def test_cosine(self):
        assert metrics.cosine_similarity(TEXT_LIKE, TEXT_LOVE) == pytest.approx(1.0)

    def test_levenshtein(self):
        assert metrics.levenshtein_distance(TEXT_LIKE, TEXT_LOVE) == 2
        assert metrics.levenshtein_similarity(TEXT_LIKE, TEXT_LOVE) == pytest.approx(
            13 / 15
        )

    def test_hamming(self):
        assert metrics.hamming_distance(TEXT_LIKE, TEXT_LOVE) == 2
        assert metrics.hamming_similarity(TEXT_LIKE, TEXT_LOVE) == pytest.approx(13 / 15)


def test_identical_texts_score_maximum():
    text = "Multiple methods are based on NLP."
    assert metrics.jaccard_similarity(text, text) == 1.0
    assert metrics.overlap_coefficient(text, text) == 1.0
    assert metrics.cosine_similarity(text, text) == pytest.approx(1.0)
    assert metrics.levenshtein_distance(text, text) == 0
    assert metrics.levenshtein_similarity(text, text) == 1.0
    assert metrics.hamming_similarity(text, text) == 1.0


def test_disjoint_vocabularies_score_zero():
    text1 = "alpha beta"
    text2 = "gamma delta epsilon"
    assert metrics.jaccard_similarity(text1, text2) == 0.0
    assert metrics.overlap_coefficient(text1, text2) == 0.0
    assert metrics.cosine_similarity(text1, text2) == 0.0


def test_jaccard_with_word_bigrams():
    assert metrics.jaccard_similarity("a b c", "a b d", ngram=2) == pytest.approx(1 / 3)


def test_jaccard_undefined_for_two_empty_texts():
    assert math.isnan(metrics.jaccard_similarity("", "   "))


def test_overlap_undefined_when_smaller_set_empty():
    assert math.isnan(metrics.overlap_coefficient("", "some words"))


def test_cosine_uses_only_common_words():
    # common words a, b with frequencies (2, 1) and (1, 2)
    assert metrics.cosine_similarity("a a b x", "a b b y z") == pytest.approx(0.8)


def test_vector_cosine_zero_magnitude():
    assert metrics.vector_cosine([0, 0], [1, 2]) == 0.0


def test_euclidean_similarity():
    assert metrics.euclidean_similarity([1, 0], [0, 1]) == pytest.approx(
        1 / (1 + math.sqrt(2))
    )
    assert metrics.euclidean_similarity([3, 4], [3, 4]) == 1.0


def test_euclidean_rejects_unequal_dimensions():
    with pytest.raises(DimensionMismatch):
        metrics.euclidean_similarity([1, 2, 3], [1, 2])


def test_levenshtein_classic_example():
    assert metrics.levenshtein_distance("kitten", "sitting") == 3
    assert metrics.levenshtein_distance("", "abc") == 3
    assert metrics.levenshtein_distance("abc", "") == 3


def test_normalized_levenshtein_of_empty_strings():
    assert metrics.normalized_levenshtein_distance("", "") == 0.0


def test_hamming_rejects_unequal_lengths():
    with pytest.raises(LengthMismatch):
        metrics.hamming_distance("abc", "ab")
    with pytest.raises(LengthMismatch):
        metrics.hamming_similarity("abc", "abcd")


def test_hamming_of_empty_strings():
    assert metrics.normalized_hamming_distance("", "") == 0.0


@pytest.mark.parametrize(
    "metric",
    [metrics.jaccard_similarity, metrics.cosine_similarity, metrics.overlap_coefficient],
)
def test_set_metrics_are_symmetric(metric):
    for a, b in itertools.combinations(SAMPLES, 2):
        assert metric(a, b) == metric(b, a)


@pytest.mark.parametrize(
    "metric",
    [
        metrics.jaccard_similarity,
        metrics.cosine_similarity,
        metrics.overlap_coefficient,
        metrics.levenshtein_similarity,
    ],
)
def test_similarities_stay_in_unit_range(metric):
    for a, b in itertools.permutations(SAMPLES, 2):
        assert 0.0 <= metric(a, b) <= 1.0

