"""Shared fixtures. Stopword lists are disabled so no nltk download is needed."""

import pytest

from similarity_matrix.models import MatrixConfig
from similarity_matrix.preprocess import IdentityStemmer, Tokenizer

TEXT_LIKE = "I like to read."
TEXT_LOVE = "I love to read."


@pytest.fixture
def plain_tokenizer() -> Tokenizer:
    return Tokenizer(stemmer=IdentityStemmer())


@pytest.fixture
def config() -> MatrixConfig:
    return MatrixConfig(stopword_language=None)


@pytest.fixture
def corpus():
    return [
        ("1", TEXT_LIKE),
        ("2", TEXT_LOVE),
        ("3", "The research is about similarity calculation and winnowing methods."),
        ("4", "Multiple methods are based on NLP."),
    ]


class _StopwordCorpus:
    """In-memory stand-in for the nltk stopword corpus with one language."""

    def words(self, language):
        if language != "english":
            raise OSError(f"No such file or directory: 'corpora/stopwords/{language}'")
        return ["the", "to", "I"]


@pytest.fixture
def stopword_corpus(monkeypatch):
    from similarity_matrix import preprocess

    monkeypatch.setattr(preprocess, "stopword_corpus", _StopwordCorpus())
    monkeypatch.setattr(preprocess, "_ensure_nltk_resource", lambda path, package: None)
