import re
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Protocol

import nltk
from nltk.corpus import stopwords as stopword_corpus
from nltk.stem import PorterStemmer

from .errors import UnknownStrategy

_NON_WORD_RE = re.compile(r"\W+")
_BIGRAM_RE = re.compile(r"(?=(\w\w))")
_TRIGRAM_RE = re.compile(r"(?=(\w\w\w))")


class Stemmer(Protocol):
    def stem(self, word: str) -> str: ...


class IdentityStemmer:
    """Stemmer that leaves tokens unchanged."""

    def stem(self, word: str) -> str:
        return word


def _ensure_nltk_resource(path: str, package: str) -> None:
    try:
        nltk.data.find(path)
    except LookupError:
        nltk.download(package, quiet=True)


def load_stopwords(language: Optional[str]) -> FrozenSet[str]:
    """Return the nltk stopword list for ``language`` (empty for ``None``)."""
    if not language:
        return frozenset()
    _ensure_nltk_resource("corpora/stopwords", "stopwords")
    try:
        words = stopword_corpus.words(language)
    except (OSError, LookupError) as exc:
        raise UnknownStrategy(
            f"Unknown stopword language: {language}",
            field="stopword_language",
            value=language,
        ) from exc
    return frozenset(word.lower() for word in words)


class Tokenizer:
    def __init__(
        self,
        stemmer: Optional[Stemmer] = None,
        stopwords: Optional[Iterable[str]] = None,
    ) -> None:
        self.stemmer = stemmer if stemmer is not None else PorterStemmer()
        self.stopwords: FrozenSet[str] = frozenset(
            word.lower() for word in (stopwords or ())
        )
        self._methods: Dict[str, Callable[[str], List[str]]] = {
            "word": self._word_tokens,
            "character": self._character_tokens,
            "bigram": self._bigram_tokens,
            "trigram": self._trigram_tokens,
        }

    def tokenize(self, text: str, method: str = "word") -> List[str]:
        try:
            splitter = self._methods[method]
        except KeyError:
            raise UnknownStrategy(
                f"Unknown tokenization method: {method}", field="method", value=method
            ) from None
        return splitter(text)

    def remove_stopwords(self, tokens: Iterable[str]) -> List[str]:
        if not self.stopwords:
            return list(tokens)
        return [token for token in tokens if token.lower() not in self.stopwords]

    def _word_tokens(self, text: str) -> List[str]:
        pieces = _NON_WORD_RE.split(text.lower())
        return [self.stemmer.stem(piece) for piece in pieces if piece]

    @staticmethod
    def _character_tokens(text: str) -> List[str]:
        return list(text)

    @staticmethod
    def _bigram_tokens(text: str) -> List[str]:
        return _BIGRAM_RE.findall(text.lower())

    @staticmethod
    def _trigram_tokens(text: str) -> List[str]:
        return _TRIGRAM_RE.findall(text.lower())
