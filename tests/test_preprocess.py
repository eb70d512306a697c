import pytest

from similarity_matrix.errors import UnknownStrategy
from similarity_matrix.preprocess import IdentityStemmer, Tokenizer, load_stopwords


def test_word_tokens_are_lowercased_and_split_on_non_word(plain_tokenizer):
    assert plain_tokenizer.tokenize("Hello, World!  again", "word") == [
        "hello",
        "world",
        "again",
    ]


def test_word_tokens_drop_leading_separator(plain_tokenizer):
    assert plain_tokenizer.tokenize("...start here", "word") == ["start", "here"]


def test_word_tokens_are_stemmed_by_default():
    tokenizer = Tokenizer()
    assert tokenizer.tokenize("Cats running", "word") == ["cat", "run"]


def test_injected_stemmer_is_used():
    class Upper:
        def stem(self, word):
            return word.upper()

    assert Tokenizer(stemmer=Upper()).tokenize("a b", "word") == ["A", "B"]


def test_character_tokens_keep_every_character(plain_tokenizer):
    assert plain_tokenizer.tokenize("ab c", "character") == ["a", "b", " ", "c"]


def test_bigram_tokens_overlap_within_words(plain_tokenizer):
    assert plain_tokenizer.tokenize("Abc d", "bigram") == ["ab", "bc"]


def test_trigram_tokens_overlap(plain_tokenizer):
    assert plain_tokenizer.tokenize("ABCD", "trigram") == ["abc", "bcd"]


def test_unknown_method_raises(plain_tokenizer):
    with pytest.raises(UnknownStrategy, match="Unknown tokenization method"):
        plain_tokenizer.tokenize("text", "sentence")


def test_unknown_strategy_is_value_error(plain_tokenizer):
    with pytest.raises(ValueError):
        plain_tokenizer.tokenize("text", "sentence")


def test_remove_stopwords_is_case_insensitive():
    tokenizer = Tokenizer(stemmer=IdentityStemmer(), stopwords={"The", "a"})
    assert tokenizer.remove_stopwords(["the", "Cat", "A", "sat"]) == ["Cat", "sat"]


def test_remove_stopwords_passthrough_when_empty(plain_tokenizer):
    assert plain_tokenizer.remove_stopwords(["the", "cat"]) == ["the", "cat"]


def test_load_stopwords_without_language_is_empty():
    assert load_stopwords(None) == frozenset()


def test_load_stopwords_lowercases_corpus_words(stopword_corpus):
    assert load_stopwords("english") == frozenset({"the", "to", "i"})


def test_load_stopwords_unknown_language_raises(stopword_corpus):
    with pytest.raises(UnknownStrategy, match="Unknown stopword language: klingon"):
        load_stopwords("klingon")
