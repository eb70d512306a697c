import hashlib
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .errors import ParameterValidationError
from .preprocess import Tokenizer

KGram = Tuple[int, ...]


def hash_token(token: str) -> int:
    """32-bit unsigned hash: the leading 8 hex digits of the SHA-1 digest."""
    digest = hashlib.sha1(token.encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


def hash_tokens(tokens: Sequence[str]) -> List[int]:
    return [hash_token(token) for token in tokens]


def k_grams(hashes: Sequence[int], k: int) -> List[KGram]:
    return [tuple(hashes[i : i + k]) for i in range(len(hashes) - k + 1)]


def select_fingerprints(grams: Sequence[KGram], w: int) -> FrozenSet[KGram]:
    """Pick the minimum k-gram of every window of ``w`` consecutive k-grams.

    k-grams are ranked by their leading hash; on a tie the earliest k-gram
    in the window wins.
    """
    selected = []
    for start in range(len(grams) - w + 1):
        window = grams[start : start + w]
        best = window[0]
        for gram in window[1:]:
            if gram[0] < best[0]:
                best = gram
        selected.append(best)
    return frozenset(selected)


def _validate_parameter(value: int, field: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ParameterValidationError(
            f"{field} must be a positive integer, got {value!r}", field=field, value=value
        )
    return value


@dataclass(frozen=True)
class FingerprintProfile:
    tokens: Sequence[str]
    fingerprints: FrozenSet[KGram]


class WinnowingEngine:
    """Document fingerprints by winnowing over hashed word k-grams."""

    def __init__(self, k: int = 3, w: int = 4, tokenizer: Optional[Tokenizer] = None) -> None:
        self.k = _validate_parameter(k, "k")
        self.w = _validate_parameter(w, "w")
        self.tokenizer = tokenizer or Tokenizer()

    def build_profile(self, text: str) -> FingerprintProfile:
        tokens = self.tokenizer.tokenize(text, "word")
        grams = k_grams(hash_tokens(tokens), self.k)
        return FingerprintProfile(tokens=tokens, fingerprints=select_fingerprints(grams, self.w))

    def score_profiles(self, profile_a: FingerprintProfile, profile_b: FingerprintProfile) -> float:
        return fingerprint_similarity(profile_a.fingerprints, profile_b.fingerprints)

    def similarity(self, text1: str, text2: str) -> float:
        return self.score_profiles(self.build_profile(text1), self.build_profile(text2))


def fingerprint_similarity(
    fingerprints1: FrozenSet[KGram], fingerprints2: FrozenSet[KGram]
) -> float:
    if not fingerprints1 or not fingerprints2:
        return 0.0
    matches = len(fingerprints1 & fingerprints2)
    return matches / min(len(fingerprints1), len(fingerprints2))


def winnowing(text1: str, text2: str, k: int, w: int, tokenizer: Optional[Tokenizer] = None) -> float:
    return WinnowingEngine(k=k, w=w, tokenizer=tokenizer).similarity(text1, text2)
