"""
Word and word-prefix index over drug names, used for autocomplete-style lookups.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Set

from ..config import MIN_TOKEN_LENGTH
from ..data.records import Drug
from .text import split_words


def word_keys(word: str) -> List[str]:
    """
    Keys a single word is indexed under: every prefix from MIN_TOKEN_LENGTH up to
    the full word.

    Args:
        word: Lower-cased word

    Returns:
        List of keys, shortest first; empty for words below MIN_TOKEN_LENGTH
    """
    if len(word) < MIN_TOKEN_LENGTH:
        return []
    return [word[:n] for n in range(MIN_TOKEN_LENGTH, len(word) + 1)]


def build_token_index(drugs: Iterable[Drug]) -> Dict[str, Set[int]]:
    """
    Build the inverted word/prefix index.

    Args:
        drugs: Records in store order; a record's position is its handle

    Returns:
        Dict mapping word or prefix -> set of record positions
    """
    index: Dict[str, Set[int]] = defaultdict(set)
    for pos, drug in enumerate(drugs):
        for word in split_words(drug.brand_name) + split_words(drug.generic_name):
            for key in word_keys(word):
                index[key].add(pos)
    return dict(index)


def lookup_candidates(index: Dict[str, Set[int]], query: str) -> List[int]:
    """
    Union the positions of every query word found in the index.

    Returns:
        Record positions in ascending order
    """
    positions: Set[int] = set()
    for word in split_words(query):
        if len(word) < MIN_TOKEN_LENGTH:
            continue
        positions.update(index.get(word, ()))
    return sorted(positions)
