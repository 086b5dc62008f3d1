"""
Soundex-style sound codes for drug names, to catch transcription errors that keep the
opening sound and consonant shape of a word.
"""
from collections import defaultdict
from typing import Dict, Iterable, Set

from ..config import PHONETIC_CODE_LENGTH
from ..data.records import Drug
from .text import letters_only

# Consonant classes: labial, guttural/sibilant, dental, liquid, nasal, rhotic
PHONETIC_CLASSES = {
    **dict.fromkeys("bfpv", "1"),
    **dict.fromkeys("cgjkqsxz", "2"),
    **dict.fromkeys("dt", "3"),
    "l": "4",
    **dict.fromkeys("mn", "5"),
    "r": "6",
}


def phonetic_code(name: str) -> str:
    """
    Encode a name as its first letter followed by consonant class digits.

    Vowels and h/w/y are dropped and break a run, so the same class on both sides of
    a vowel is written twice. Adjacent repeats of a class collapse to one digit.
    The code is zero-padded or truncated to PHONETIC_CODE_LENGTH.

    Returns:
        str: The code, or "" for a name without letters
    """
    letters = letters_only(name)
    if not letters:
        return ""

    code = letters[0].upper()
    previous = ""
    for char in letters[1:]:
        digit = PHONETIC_CLASSES.get(char)
        if digit is None:
            previous = ""
            continue
        if digit != previous:
            code += digit
        previous = digit
    return code.ljust(PHONETIC_CODE_LENGTH, "0")[:PHONETIC_CODE_LENGTH]


def build_phonetic_index(drugs: Iterable[Drug]) -> Dict[str, Set[int]]:
    """Map each brand and generic name code to the positions of the records carrying it."""
    index: Dict[str, Set[int]] = defaultdict(set)
    for pos, drug in enumerate(drugs):
        for name in drug.names:
            code = phonetic_code(name)
            if code:
                index[code].add(pos)
    return dict(index)
