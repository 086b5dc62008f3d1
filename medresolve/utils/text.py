# Text normalization shared by the indexes and the resolver
import re, unicodedata


def normalize(txt: str) -> str:
    if txt is None:
        return ""
    txt = unicodedata.normalize("NFKD", txt.lower())
    txt = re.sub(r"[^a-z0-9 ]", " ", txt)
    return re.sub(r"\s+", " ", txt).strip()


def normalize_query(txt: str) -> str:
    """Lower-case and trim; inner punctuation is kept to line up with indexed words."""
    if txt is None:
        return ""
    return txt.lower().strip()


def split_words(txt: str) -> list[str]:
    return normalize_query(txt).split()


def letters_only(txt: str) -> str:
    return re.sub(r"[^a-z]", "", normalize(txt))
