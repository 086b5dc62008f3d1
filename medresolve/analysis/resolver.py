import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from rapidfuzz.distance import Levenshtein

from ..config import (
    DEFAULT_MAX_EDIT_DISTANCE,
    FUZZY_SCAN_LIMIT,
    INDEX_WAIT_TIMEOUT,
    MIN_QUERY_LENGTH,
)
from ..data.records import Drug
from ..data.store import DrugStore, IndexSnapshot
from ..utils.aliases import load_aliases
from ..utils.phonetic import phonetic_code
from ..utils.text import normalize_query
from ..utils.tokens import lookup_candidates

# ----------------------------------------------------------------------------
# Scores (higher is more confident)
EXACT_SCORE = 100           # Query equals the generic or brand name
PREFIX_SCORE = 80           # A name starts with the query
SUBSTRING_SCORE = 60        # A name contains the query
INDEX_SCORE = 40            # Only a word/prefix index hit

ALIAS_SCORE = 95            # Fuzzy tier 1: alias target equals a name
INDEXED_SCORE = 90          # Fuzzy tier 2: standard search hit
PHONETIC_SCORE = 70         # Fuzzy tier 3: same sound code
EDIT_BASE_SCORE = 60        # Fuzzy tier 4: 60 - 15 per edit, floored at 20
EDIT_PENALTY = 15
EDIT_MIN_SCORE = 20

# Early termination: stop scoring after limit * this many candidates, once one is >= PREFIX_SCORE
CANDIDATE_FACTOR = 3
# ----------------------------------------------------------------------------

# Match kinds
EXACT, PREFIX, SUBSTRING, INDEX = "exact", "prefix", "substring", "index"
ALIAS, PHONETIC, FUZZY = "alias", "phonetic", "fuzzy"

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")


@dataclass(frozen=True)
class Match:
    drug: Drug
    score: int
    kind: str
    position: int = -1


@dataclass(frozen=True)
class Correction:
    corrected: str
    confidence: int
    original: str


@dataclass
class NameValidation:
    valid: bool
    drug: Optional[Drug] = None
    suggestions: List[str] = field(default_factory=list)


def score_candidate(drug: Drug, query: str) -> tuple[int, str]:
    """Score a lower-cased query against a record's generic and brand names."""
    names = [n.lower() for n in drug.names]
    if query in names:
        return EXACT_SCORE, EXACT
    if any(n.startswith(query) for n in names):
        return PREFIX_SCORE, PREFIX
    if any(query in n for n in names):
        return SUBSTRING_SCORE, SUBSTRING
    return INDEX_SCORE, INDEX


def edit_score(distance: int) -> int:
    return max(EDIT_MIN_SCORE, EDIT_BASE_SCORE - distance * EDIT_PENALTY)


def edit_threshold(query: str, max_edit_distance: int) -> int:
    """Short queries keep the absolute cap; long ones allow a third of their length."""
    return max(max_edit_distance, len(query) // 3)


def closest_name(drug: Drug, query: str) -> str:
    """The record name nearest to the query, generic first on ties."""
    return min(drug.names, key=lambda name: Levenshtein.distance(query, name.lower()))


def _by_score(matches: List[Match]) -> List[Match]:
    # sorted() is stable, so equal scores keep encounter order
    return sorted(matches, key=lambda m: m.score, reverse=True)


class DrugResolver:
    """
    Resolve free-text or transcribed drug names against a DrugStore.

    Args:
        store: The loaded (or lazily loading) drug store
        aliases: Variant -> canonical term table; the built-in table plus overrides if None
        wait_timeout: Seconds to wait for the index build before giving up on a query
    """

    def __init__(self, store: DrugStore, aliases: Optional[dict] = None,
                 wait_timeout: Optional[float] = INDEX_WAIT_TIMEOUT):
        self.store = store
        self.aliases = dict(aliases) if aliases is not None else load_aliases()
        self.wait_timeout = wait_timeout

    def _snapshot(self) -> Optional[IndexSnapshot]:
        try:
            return self.store.snapshot(timeout=self.wait_timeout)
        except concurrent.futures.TimeoutError:
            logging.warning(f"Drug index not ready after {self.wait_timeout}s; returning no results")
            return None

    def resolve_alias(self, query: str) -> str:
        """Canonical term for a known alias, otherwise the normalized query itself."""
        term = normalize_query(query)
        return self.aliases.get(term, term)

    # ------------------------------------------------------------------
    def search_matches(self, query: str, limit: int = 10) -> List[Match]:
        """Exact, prefix and substring search over the token index candidates."""
        term = normalize_query(query)
        if len(term) < MIN_QUERY_LENGTH:
            return []
        term = self.aliases.get(term, term)

        snapshot = self._snapshot()
        if snapshot is None:
            return []

        candidates = lookup_candidates(snapshot.token_index, term)
        if not candidates:
            return []

        scored: List[Match] = []
        strong = False
        for pos in candidates:
            score, kind = score_candidate(snapshot.drugs[pos], term)
            scored.append(Match(snapshot.drugs[pos], score, kind, pos))
            strong = strong or score >= PREFIX_SCORE
            if strong and len(scored) >= limit * CANDIDATE_FACTOR:
                break

        return _by_score(scored)[:limit]

    def search(self, query: str, limit: int = 10) -> List[Drug]:
        return [m.drug for m in self.search_matches(query, limit)]

    def find_exact(self, name: str) -> Optional[Drug]:
        """First record whose generic or brand name equals `name`, ignoring case."""
        term = normalize_query(name)
        if not term:
            return None
        for drug in self.store.ensure_loaded():
            if drug.matches_name(term):
                return drug
        return None

    # ------------------------------------------------------------------
    def fuzzy_search(self, query: str, limit: int = 10,
                     max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE) -> List[Match]:
        """
        Tiered fuzzy search: alias, indexed search, phonetic code, then bounded
        edit distance. Later tiers only run while fewer than `limit` results exist.
        """
        term = normalize_query(query)
        if len(term) < MIN_QUERY_LENGTH:
            return []

        snapshot = self._snapshot()
        if snapshot is None:
            return []

        results: List[Match] = []
        seen = set()

        def add(pos: int, score: int, kind: str) -> None:
            seen.add(pos)
            results.append(Match(snapshot.drugs[pos], score, kind, pos))

        # 1. Alias target equal to a record name
        canonical = self.aliases.get(term)
        if canonical:
            for pos in lookup_candidates(snapshot.token_index, canonical):
                if snapshot.drugs[pos].matches_name(canonical):
                    add(pos, ALIAS_SCORE, ALIAS)
            term = canonical

        # 2. Standard indexed search
        for match in self.search_matches(term, limit):
            if match.position not in seen:
                add(match.position, INDEXED_SCORE, match.kind)
        if len(results) >= limit:
            return _by_score(results)[:limit]

        # 3. Phonetic fallback
        for pos in sorted(snapshot.phonetic_index.get(phonetic_code(term), ())):
            if len(results) >= limit:
                break
            if pos not in seen:
                add(pos, PHONETIC_SCORE, PHONETIC)

        # 4. Edit distance over a bounded sample
        if len(results) < limit:
            threshold = edit_threshold(term, max_edit_distance)
            near = []
            for pos, drug in enumerate(snapshot.drugs[:FUZZY_SCAN_LIMIT]):
                if pos in seen or not drug.names:
                    continue
                distance = min(
                    Levenshtein.distance(term, name.lower(), score_cutoff=threshold)
                    for name in drug.names
                )
                if distance <= threshold:
                    near.append((distance, pos))
            for distance, pos in sorted(near)[:limit - len(results)]:
                add(pos, edit_score(distance), FUZZY)

        return _by_score(results)[:limit]

    def correct_name(self, query: str) -> Correction:
        """
        Best-guess correction of a drug name.

        Confidence is 95 for an alias, 100 for an exact record name, the top fuzzy score
        otherwise, and 0 (original returned unchanged) when nothing matched.
        """
        original = query
        try:
            term = normalize_query(query)
            if term in self.aliases:
                return Correction(self.aliases[term], ALIAS_SCORE, original)

            drug = self.find_exact(term)
            if drug:
                name = next(n for n in drug.names if n.lower() == term)
                return Correction(name, EXACT_SCORE, original)

            matches = self.fuzzy_search(term, limit=1)
            if matches:
                return Correction(closest_name(matches[0].drug, term), matches[0].score, original)
        except Exception as e:
            logging.error(f"Name correction failed for '{query}': {e}")
        return Correction(original, 0, original)

    # ------------------------------------------------------------------
    def suggestions(self, partial: str, limit: int = 5) -> List[str]:
        """Unique display names for autocomplete, brand name before generic."""
        names: List[str] = []
        for drug in self.search(partial, limit):
            for name in (drug.brand_name, drug.generic_name):
                if name and name not in names:
                    names.append(name)
            if len(names) >= limit:
                break
        return names[:limit]

    def validate_name(self, name: str) -> NameValidation:
        drug = self.find_exact(name)
        if drug:
            return NameValidation(valid=True, drug=drug)
        return NameValidation(valid=False, suggestions=self.suggestions(name, 5))

    def drug_context(self, names: Iterable[str]) -> str:
        """Reference lines for the given names, formatted for an assistant prompt."""
        lines = []
        for name in names:
            drug = self.find_exact(name)
            if drug:
                lines.append(
                    f"- {drug.brand_name} ({drug.generic_name}): {drug.strength} {drug.form}, "
                    f"Category: {drug.category}"
                )
        if not lines:
            return ""
        return "\n\nRelevant drug information from database:\n" + "\n".join(lines)

    def common_brand_names(self, limit: int = 100) -> str:
        brands = dict.fromkeys(d.brand_name for d in self.store.ensure_loaded() if d.brand_name)
        return ", ".join(list(brands)[:limit])
