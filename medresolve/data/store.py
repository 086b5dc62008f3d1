"""
In-memory drug store: loads the reference dataset once, builds the token and phonetic
indexes, and signals readiness to every waiting caller.
"""
import logging
import threading
import concurrent.futures
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from ..config import DRUG_DATABASE
from ..utils.phonetic import build_phonetic_index
from ..utils.tokens import build_token_index
from .load import fetch_csv_text, parse_drug_csv
from .records import Drug

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")


@dataclass(frozen=True)
class IndexSnapshot:
    """Records plus both indexes, published together once built."""
    drugs: List[Drug] = field(default_factory=list)
    token_index: Dict[str, Set[int]] = field(default_factory=dict)
    phonetic_index: Dict[str, Set[int]] = field(default_factory=dict)
    failed: bool = False


class DrugStore:
    """
    Owns the Record Store and both indexes.

    The first call to `ensure_loaded` fetches, parses and indexes the dataset; callers
    arriving while that is in flight wait on the same Future instead of fetching again.
    A failed load publishes an empty snapshot so waiters are always released.
    """

    def __init__(self, source: Path | str = DRUG_DATABASE,
                 fetcher: Optional[Callable[[Path | str], str]] = None):
        self.source = source
        self._fetcher = fetcher or fetch_csv_text
        self._lock = threading.Lock()
        self._loading: Optional[concurrent.futures.Future] = None
        self._snapshot: Optional[IndexSnapshot] = None

    @property
    def failed(self) -> bool:
        snapshot = self._snapshot
        return snapshot is not None and snapshot.failed

    def is_ready(self) -> bool:
        return self._snapshot is not None

    def ensure_loaded(self) -> List[Drug]:
        """Load the dataset once and return its records."""
        return self._wait(timeout=None).drugs

    def snapshot(self, timeout: Optional[float] = None) -> IndexSnapshot:
        """
        Return the published records and indexes, loading them if needed.

        Raises:
            concurrent.futures.TimeoutError: if the build is not done within `timeout`
        """
        return self._wait(timeout)

    def wait_until_indexed(self, timeout: Optional[float] = None) -> bool:
        """Block until both indexes are built; False if `timeout` ran out first."""
        try:
            self._wait(timeout)
        except concurrent.futures.TimeoutError:
            return False
        return True

    def reset(self) -> None:
        """Drop the current load; the next caller triggers a fresh fetch."""
        with self._lock:
            self._loading = None
            self._snapshot = None

    def _wait(self, timeout: Optional[float]) -> IndexSnapshot:
        with self._lock:
            future = self._loading
            owner = future is None
            if owner:
                future = self._loading = concurrent.futures.Future()
        if owner:
            self._load(future)
        return future.result(timeout=timeout)

    def _load(self, future: concurrent.futures.Future) -> None:
        try:
            text = self._fetcher(self.source)
            drugs = parse_drug_csv(text)
            snapshot = IndexSnapshot(
                drugs=drugs,
                token_index=build_token_index(drugs),
                phonetic_index=build_phonetic_index(drugs),
            )
            logging.info(
                f"Drug database indexed: {len(drugs)} drugs, "
                f"{len(snapshot.token_index)} tokens, {len(snapshot.phonetic_index)} sound codes"
            )
        except Exception as e:
            logging.error(f"Failed to load drug database from {self.source}: {e}")
            snapshot = IndexSnapshot(failed=True)

        with self._lock:
            # A reset during the build leaves this load orphaned
            if self._loading is future:
                self._snapshot = snapshot
        future.set_result(snapshot)
