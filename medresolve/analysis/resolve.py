import argparse
import logging

from ..config import DEFAULT_MAX_EDIT_DISTANCE, DRUG_DATABASE
from ..data.store import DrugStore
from .resolver import DrugResolver

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")

MODES = ("search", "fuzzy", "correct")


def run(
    query: str,
    source: str = DRUG_DATABASE,
    mode: str = "fuzzy",
    limit: int = 10,
    max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    resolver: DrugResolver | None = None,
) -> list[str]:
    """Resolve one query and return the printed result lines."""
    if resolver is None:
        resolver = DrugResolver(DrugStore(source))

    if mode == "search":
        lines = [
            f"{m.score:>3}  {m.kind:<9} {m.drug.reg_id}  {m.drug.generic_name} / {m.drug.brand_name}"
            for m in resolver.search_matches(query, limit)
        ]
    elif mode == "fuzzy":
        lines = [
            f"{m.score:>3}  {m.kind:<9} {m.drug.reg_id}  {m.drug.generic_name} / {m.drug.brand_name}"
            for m in resolver.fuzzy_search(query, limit, max_edit_distance)
        ]
    elif mode == "correct":
        c = resolver.correct_name(query)
        lines = [f"{c.original} -> {c.corrected} (confidence {c.confidence})"]
    else:
        raise ValueError(f"Unknown mode: {mode}")

    if not lines:
        lines = [f"No matches for '{query}'"]
    for line in lines:
        print(line)
    return lines


def main():
    """Parse command-line arguments and resolve a drug name."""
    parser = argparse.ArgumentParser(
        description="Resolve a free-text or transcribed drug name against the reference dataset"
    )
    parser.add_argument("query", help="Drug name to resolve")
    parser.add_argument(
        "--source",
        type=str,
        default=DRUG_DATABASE,
        help="Drug database CSV path or URL",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="fuzzy",
        help="search: exact/prefix/substring; fuzzy: tiered fuzzy search; correct: name correction",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Maximum number of results",
    )
    parser.add_argument(
        "--max-edit-distance",
        type=int,
        default=DEFAULT_MAX_EDIT_DISTANCE,
        help="Absolute edit-distance cap for short queries",
    )
    args = parser.parse_args()
    run(
        query=args.query,
        source=args.source,
        mode=args.mode,
        limit=args.limit,
        max_edit_distance=args.max_edit_distance,
    )


if __name__ == "__main__":
    main()
