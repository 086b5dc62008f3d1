import csv
import io
import logging
from pathlib import Path

import pandas as pd
import requests

from ..config import FETCH_TIMEOUT
from .records import Drug, RECORD_COLUMNS

# Setup logging for data loading
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")


def _is_url(source) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def fetch_csv_text(source: Path | str) -> str:
    """Fetch the raw drug CSV from a local path or an http(s) URL."""
    logging.info(f"Fetching drug database: {source}")
    if _is_url(source):
        resp = requests.get(str(source), timeout=FETCH_TIMEOUT)
        resp.raise_for_status()
        return resp.text
    path = Path(source)
    if not path.exists():
        logging.error(f"Drug database file not found: {path}")
        raise FileNotFoundError(f"Drug database file not found: {path}")
    return path.read_text(encoding="utf-8")


def parse_drug_csv(text: str) -> list[Drug]:
    """
    Parse the drug CSV into records.

    The first line is a header and is skipped. Quoted fields may contain commas.
    Rows with fewer than six fields are dropped; extra trailing fields are ignored.
    """
    if not text or not text.strip():
        return []

    # Short rows are dropped by raw field count; empty fields in full rows stay ""
    width = len(RECORD_COLUMNS)
    rows = list(csv.reader(io.StringIO(text), skipinitialspace=True))[1:]
    rows = [row for row in rows if row]
    complete = [row[:width] for row in rows if len(row) >= width]
    if len(rows) - len(complete):
        logging.info(f"Skipped {len(rows) - len(complete)} malformed drug rows")
    if not complete:
        return []

    df = pd.DataFrame(complete, columns=RECORD_COLUMNS, dtype=str)
    df = df.apply(lambda col: col.str.strip())
    return [Drug(**row) for row in df.to_dict(orient="records")]
