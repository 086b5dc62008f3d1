import os
from pathlib import Path

# Root directories
ROOT = Path(__file__).resolve().parents[1]
RAW = ROOT / "data" / "raw"
PROC = ROOT / "data" / "processed"

# Drug reference dataset: a local path or an http(s) URL
DRUG_DATABASE = os.environ.get(
    "MEDRESOLVE_DRUG_DATABASE", str(RAW / "cleaned_drug_database.csv")
)

# Optional {variant: canonical} overrides merged over the built-in alias table
ALIASES_PATH = PROC / "aliases.json"

# Seconds allowed for the HTTP fetch of the dataset
FETCH_TIMEOUT = 10
# Seconds a resolver call waits for the index build (None waits forever)
INDEX_WAIT_TIMEOUT = 30.0

# Search limits
MIN_QUERY_LENGTH = 2
MIN_TOKEN_LENGTH = 2
PHONETIC_CODE_LENGTH = 6
FUZZY_SCAN_LIMIT = 5000
DEFAULT_MAX_EDIT_DISTANCE = 2
