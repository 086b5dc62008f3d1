"""
Known misheard or misspelled drug names and the canonical term to search for instead.
"""
import json
import logging
from pathlib import Path

from ..config import ALIASES_PATH

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")

# Common speech-to-text and typing errors -> canonical generic name
KNOWN_ALIASES = {
    "metaflorin": "metformin",
    "metforman": "metformin",
    "metformine": "metformin",
    "met forming": "metformin",
    "paracetamole": "paracetamol",
    "paracetemol": "paracetamol",
    "parasitamol": "paracetamol",
    "asprin": "aspirin",
    "aspirine": "aspirin",
    "ibuprofin": "ibuprofen",
    "ibuprofine": "ibuprofen",
    "amoksisilin": "amoxicillin",
    "amoxycillin": "amoxicillin",
    "ciprofloxacine": "ciprofloxacin",
    "atorvastatine": "atorvastatin",
    "simvastatine": "simvastatin",
    "amlodipin": "amlodipine",
    "lisinipril": "lisinopril",
    "omeprazol": "omeprazole",
    "levothyroxin": "levothyroxine",
    "cetirizin": "cetirizine",
    "salbutamole": "salbutamol",
    "diclofenak": "diclofenac",
    "losarten": "losartan",
    "glibenclamid": "glibenclamide",
}


def load_aliases(path: Path = ALIASES_PATH) -> dict:
    """
    Load the alias table: the built-in entries with any overrides from `path` on top.

    Args:
        path: JSON file holding {"variant": "canonical"}

    Returns:
        dict: mapping lower-cased variant -> lower-cased canonical term
    """
    aliases = dict(KNOWN_ALIASES)
    if not path.exists():
        logging.info(f"No alias overrides at {path}; using {len(aliases)} built-in aliases.")
        return aliases
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        overrides = {k.lower().strip(): v.lower().strip() for k, v in data.items()}
        aliases.update(overrides)
        logging.info(f"Loaded {len(overrides)} alias overrides from {path}")
    except Exception as e:
        logging.error(f"Error loading aliases from {path}: {e}")
    return aliases
