import pytest

from medresolve.analysis.resolver import DrugResolver
from medresolve.data.store import DrugStore
from medresolve.utils.aliases import KNOWN_ALIASES

SAMPLE_CSV = """Reg_ID,Generic_Name,Brand_Name,Strength,Form,Category
DR-0001,Metformin,Glucophage,500mg,Tablet,Antidiabetic
DR-0002,Paracetamol,Panadol,500mg,Tablet,Analgesic
DR-0003,Ciprofloxacin,Ciproxin,250mg,Tablet,Antibiotic
DR-0004,Amoxicillin,Amoxil,500mg,Capsule,Antibiotic
DR-0005,Ibuprofen,Brufen,400mg,Tablet,NSAID
DR-0006,"Paracetamol, Caffeine",Panadol Extra,500mg/65mg,Tablet,Analgesic
DR-0007,Atorvastatin,Lipitor,20mg,Tablet,Statin

DR-0008,Omeprazole,,20mg,Capsule,Proton Pump Inhibitor
DR-0009,Broken
"""


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def store(sample_csv):
    """A store reading the sample dataset through an in-memory fetcher."""
    return DrugStore("memory://drugs", fetcher=lambda source: sample_csv)


@pytest.fixture
def resolver(store):
    return DrugResolver(store, aliases=KNOWN_ALIASES)
