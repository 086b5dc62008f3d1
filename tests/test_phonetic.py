from medresolve.data.load import parse_drug_csv
from medresolve.utils.phonetic import build_phonetic_index, phonetic_code


def test_known_codes():
    assert phonetic_code("Metformin") == "M31655"
    assert phonetic_code("Ciprofloxacin") == "C16142"
    assert phonetic_code("Amoxil") == "A52400"


def test_sound_alike_names_collide():
    assert phonetic_code("amoxicilin") == phonetic_code("Amoxicillin")
    assert phonetic_code("ibuprofn") == phonetic_code("Ibuprofen")


def test_adjacent_classes_collapse():
    assert phonetic_code("Nann") == "N50000"
    assert phonetic_code("Babb") == "B10000"


def test_vowels_break_runs():
    assert phonetic_code("Nanan") == "N55000"
    assert phonetic_code("Shy") == "S00000"


def test_code_length_is_fixed():
    for name in ("Ox", "Paracetamol", "Ciprofloxacin Hydrochloride"):
        assert len(phonetic_code(name)) == 6


def test_names_without_letters():
    assert phonetic_code("") == ""
    assert phonetic_code("500") == ""


def test_build_phonetic_index(sample_csv):
    index = build_phonetic_index(parse_drug_csv(sample_csv))
    assert index["M31655"] == {0}
    assert 3 in index[phonetic_code("Amoxicillin")]
    assert 3 in index[phonetic_code("Amoxil")]
    assert "" not in index
