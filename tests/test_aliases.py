import json

from medresolve.utils.aliases import KNOWN_ALIASES, load_aliases


def test_builtin_aliases_when_file_missing(tmp_path):
    assert load_aliases(tmp_path / "aliases.json") == KNOWN_ALIASES


def test_overrides_are_merged_and_lowercased(tmp_path):
    path = tmp_path / "aliases.json"
    path.write_text(json.dumps({"Zokor Pill ": "Simvastatin", "metaflorin": "metformin hcl"}), encoding="utf-8")
    aliases = load_aliases(path)
    assert aliases["zokor pill"] == "simvastatin"
    assert aliases["metaflorin"] == "metformin hcl"
    assert aliases["asprin"] == "aspirin"


def test_invalid_file_falls_back_to_builtins(tmp_path):
    path = tmp_path / "aliases.json"
    path.write_text("not json", encoding="utf-8")
    assert load_aliases(path) == KNOWN_ALIASES


def test_builtin_keys_are_normalized():
    for variant, canonical in KNOWN_ALIASES.items():
        assert variant == variant.lower().strip()
        assert canonical == canonical.lower().strip()
        assert variant != canonical
