from dataclasses import dataclass

# Column order of the reference CSV
RECORD_COLUMNS = ["reg_id", "generic_name", "brand_name", "strength", "form", "category"]


@dataclass(frozen=True)
class Drug:
    """One reference drug entry."""
    reg_id: str
    generic_name: str
    brand_name: str
    strength: str
    form: str
    category: str

    @property
    def names(self) -> tuple[str, ...]:
        """Non-empty generic and brand names, generic first."""
        return tuple(name for name in (self.generic_name, self.brand_name) if name)

    def matches_name(self, name: str) -> bool:
        """Case-insensitive equality against the generic or brand name."""
        lowered = name.lower()
        return any(n.lower() == lowered for n in self.names)
