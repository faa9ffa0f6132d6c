"""Data classes for family graph entities."""

from dataclasses import dataclass

PersonId = int | str

# Relationship types
PARENT = "parent"
SPOUSE = "spouse"
SIBLING = "sibling"
COUSIN = "cousin"

RELATIONSHIP_TYPES = (PARENT, SPOUSE, SIBLING, COUSIN)

# Genders
MALE = "male"
FEMALE = "female"
UNKNOWN = "unknown"

GENDERS = (MALE, FEMALE, UNKNOWN)


@dataclass(frozen=True)
class PartialDate:
    """A date whose day, month and year are each optional."""

    day: int | None = None
    month: int | None = None
    year: int | None = None

    def __str__(self) -> str:
        # 12.3.1950, 3.1950 or 1950
        parts = [f"{self.day}." if self.day else "", f"{self.month}." if self.month else ""]
        year = str(self.year) if self.year is not None else ""
        return "".join(parts) + year

    @property
    def sort_key(self) -> tuple[int, int, int] | None:
        if self.year is None:
            return None
        return (self.year, self.month or 1, self.day or 1)


@dataclass
class Person:
    id: PersonId
    name: str | None
    surname: str | None = None
    gender: str = UNKNOWN
    date_of_birth: PartialDate | None = None
    date_of_death: PartialDate | None = None

    @property
    def display_name(self) -> str:
        return " ".join(p for p in [self.name, self.surname] if p)


@dataclass(frozen=True)
class Relationship:
    source: PersonId
    target: PersonId
    type: str  # parent, spouse, sibling, cousin
