"""Loaders for JSON node/link files and GEDCOM files, plus partial date parsing."""

import json
import logging
import re
from pathlib import Path

from ged4py import GedcomReader

from models import (
    FEMALE,
    GENDERS,
    MALE,
    PARENT,
    RELATIONSHIP_TYPES,
    SPOUSE,
    UNKNOWN,
    PartialDate,
    Person,
    Relationship,
)

logger = logging.getLogger(__name__)


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

SEX_MAP = {"M": MALE, "F": FEMALE}

_QUALIFIERS = re.compile(
    r"^(ABOUT|ABT\.?|BEFORE|BEF\.?|AFTER|AFT\.?|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)

# (regex, names of the captured groups in order); "mon" is a month name
_DATE_PATTERNS = [
    (r"^(\d{4})-(\d{2})-(\d{2})$", ("year", "month", "day")),  # 1839-08-29, 1746-00-00
    (r"^(\d{1,2})\s*([A-Za-z]+)\.?\s*(\d{4})$", ("day", "mon", "year")),  # 25 NOV 1954, 02 May1838
    (r"^([A-Za-z]+)\.?,?\s*(\d{4})$", ("mon", "year")),  # NOV 1954, May, 1837
    (r"^(\d{4})$", ("year",)),  # 1698
    (r"^(\d{1,2})[-/\s](\d{1,2})[-/\s](\d{4})$", ("month", "day", "year")),  # 01-27-1920, 04 05 1911
    (r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", ("mon", "day", "year")),  # April 17, 1850
]


def parse_partial_date(date_str: str | None) -> PartialDate | None:
    """
    Parse a GEDCOM or free-form date string into a PartialDate.

    Parts missing from the string stay None; "00" month/day is treated as
    missing. Returns None if the string cannot be parsed.

    Handles formats like:
    - "25 NOV 1954"
    - "JAN 1905"
    - "ABOUT 1905"
    - "(1839-08-29)"
    - "(About:1746-00-00)"
    - "(01-27-1920)"
    - "(04 05 1911)"
    - "(02 May1838)"
    - "(11 Aug. 1968)"
    - "(SEPT. 17,1910)"
    - "(May, 1837)"
    - "(1789?)"
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = _QUALIFIERS.sub("", s).strip()
    if not s:
        return None

    for pattern, fields in _DATE_PATTERNS:
        match = re.match(pattern, s)
        if not match:
            continue

        parts: dict[str, int | None] = {}
        for field, value in zip(fields, match.groups()):
            if field == "mon":
                parts["month"] = MONTH_MAP.get(value.upper().rstrip("."))
                if parts["month"] is None:
                    break
            else:
                parts[field] = int(value) or None
        else:
            month, day = parts.get("month"), parts.get("day")
            if month is not None and not 1 <= month <= 12:
                continue
            if day is not None and not 1 <= day <= 31:
                continue
            return PartialDate(day=day, month=month, year=parts.get("year"))

    return None


# ============================================================================
# JSON (nodes.json / links.json)
# ============================================================================


def _date_from_json(value) -> PartialDate | None:
    """Convert a [day, month, year] array into a PartialDate."""
    if not value:
        return None
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"Expected [day, month, year], got: {value!r}")
    day, month, year = (int(v) if v else None for v in value)
    return PartialDate(day=day, month=month, year=year)


def person_from_json(record: dict) -> Person:
    if "id" not in record:
        raise ValueError(f"Node record without id: {record!r}")

    gender = record.get("gender") or UNKNOWN
    if gender not in GENDERS:
        gender = UNKNOWN

    return Person(
        id=record["id"],
        name=record.get("name"),
        surname=record.get("surname"),
        gender=gender,
        date_of_birth=_date_from_json(record.get("dateOfBirth")),
        date_of_death=_date_from_json(record.get("dateOfDeath")),
    )


def relationship_from_json(record: dict) -> Relationship:
    try:
        source, target, rel_type = record["source"], record["target"], record["type"]
    except KeyError as e:
        raise ValueError(f"Link record missing {e}: {record!r}") from None
    if rel_type not in RELATIONSHIP_TYPES:
        raise ValueError(f"Unknown relationship type {rel_type!r} in link: {record!r}")
    return Relationship(source=source, target=target, type=rel_type)


def load_json(nodes_path: Path, links_path: Path) -> tuple[list[Person], list[Relationship]]:
    """Load persons and relationships from the viewer's nodes/links JSON files."""
    with open(nodes_path, encoding="utf-8") as f:
        node_records = json.load(f)
    with open(links_path, encoding="utf-8") as f:
        link_records = json.load(f)

    persons = [person_from_json(r) for r in node_records]
    relationships = [relationship_from_json(r) for r in link_records]
    logger.info("Loaded %d nodes from %s and %d links from %s",
                len(persons), nodes_path, len(relationships), links_path)
    return persons, relationships


# ============================================================================
# GEDCOM
# ============================================================================


def extract_numeric_id(xref_id: str) -> int:
    """Extract numeric part from GEDCOM xref_id like '@I_347421849@' or 'I674624289'."""
    digits = re.sub(r"[^0-9]", "", xref_id)
    if not digits:
        raise ValueError(f"No numeric ID found in: {xref_id}")
    return int(digits)


def extract_name_parts(indi) -> tuple[str | None, str | None]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return (None, None)

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        given, surname, _ = name_rec.value
        return (given or None, surname or None)

    # Fallback: string format "Given /Surname/"
    match = re.match(r"^([^/]*)/([^/]*)/?", str(name_rec.value))
    if match:
        return (match.group(1).strip() or None, match.group(2).strip() or None)
    return (str(name_rec.value).strip() or None, None)


def extract_event_date(indi, tag: str) -> PartialDate | None:
    """Extract the date of an event tag (BIRT, DEAT, etc.)."""
    event = indi.sub_tag(tag)
    if event is None:
        return None

    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    if date_rec and date_rec.value:
        return parse_partial_date(str(date_rec.value))
    return None


def extract_gender(indi) -> str:
    sex_rec = indi.sub_tag("SEX")
    return SEX_MAP.get(sex_rec.value, UNKNOWN) if sex_rec else UNKNOWN


def normalize_gedcom(reader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract persons and relationships from parsed GEDCOM data.

    Each FAM record yields a spouse edge between husband and wife and a
    parent edge from each of them to every child.
    """
    persons: list[Person] = []
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        given_name, surname = extract_name_parts(rec)
        persons.append(
            Person(
                id=extract_numeric_id(rec.xref_id),
                name=given_name,
                surname=surname,
                gender=extract_gender(rec),
                date_of_birth=extract_event_date(rec, "BIRT"),
                date_of_death=extract_event_date(rec, "DEAT"),
            )
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue

        spouses = []
        for tag in ("HUSB", "WIFE"):
            ref = rec.sub_tag(tag)
            if ref and ref.xref_id:
                spouses.append(extract_numeric_id(ref.xref_id))

        if len(spouses) == 2:
            relationships.append(Relationship(source=spouses[0], target=spouses[1], type=SPOUSE))

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = extract_numeric_id(child.xref_id)
            for parent_id in spouses:
                relationships.append(Relationship(source=parent_id, target=child_id, type=PARENT))

    return persons, relationships


def load_gedcom(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Parse a GEDCOM file into persons and relationships."""
    reader = GedcomReader(str(filepath))
    persons, relationships = normalize_gedcom(reader)
    logger.info("Loaded %d persons and %d relationships from %s",
                len(persons), len(relationships), filepath)
    return persons, relationships
