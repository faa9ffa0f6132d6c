"""Tests for loading.py — JSON files, GEDCOM normalization, partial dates."""

import json

import pytest

from loading import (
    extract_numeric_id,
    load_json,
    normalize_gedcom,
    parse_partial_date,
    person_from_json,
    relationship_from_json,
)
from models import FEMALE, MALE, PARENT, SPOUSE, UNKNOWN, PartialDate, Relationship


class FakeRecord:
    """Stand-in for a ged4py record: xref_id, value and sub-records by tag."""

    def __init__(self, xref_id=None, value=None, **subs):
        self.xref_id = xref_id
        self.value = value
        self._subs = {tag: recs if isinstance(recs, list) else [recs] for tag, recs in subs.items()}

    def sub_tag(self, tag):
        recs = self._subs.get(tag)
        return recs[0] if recs else None

    def sub_tags(self, tag):
        return self._subs.get(tag, [])


class FakeReader:
    def __init__(self, individuals, families):
        self._records = {"INDI": individuals, "FAM": families}

    def records0(self, tag):
        return iter(self._records[tag])


def indi(xref, name, sex=None, birth=None, death=None):
    subs = {"NAME": FakeRecord(value=name)}
    if sex:
        subs["SEX"] = FakeRecord(value=sex)
    if birth:
        subs["BIRT"] = FakeRecord(DATE=FakeRecord(value=birth))
    if death:
        subs["DEAT"] = FakeRecord(DATE=FakeRecord(value=death))
    return FakeRecord(xref, **subs)


class TestParsePartialDate:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("25 NOV 1954", PartialDate(25, 11, 1954)),
            ("NOV 1954", PartialDate(month=11, year=1954)),
            ("1698", PartialDate(year=1698)),
            ("ABT 1905", PartialDate(year=1905)),
            ("(About:1746-00-00)", PartialDate(year=1746)),
            ("(1839-08-29)", PartialDate(29, 8, 1839)),
            ("(01-27-1920)", PartialDate(27, 1, 1920)),
            ("(1/15/1957)", PartialDate(15, 1, 1957)),
            ("(04 05 1911)", PartialDate(5, 4, 1911)),
            ("(02 May1838)", PartialDate(2, 5, 1838)),
            ("(11 Aug. 1968)", PartialDate(11, 8, 1968)),
            ("(April 17, 1850)", PartialDate(17, 4, 1850)),
            ("(SEPT. 17,1910)", PartialDate(17, 9, 1910)),
            ("(May, 1837)", PartialDate(month=5, year=1837)),
            ("(1789?)", PartialDate(year=1789)),
            ("(around 1855)", PartialDate(year=1855)),
        ],
    )
    def test_formats(self, text, expected):
        assert parse_partial_date(text) == expected

    @pytest.mark.parametrize("text", [None, "", "()", "unknown", "13-45-1900", "Smarch 1900"])
    def test_unparseable(self, text):
        assert parse_partial_date(text) is None


class TestPartialDate:
    def test_str(self):
        assert str(PartialDate(12, 3, 1950)) == "12.3.1950"
        assert str(PartialDate(month=3, year=1950)) == "3.1950"
        assert str(PartialDate(year=1950)) == "1950"

    def test_sort_key(self):
        assert PartialDate(year=1950).sort_key == (1950, 1, 1)
        assert PartialDate(day=5).sort_key is None
        assert PartialDate(2, 1, 1950).sort_key > PartialDate(1, 1, 1950).sort_key


class TestJson:
    def test_person_from_json(self):
        person = person_from_json(
            {"id": 3, "name": "Carl", "surname": "Nowak", "gender": "male",
             "dateOfBirth": [12, 3, 1980], "dateOfDeath": [None, None, 2020]}
        )
        assert person.id == 3
        assert person.display_name == "Carl Nowak"
        assert person.gender == MALE
        assert person.date_of_birth == PartialDate(12, 3, 1980)
        assert person.date_of_death == PartialDate(year=2020)

    def test_person_defaults(self):
        person = person_from_json({"id": "x1", "name": "Zoe", "gender": "other"})
        assert person.surname is None
        assert person.gender == UNKNOWN
        assert person.date_of_birth is None

    def test_person_without_id(self):
        with pytest.raises(ValueError, match="without id"):
            person_from_json({"name": "Nobody"})

    def test_malformed_date(self):
        with pytest.raises(ValueError, match="day, month, year"):
            person_from_json({"id": 1, "dateOfBirth": [1950]})

    def test_relationship_from_json(self):
        assert relationship_from_json({"source": 1, "target": 3, "type": "parent"}) == Relationship(1, 3, PARENT)

    def test_unknown_relationship_type(self):
        with pytest.raises(ValueError, match="Unknown relationship type"):
            relationship_from_json({"source": 1, "target": 3, "type": "friend"})

    def test_relationship_missing_field(self):
        with pytest.raises(ValueError, match="missing"):
            relationship_from_json({"source": 1, "type": "parent"})

    def test_load_json(self, tmp_path):
        nodes_path = tmp_path / "nodes.json"
        links_path = tmp_path / "links.json"
        nodes_path.write_text(json.dumps([
            {"id": 1, "name": "Anna", "surname": "Nowak", "gender": "female"},
            {"id": 3, "name": "Carl", "surname": "Nowak", "gender": "male"},
        ]), encoding="utf-8")
        links_path.write_text(json.dumps([{"source": 1, "target": 3, "type": "parent"}]), encoding="utf-8")

        persons, relationships = load_json(nodes_path, links_path)
        assert [p.name for p in persons] == ["Anna", "Carl"]
        assert persons[0].gender == FEMALE
        assert relationships == [Relationship(1, 3, PARENT)]


class TestGedcom:
    def test_extract_numeric_id(self):
        assert extract_numeric_id("@I_347421849@") == 347421849
        assert extract_numeric_id("I674624289") == 674624289

    def test_extract_numeric_id_invalid(self):
        with pytest.raises(ValueError, match="No numeric ID"):
            extract_numeric_id("@FAM@")

    def test_normalize(self):
        husband = indi("@I1@", ("John", "Smith", ""), sex="M", birth="25 NOV 1954")
        wife = indi("@I2@", "Mary /Jones/", sex="F", death="ABT 2001")
        child = indi("@I3@", ("Ann", "Smith", ""))
        family = FakeRecord("@F1@", HUSB=husband, WIFE=wife, CHIL=[child])
        reader = FakeReader([husband, wife, child], [family])

        persons, relationships = normalize_gedcom(reader)

        assert [(p.id, p.name, p.surname, p.gender) for p in persons] == [
            (1, "John", "Smith", MALE),
            (2, "Mary", "Jones", FEMALE),
            (3, "Ann", "Smith", UNKNOWN),
        ]
        assert persons[0].date_of_birth == PartialDate(25, 11, 1954)
        assert persons[1].date_of_death == PartialDate(year=2001)
        assert relationships == [
            Relationship(1, 2, SPOUSE),
            Relationship(1, 3, PARENT),
            Relationship(2, 3, PARENT),
        ]

    def test_single_parent_family(self):
        mother = indi("@I1@", ("Eve", "", ""), sex="F")
        child = indi("@I2@", ("Abel", "", ""))
        family = FakeRecord("@F1@", WIFE=mother, CHIL=[child])
        persons, relationships = normalize_gedcom(FakeReader([mother, child], [family]))

        assert persons[0].surname is None
        assert relationships == [Relationship(1, 2, PARENT)]
