"""Shared fixtures: the Nowak family and helpers for building stores."""

import matplotlib

matplotlib.use("Agg")

import pytest

from models import FEMALE, MALE, PARENT, SPOUSE, PartialDate, Person, Relationship
from store import GraphStore


def parent(source, target):
    return Relationship(source=source, target=target, type=PARENT)


def spouse(source, target):
    return Relationship(source=source, target=target, type=SPOUSE)


@pytest.fixture
def family_people():
    """Anna and Bob with their children Carl and Dana."""
    return [
        Person(1, "Anna", "Nowak", FEMALE, PartialDate(4, 7, 1950)),
        Person(2, "Bob", "Nowak", MALE, PartialDate(year=1948)),
        Person(3, "Carl", "Nowak", MALE, PartialDate(12, 3, 1980)),
        Person(4, "Dana", "Nowak", FEMALE),
    ]


@pytest.fixture
def family_edges():
    return [parent(1, 3), parent(2, 3), parent(1, 4), parent(2, 4), spouse(1, 2)]


@pytest.fixture
def family_store(family_people, family_edges):
    return GraphStore(family_people, family_edges)


@pytest.fixture
def cousin_store(family_people, family_edges):
    """
    The Nowak family plus Anna's sister Eve, Eve's son Frank and their mother Greta.

    Frank is a first cousin of Carl and Dana.
    """
    people = family_people + [
        Person(5, "Eve", "Kowalska", FEMALE),
        Person(6, "Frank", "Kowalski", MALE),
        Person(7, "Greta", "Nowak", FEMALE),
    ]
    edges = family_edges + [parent(5, 6), parent(7, 1), parent(7, 5)]
    return GraphStore(people, edges)


def pairs(edges):
    """Unordered endpoint pairs of a list of edges."""
    return {frozenset((e.source, e.target)) for e in edges}
