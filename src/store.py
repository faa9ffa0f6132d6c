"""In-memory store of people and typed relationships."""

import logging
from collections.abc import Iterable

from models import PARENT, RELATIONSHIP_TYPES, Person, PersonId, Relationship

logger = logging.getLogger(__name__)


class DataIntegrityError(ValueError):
    """The dataset is malformed and the graph cannot be trusted."""


class DanglingReferenceError(DataIntegrityError):
    def __init__(self, person_id: PersonId, edge: Relationship | None = None):
        self.person_id = person_id
        self.edge = edge
        if edge is None:
            message = f"Person ID {person_id!r} not found in graph"
        else:
            message = (
                f"Person ID {person_id!r} referenced by {edge.type} edge "
                f"{edge.source!r} -> {edge.target!r} not found in graph"
            )
        super().__init__(message)


class DuplicatePersonError(DataIntegrityError):
    def __init__(self, person_id: PersonId):
        self.person_id = person_id
        super().__init__(f"Duplicate person ID {person_id!r}")


def _pair_key(a: PersonId, b: PersonId, rel_type: str) -> tuple:
    # Symmetric lookups ignore orientation; parent edges keep it
    if rel_type == PARENT:
        return (rel_type, a, b)
    return (rel_type, frozenset((a, b)))


class GraphStore:
    """
    Holds Person nodes indexed by id and Relationship edges in insertion order.

    Every edge endpoint must reference a known person. The store does not
    deduplicate edges on insertion; `has_edge_between` lets callers check
    for an existing edge of a given type in either orientation.
    """

    def __init__(self, persons: Iterable[Person] = (), relationships: Iterable[Relationship] = ()):
        self._nodes: dict[PersonId, Person] = {}
        self._edges: list[Relationship] = []
        self._pairs: dict[tuple, int] = {}

        for person in persons:
            if person.id in self._nodes:
                raise DuplicatePersonError(person.id)
            self._nodes[person.id] = person

        for edge in relationships:
            self.add_edge(edge)

        logger.debug("Loaded %d people and %d relationships", len(self._nodes), len(self._edges))

    @property
    def nodes(self) -> list[Person]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Relationship]:
        return list(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, person_id: PersonId) -> bool:
        return person_id in self._nodes

    def get_node(self, person_id: PersonId) -> Person:
        """Return the person with the given id, raising DanglingReferenceError if absent."""
        try:
            return self._nodes[person_id]
        except KeyError:
            raise DanglingReferenceError(person_id) from None

    def find_node(self, person_id: PersonId) -> Person | None:
        return self._nodes.get(person_id)

    def edges_of_type(self, rel_type: str) -> list[Relationship]:
        return [e for e in self._edges if e.type == rel_type]

    def has_edge_between(self, a: PersonId, b: PersonId, rel_type: str) -> bool:
        return _pair_key(a, b, rel_type) in self._pairs

    def add_edge(self, edge: Relationship):
        """Append an edge after checking its type and endpoints."""
        if edge.type not in RELATIONSHIP_TYPES:
            raise ValueError(f"Unknown relationship type: {edge.type!r}")
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                raise DanglingReferenceError(endpoint, edge)

        self._edges.append(edge)
        key = _pair_key(edge.source, edge.target, edge.type)
        self._pairs[key] = self._pairs.get(key, 0) + 1

    def truncate(self, count: int):
        """Drop every edge appended after the first `count` edges."""
        for edge in self._edges[count:]:
            key = _pair_key(edge.source, edge.target, edge.type)
            self._pairs[key] -= 1
            if not self._pairs[key]:
                del self._pairs[key]
        del self._edges[count:]
