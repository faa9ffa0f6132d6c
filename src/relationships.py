"""Derivation of sibling/cousin edges and person-centric relationship queries."""

import logging

from models import COUSIN, PARENT, SIBLING, SPOUSE, Person, PersonId, Relationship
from store import GraphStore

logger = logging.getLogger(__name__)

ParentSets = dict[PersonId, list[PersonId]]


def compute_parent_sets(store: GraphStore) -> ParentSets:
    """
    Map every person to the ids of their parents.

    Parents are listed in parent-edge order with duplicates removed. People
    without parent edges map to an empty list.
    """
    parents: ParentSets = {p.id: [] for p in store.nodes}
    for edge in store.edges_of_type(PARENT):
        parents[edge.target].append(edge.source)

    # De-duplicate parents while preserving order
    return {pid: list(dict.fromkeys(ids)) for pid, ids in parents.items()}


def compute_child_lists(store: GraphStore, parent_sets: ParentSets) -> dict[PersonId, list[PersonId]]:
    """Invert the parent mapping; children are listed in node order."""
    children: dict[PersonId, list[PersonId]] = {p.id: [] for p in store.nodes}
    for person in store.nodes:
        for parent_id in parent_sets.get(person.id, []):
            children[parent_id].append(person.id)
    return children


def _link(store: GraphStore, a: PersonId, b: PersonId, rel_type: str, added: list[Relationship]):
    if a == b or store.has_edge_between(a, b, rel_type):
        return
    edge = Relationship(source=a, target=b, type=rel_type)
    store.add_edge(edge)
    added.append(edge)


def derive_siblings(store: GraphStore, parent_sets: ParentSets) -> list[Relationship]:
    """
    Add a sibling edge between every two people sharing at least one parent.

    Sharing a single parent is enough, so half-siblings are linked too. An
    existing sibling edge in either orientation suppresses a new one.

    Returns:
        The edges added by this call
    """
    children = compute_child_lists(store, parent_sets)
    added: list[Relationship] = []

    for person in store.nodes:
        for parent_id in parent_sets.get(person.id, []):
            for sibling_id in children[parent_id]:
                _link(store, person.id, sibling_id, SIBLING, added)

    logger.info("Derived %d sibling edges", len(added))
    return added


def derive_cousins(store: GraphStore, parent_sets: ParentSets) -> list[Relationship]:
    """
    Add a cousin edge between every person and the children of their uncles and aunts.

    For a person A, each parent P is walked separately: every other child U
    of one of P's parents is an uncle/aunt, and U's children are A's first
    cousins. An existing cousin edge in either orientation suppresses a new one.

    Returns:
        The edges added by this call
    """
    children = compute_child_lists(store, parent_sets)
    added: list[Relationship] = []

    for person in store.nodes:
        for parent_id in parent_sets.get(person.id, []):
            for grandparent_id in parent_sets.get(parent_id, []):
                for uncle_id in children[grandparent_id]:
                    if uncle_id == parent_id:
                        continue
                    for cousin_id in children[uncle_id]:
                        _link(store, person.id, cousin_id, COUSIN, added)

    logger.info("Derived %d cousin edges", len(added))
    return added


def derive_relationships(store: GraphStore, siblings: bool = True, cousins: bool = True) -> ParentSets:
    """
    Materialize derived sibling and cousin edges into the store.

    Derivation is all-or-nothing: if any phase fails, every edge appended by
    this call is removed before the error propagates.

    Args:
        store: The graph store to enrich
        siblings: Whether to derive sibling edges
        cousins: Whether to derive cousin edges

    Returns:
        The parent mapping used for derivation
    """
    mark = len(store.edges)
    try:
        parent_sets = compute_parent_sets(store)
        if siblings:
            derive_siblings(store, parent_sets)
        if cousins:
            derive_cousins(store, parent_sets)
    except Exception:
        logger.error("Derivation failed, discarding %d partial edges", len(store.edges) - mark)
        store.truncate(mark)
        raise

    return parent_sets


def other_endpoint(edge: Relationship, person_id: PersonId) -> PersonId | None:
    """Return the endpoint of `edge` opposite to `person_id`, or None if it does not touch it."""
    if edge.source == person_id:
        return edge.target
    if edge.target == person_id:
        return edge.source
    return None


def _resolve(store: GraphStore, ids: list[PersonId]) -> list[Person]:
    return [store.get_node(i) for i in ids]


def _symmetric(store: GraphStore, person_id: PersonId, rel_type: str) -> list[Person]:
    if person_id not in store:
        return []
    ids = [other_endpoint(e, person_id) for e in store.edges_of_type(rel_type)]
    return _resolve(store, [i for i in ids if i is not None])


def parents_of(store: GraphStore, person_id: PersonId) -> list[Person]:
    return _resolve(store, [e.source for e in store.edges_of_type(PARENT) if e.target == person_id])


def children_of(store: GraphStore, person_id: PersonId) -> list[Person]:
    return _resolve(store, [e.target for e in store.edges_of_type(PARENT) if e.source == person_id])


def spouses_of(store: GraphStore, person_id: PersonId) -> list[Person]:
    return _symmetric(store, person_id, SPOUSE)


def siblings_of(store: GraphStore, person_id: PersonId) -> list[Person]:
    return _symmetric(store, person_id, SIBLING)


def cousins_of(store: GraphStore, person_id: PersonId) -> list[Person]:
    return _symmetric(store, person_id, COUSIN)
