"""Graph validation for family graph data."""

import networkx as nx

from models import PARENT

# Youngest plausible age of a parent at a child's birth, in years
MIN_PARENT_AGE = 12


def _label(data: dict) -> str:
    return data.get("label") or "<unnamed>"


def validate_graph(G: nx.MultiDiGraph) -> list[str]:
    """
    Validate the family graph for:
    - Cycles in parent-child relationships
    - People recorded as their own parent
    - Impossible ages (child born before parent, very young parents)
    - Death before birth

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    parent_edges = [
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == PARENT
    ]

    for u, v in parent_edges:
        if u == v:
            warnings.append(f"Impossible: {_label(G.nodes[u])} is recorded as their own parent")

    # Check for cycles
    parent_graph = nx.DiGraph([(u, v) for u, v in parent_edges if u != v])
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for parent, child in parent_edges:
        if parent == child:
            continue
        parent_data = G.nodes[parent]
        child_data = G.nodes[child]

        parent_birth = parent_data.get("date_of_birth")
        child_birth = child_data.get("date_of_birth")
        if parent_birth is None or child_birth is None:
            continue
        if parent_birth.sort_key is None or child_birth.sort_key is None:
            continue

        if child_birth.sort_key < parent_birth.sort_key:
            warnings.append(
                f"Impossible: {_label(child_data)} born before parent {_label(parent_data)}"
            )
        elif child_birth.year - parent_birth.year < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {_label(parent_data)} was less than {MIN_PARENT_AGE} years "
                f"old when {_label(child_data)} was born"
            )

    for _, data in G.nodes(data=True):
        birth = data.get("date_of_birth")
        death = data.get("date_of_death")
        if birth is None or death is None or birth.sort_key is None or death.sort_key is None:
            continue
        if death.sort_key < birth.sort_key:
            warnings.append(f"Impossible: {_label(data)} died before being born")

    return warnings
