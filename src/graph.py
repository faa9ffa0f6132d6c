"""NetworkX views of the graph store."""

import networkx as nx

from models import PersonId
from store import GraphStore


def build_graph(store: GraphStore) -> nx.MultiDiGraph:
    """
    Build a NetworkX multigraph from the store.

    Person attributes are copied onto the nodes; every relationship becomes
    an edge carrying `relationship_type`. A multigraph is used because two
    people can be linked by more than one relationship (e.g. spouse and
    cousin).
    """
    G = nx.MultiDiGraph()

    # Note: use 'person_name' instead of 'name' to avoid clashing with drawing helpers
    for p in store.nodes:
        G.add_node(
            p.id,
            person_name=p.name,
            surname=p.surname,
            gender=p.gender,
            date_of_birth=p.date_of_birth,
            date_of_death=p.date_of_death,
            label=p.display_name,
        )

    for e in store.edges:
        G.add_edge(e.source, e.target, relationship_type=e.type)

    return G


def get_ego_subgraph(G: nx.MultiDiGraph, center_id: PersonId, radius: int = 2) -> nx.MultiDiGraph:
    """
    Extract a subgraph containing people within a given number of hops of a person.

    Args:
        G: The full graph
        center_id: The person ID to center the subgraph on
        radius: Maximum distance from center (default 2)

    Returns:
        A subgraph containing only nodes within `radius` edges of `center_id`
    """
    if center_id not in G:
        raise ValueError(f"Person ID {center_id} not found in graph")

    # Use undirected view so parents, children and symmetric relations all count
    ego = nx.ego_graph(G.to_undirected(as_view=True), center_id, radius=radius)

    # Return the directed subgraph induced by these nodes
    return G.subgraph(ego.nodes()).copy()
