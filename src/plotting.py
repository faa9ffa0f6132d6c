"""Visualization functions for family graphs."""

from pathlib import Path

import matplotlib.pyplot as plt
import networkx as nx

from graph import build_graph
from models import COUSIN, FEMALE, MALE, PARENT, SIBLING, SPOUSE, PersonId
from store import GraphStore

NODE_FILL = "#af7049"
HIGHLIGHT_COLOR = "orange"

OUTLINE_COLORS = {
    MALE: "#090f5a",
    FEMALE: "#7a176d",
}
DEFAULT_OUTLINE = "#000000"

EDGE_COLORS = {
    SPOUSE: "#e7101055",
    PARENT: "#38170355",
    SIBLING: "#20b95355",
    COUSIN: "blue",
}
DEFAULT_EDGE_COLOR = "#999999"

# Preferred link lengths; shorter links pull people closer together
LINK_DISTANCES = {
    SPOUSE: 60,
    PARENT: 50,
}
DEFAULT_LINK_DISTANCE = 100


def compute_layout(G: nx.MultiDiGraph, seed: int = 42) -> dict:
    """Force-directed positions, weighting each link by its inverse preferred length."""
    layout_graph = nx.Graph()
    layout_graph.add_nodes_from(G.nodes())
    for u, v, data in G.edges(data=True):
        if u == v:
            continue
        distance = LINK_DISTANCES.get(data.get("relationship_type"), DEFAULT_LINK_DISTANCE)
        weight = DEFAULT_LINK_DISTANCE / distance
        # Keep the strongest pull when several relationships link the same pair
        if layout_graph.has_edge(u, v):
            weight = max(weight, layout_graph.edges[u, v]["weight"])
        layout_graph.add_edge(u, v, weight=weight)

    return nx.spring_layout(layout_graph, weight="weight", seed=seed)


def plot_graph(store: GraphStore, output_path: Path | None = None, highlight: PersonId | None = None):
    """
    Plot the family graph with a force-directed layout.

    Nodes are outlined by gender, edges coloured by relationship type, and
    parent edges carry an arrow pointing at the child.

    Args:
        store: Graph store holding people and (possibly derived) relationships
        output_path: Path to save the output image. If None, displays interactively.
        highlight: Optional person ID to outline as the current selection
    """
    G = build_graph(store)
    pos = compute_layout(G)
    # Drawing helpers want at most one edge per ordered pair
    D = nx.DiGraph(G)

    fig, ax = plt.subplots(figsize=(20, 16))

    nodes = list(G.nodes())
    outlines = []
    widths = []
    for node in nodes:
        if node == highlight:
            outlines.append(HIGHLIGHT_COLOR)
            widths.append(4.0)
        else:
            outlines.append(OUTLINE_COLORS.get(G.nodes[node].get("gender"), DEFAULT_OUTLINE))
            widths.append(2.0)

    nx.draw_networkx_nodes(
        D,
        pos,
        nodelist=nodes,
        node_color=NODE_FILL,
        edgecolors=outlines,
        linewidths=widths,
        node_size=300,
        ax=ax,
    )

    edges = [(u, v, d.get("relationship_type")) for u, v, d in G.edges(data=True) if u != v]
    parent_edges = [(u, v) for u, v, t in edges if t == PARENT]
    other_edges = [(u, v) for u, v, t in edges if t != PARENT]

    if other_edges:
        nx.draw_networkx_edges(
            D,
            pos,
            edgelist=other_edges,
            edge_color=[EDGE_COLORS.get(t, DEFAULT_EDGE_COLOR) for _, _, t in edges if t != PARENT],
            width=2,
            arrows=False,
            ax=ax,
        )
    if parent_edges:
        nx.draw_networkx_edges(
            D,
            pos,
            edgelist=parent_edges,
            edge_color=EDGE_COLORS[PARENT],
            width=2,
            arrows=True,
            arrowstyle="-|>",
            node_size=300,
            ax=ax,
        )

    labels = {n: G.nodes[n].get("label") or "" for n in nodes}
    label_pos = {n: (x, y + 0.03) for n, (x, y) in pos.items()}
    nx.draw_networkx_labels(D, label_pos, labels=labels, font_size=10, ax=ax)

    ax.set_title(f"Family Graph ({G.number_of_nodes()} people, {G.number_of_edges()} relationships)")
    ax.axis("off")
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"Graph saved to {output_path}")
    else:
        plt.show()
