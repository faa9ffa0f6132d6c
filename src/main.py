"""
1) Load people and relationships from the viewer's JSON files (or a GEDCOM file).
2) Index them in a graph store, rejecting dangling or duplicate ids.
3) Derive sibling (and optionally cousin) relationships from parent edges.
4) Validate the data for parent cycles and impossible dates.
5) Print the detail panel for a selected person.
6) Plot the graph with a force-directed layout.
"""

import argparse
import logging
from pathlib import Path

from details import format_details, person_details
from graph import build_graph, get_ego_subgraph
from loading import load_gedcom, load_json
from models import COUSIN, SIBLING
from plotting import plot_graph
from relationships import derive_relationships
from store import DataIntegrityError, GraphStore
from validation import validate_graph

PROJECT_ROOT = Path(__file__).parent.parent


def parse_person_id(value: str) -> int | str:
    """Person ids in JSON files are usually numbers; fall back to the raw string."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Derive and plot relationships in a family graph.")
    parser.add_argument("--nodes", type=Path, default=PROJECT_ROOT / "nodes.json", help="Nodes JSON file")
    parser.add_argument("--links", type=Path, default=PROJECT_ROOT / "links.json", help="Links JSON file")
    parser.add_argument("--gedcom", type=Path, default=None, help="Read a GEDCOM file instead of JSON")
    parser.add_argument("--output", type=Path, default=PROJECT_ROOT / "family_graph.png", help="Image to write")
    parser.add_argument("--no-plot", action="store_true", help="Skip plotting")
    parser.add_argument("--no-siblings", action="store_true", help="Do not derive sibling edges")
    parser.add_argument("--cousins", action="store_true", help="Derive cousin edges")
    parser.add_argument("--person", type=parse_person_id, default=None, help="Show details for this person ID")
    parser.add_argument(
        "--radius", type=int, default=None, help="Only plot people within this many hops of --person"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.gedcom:
        if not args.gedcom.exists():
            raise SystemExit(f"File not found: {args.gedcom}")
        print(f"Parsing GEDCOM file: {args.gedcom}")
        persons, relationships = load_gedcom(args.gedcom)
    else:
        for path in (args.nodes, args.links):
            if not path.exists():
                raise SystemExit(f"File not found: {path}")
        print(f"Loading {args.nodes} and {args.links}")
        persons, relationships = load_json(args.nodes, args.links)
    print(f"  Found {len(persons)} persons and {len(relationships)} relationships")

    try:
        store = GraphStore(persons, relationships)
        print("Deriving relationships...")
        derive_relationships(store, siblings=not args.no_siblings, cousins=args.cousins)
    except DataIntegrityError as e:
        raise SystemExit(f"Invalid family data: {e}") from e
    print(
        f"  {len(store.edges_of_type(SIBLING))} sibling and "
        f"{len(store.edges_of_type(COUSIN))} cousin relationships"
    )

    G = build_graph(store)

    print("Validating graph...")
    warnings = validate_graph(G)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    if args.person is not None:
        details = person_details(store, args.person)
        if details is None:
            print(f"Person ID {args.person} not found")
        else:
            for line in format_details(details):
                print(f"  {line}")

    if not args.no_plot:
        plot_store = store
        if args.person is not None and args.radius is not None and args.person in store:
            sub = get_ego_subgraph(G, args.person, radius=args.radius)
            plot_store = GraphStore(
                [p for p in store.nodes if p.id in sub],
                [e for e in store.edges if e.source in sub and e.target in sub],
            )
        print(f"Plotting graph to: {args.output}")
        plot_graph(plot_store, args.output, highlight=args.person)

    print("Done!")


if __name__ == "__main__":
    main()
