"""Build the bidirectional family adjacency graph for one tree."""
import logging
from collections import defaultdict
from typing import Iterable

from .models import (
    AdjacencyGraph, Connection, ConnectionKind, EdgeType, Person, RelationEdge,
    PARENT_CHILD_TYPES, SPOUSE_TYPES,
)

logger = logging.getLogger(__name__)


def _link(adjacency: dict, source: Person, target: Person,
          kind: ConnectionKind, edge_type: EdgeType):
    adjacency[source.id].append(Connection(target.id, target, kind, edge_type))


def _has_sibling_link(adjacency: dict, a_id: str, b_id: str) -> bool:
    return any(c.neighbor_id == b_id and c.kind is ConnectionKind.SIBLING
               for c in adjacency[a_id])


def build_graph(people: Iterable[Person], edges: Iterable[RelationEdge]) -> AdjacencyGraph:
    """Turn a tree's people and relation edges into an adjacency graph.

    Parent-child edges become a PARENT connection on the child and a CHILD
    connection on the parent. Spouse/partner and sibling edges are linked
    both ways. Children of the same parent are then linked as siblings
    unless a sibling connection already exists between them.

    Edges that reference unknown people, or that link a person to
    themselves, are skipped: genealogies are routinely incomplete.
    """
    directory = {p.id: p for p in people}
    adjacency: dict[str, list[Connection]] = {pid: [] for pid in directory}
    children_by_parent: dict[str, list[str]] = defaultdict(list)
    skipped = 0

    for edge in edges:
        a = directory.get(edge.from_id)
        b = directory.get(edge.to_id)
        if a is None or b is None or a.id == b.id:
            skipped += 1
            logger.debug("Skipping edge %s -> %s (%s)", edge.from_id, edge.to_id, edge.type)
            continue

        if edge.type in PARENT_CHILD_TYPES:
            _link(adjacency, a, b, ConnectionKind.CHILD, edge.type)
            _link(adjacency, b, a, ConnectionKind.PARENT, edge.type)
            if b.id not in children_by_parent[a.id]:
                children_by_parent[a.id].append(b.id)
        elif edge.type in SPOUSE_TYPES:
            _link(adjacency, a, b, ConnectionKind.SPOUSE, edge.type)
            _link(adjacency, b, a, ConnectionKind.SPOUSE, edge.type)
        elif edge.type is EdgeType.SIBLING:
            _link(adjacency, a, b, ConnectionKind.SIBLING, edge.type)
            _link(adjacency, b, a, ConnectionKind.SIBLING, edge.type)
        else:
            skipped += 1

    inferred = 0
    for children in children_by_parent.values():
        for i, first_id in enumerate(children):
            for second_id in children[i + 1:]:
                if _has_sibling_link(adjacency, first_id, second_id):
                    continue
                first, second = directory[first_id], directory[second_id]
                _link(adjacency, first, second, ConnectionKind.SIBLING, EdgeType.SIBLING)
                _link(adjacency, second, first, ConnectionKind.SIBLING, EdgeType.SIBLING)
                inferred += 1

    logger.debug("Graph built: %d people, %d skipped edges, %d inferred sibling pairs",
                 len(directory), skipped, inferred)
    return AdjacencyGraph(people=directory, adjacency=adjacency)
