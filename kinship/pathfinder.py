"""Breadth-first shortest path between two people."""
from collections import deque

from .models import AdjacencyGraph, PathNode


def _unwind(arena: list[PathNode], index: int) -> list[PathNode]:
    chain = []
    while index >= 0:
        chain.append(arena[index])
        index = arena[index].previous
    chain.reverse()
    return chain


def find_path(graph: AdjacencyGraph, source_id: str, target_id: str) -> list[PathNode] | None:
    """Return the path from source to target inclusive, or None if unreachable.

    Nodes live in an arena list and point at their predecessor by index.
    When several shortest paths exist the one found first in connection
    order wins.
    """
    if source_id not in graph or target_id not in graph:
        return None

    arena = [PathNode(graph.people[source_id])]
    queue = deque([0])
    visited = {source_id}

    while queue:
        index = queue.popleft()
        current = arena[index]
        if current.person.id == target_id:
            return _unwind(arena, index)

        for conn in graph.connections(current.person.id):
            if conn.neighbor_id in visited:
                continue
            visited.add(conn.neighbor_id)
            arena.append(PathNode(conn.neighbor, conn.kind, conn.edge_type, index))
            queue.append(len(arena) - 1)

    return None
