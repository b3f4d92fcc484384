from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from netscope.errors import CycleDetectedError
from netscope.ir.types import GraphNode

Rows = List[List[GraphNode]]

_IN_PROGRESS = 1
_DONE = 2


def _label(node: GraphNode) -> str:
    return node.name or node.id


def find_cycle(root: GraphNode) -> Optional[List[GraphNode]]:
    """Return the first cycle reachable from ``root`` as a node path, or None.

    Iterative three-colour DFS so deep chains do not hit the recursion limit.
    The returned path starts and ends on the same node.
    """
    state: Dict[str, int] = {root.id: _IN_PROGRESS}
    path: List[GraphNode] = [root]
    stack: List[Tuple[GraphNode, Iterator[GraphNode]]] = [(root, iter(root.connections))]
    while stack:
        node, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            path.pop()
            state[node.id] = _DONE
            continue
        mark = state.get(child.id)
        if mark == _IN_PROGRESS:
            start = next(i for i, n in enumerate(path) if n.id == child.id)
            return path[start:] + [child]
        if mark is None:
            state[child.id] = _IN_PROGRESS
            path.append(child)
            stack.append((child, iter(child.connections)))
    return None


def ensure_acyclic(root: GraphNode) -> None:
    cycle = find_cycle(root)
    if cycle is not None:
        labels = [_label(n) for n in cycle]
        raise CycleDetectedError(f"Graph contains a cycle: {' -> '.join(labels)}", path=labels)


def assign_layers(root: GraphNode) -> Rows:
    """Group the nodes reachable from ``root`` into breadth-first rows.

    Row 0 is ``[root]``; each later row holds the nodes first discovered at
    that depth. A node shared by several parents lands in the earliest row
    that reaches it and is never repeated. Order inside a row follows parent
    order, then connection declaration order.
    """
    ensure_acyclic(root)
    visited = {root.id}
    rows: Rows = [[root]]
    frontier = [root]
    while frontier:
        discovered: List[GraphNode] = []
        for node in frontier:
            for child in node.connections:
                if child.id in visited:
                    continue
                visited.add(child.id)
                discovered.append(child)
        if discovered:
            rows.append(discovered)
        frontier = discovered
    return rows


def iter_edges(rows: Rows) -> Iterator[Tuple[GraphNode, GraphNode]]:
    for row in rows:
        for node in row:
            for child in node.connections:
                yield node, child


def flatten_rows(rows: Rows) -> List[GraphNode]:
    return [node for row in rows for node in row]
