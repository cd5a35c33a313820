"""
Circular dependency detection using Tarjan's strongly connected components.

The traversal keeps its own work stack of ``(node, next neighbour position)``
frames instead of recursing, so very long import chains cannot exhaust the
interpreter's call stack.
"""
from typing import Dict, List, Set, Tuple

from ..types import Cycle, Graph, Severity
from ..utils.logger import app_logger

logger = app_logger.bind(component="cycle_detector")


def classify_severity(size: int) -> Severity:
    """Severity of a cycle by member count."""
    if size >= 4:
        return Severity.HIGH
    if size == 3:
        return Severity.MEDIUM
    return Severity.LOW


def strongly_connected_components(adjacency: Dict[str, List[str]], order: List[str]) -> List[List[str]]:
    """
    Return every strongly connected component of the graph.

    Roots are tried in ``order``; neighbours are explored in adjacency order.
    Members of a component are listed in the order they are popped.
    """
    index: Dict[str, int] = {}
    lowlink: Dict[str, int] = {}
    on_stack: Set[str] = set()
    stack: List[str] = []
    components: List[List[str]] = []
    counter = 0

    for root in order:
        if root in index:
            continue

        index[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work: List[Tuple[str, int]] = [(root, 0)]

        while work:
            node, position = work[-1]
            neighbours = adjacency.get(node, [])

            if position < len(neighbours):
                work[-1] = (node, position + 1)
                neighbour = neighbours[position]
                if neighbour not in adjacency:
                    continue
                if neighbour not in index:
                    index[neighbour] = lowlink[neighbour] = counter
                    counter += 1
                    stack.append(neighbour)
                    on_stack.add(neighbour)
                    work.append((neighbour, 0))
                elif neighbour in on_stack:
                    lowlink[node] = min(lowlink[node], index[neighbour])
                continue

            # All neighbours explored: finalize this frame
            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

            if lowlink[node] == index[node]:
                component: List[str] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(component)

    return components


def detect_cycles(graph: Graph) -> List[Cycle]:
    """
    Report circular dependencies in the graph.

    Components with two or more members are cycles. A file that imports
    itself is reported as a single-member cycle.
    """
    adjacency = graph.adjacency()
    labels = {node.id: node.label for node in graph.nodes}

    cycles: List[Cycle] = []
    for component in strongly_connected_components(adjacency, graph.node_ids()):
        if len(component) == 1:
            only = component[0]
            if only not in adjacency[only]:
                continue
        cycles.append(
            Cycle(
                id=f"cycle-{len(cycles) + 1}",
                nodes=component,
                node_labels=[labels.get(node_id, node_id) for node_id in component],
                size=len(component),
                severity=classify_severity(len(component)),
            )
        )

    logger.debug(f"Detected {len(cycles)} cycles in {len(graph.nodes)} nodes")
    return cycles
