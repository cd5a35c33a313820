"""
Centrality measures over the dependency graph: degree, an approximate
betweenness and PageRank.
"""
from collections import deque
from typing import Dict, List, Optional

from ..types import CentralityRecord, CentralityReport, Graph
from ..utils.logger import app_logger

logger = app_logger.bind(component="centrality")

DEFAULT_TOP_N = 10
DEFAULT_DAMPING = 0.85
DEFAULT_ITERATIONS = 20


def compute_betweenness(adjacency: Dict[str, List[str]], order: List[str]) -> Dict[str, float]:
    """
    Approximate betweenness normalized to [0, 1].

    Each node is used as a BFS source and only the first path discovered to
    every reachable node is counted, not all shortest paths. Interior nodes
    of each path longer than two nodes get one point. Scores are divided by
    the highest score, or by 1 when no node scored.
    """
    counts: Dict[str, int] = {node_id: 0 for node_id in order}

    for source in order:
        parent: Dict[str, Optional[str]] = {source: None}
        queue = deque([source])
        discovered: List[str] = []

        while queue:
            current = queue.popleft()
            for neighbour in adjacency.get(current, []):
                if neighbour in parent or neighbour not in adjacency:
                    continue
                parent[neighbour] = current
                queue.append(neighbour)
                discovered.append(neighbour)

        for dest in discovered:
            step = parent[dest]
            while step is not None and step != source:
                counts[step] += 1
                step = parent[step]

    max_count = max([1] + list(counts.values()))
    return {node_id: count / max_count for node_id, count in counts.items()}


def compute_page_rank(
    adjacency: Dict[str, List[str]],
    reverse_adjacency: Dict[str, List[str]],
    order: List[str],
    damping: float = DEFAULT_DAMPING,
    iterations: int = DEFAULT_ITERATIONS,
) -> Dict[str, float]:
    """
    Power-iteration PageRank with a fixed iteration count.

    Nodes without outgoing edges pass no rank on, and their mass is not
    redistributed, so the total drops below 1 when such nodes exist.
    """
    n = len(order)
    if n == 0:
        return {}

    rank = {node_id: 1.0 / n for node_id in order}
    base = (1.0 - damping) / n

    for _ in range(iterations):
        new_rank: Dict[str, float] = {}
        for node_id in order:
            total = 0.0
            for incoming in reverse_adjacency.get(node_id, []):
                out_degree = len(adjacency.get(incoming, []))
                if out_degree > 0 and incoming in rank:
                    total += rank[incoming] / out_degree
            new_rank[node_id] = base + damping * total
        rank = new_rank

    return rank


def _top(records: List[CentralityRecord], key, top_n: int) -> List[CentralityRecord]:
    # sorted() is stable, so ties keep graph node order
    return sorted(records, key=key, reverse=True)[:top_n]


def compute_centrality(
    graph: Graph,
    top_n: int = DEFAULT_TOP_N,
    damping: float = DEFAULT_DAMPING,
    iterations: int = DEFAULT_ITERATIONS,
) -> CentralityReport:
    """Compute per-node centrality and the top-N rankings."""
    order = graph.node_ids()
    if not order:
        return CentralityReport()

    adjacency = graph.adjacency()
    reverse_adjacency = graph.reverse_adjacency()
    betweenness = compute_betweenness(adjacency, order)
    page_rank = compute_page_rank(adjacency, reverse_adjacency, order, damping, iterations)

    by_node: Dict[str, CentralityRecord] = {}
    for node in graph.nodes:
        in_degree = len(reverse_adjacency[node.id])
        out_degree = len(adjacency[node.id])
        by_node[node.id] = CentralityRecord(
            node_id=node.id,
            label=node.label,
            in_degree=in_degree,
            out_degree=out_degree,
            total_degree=in_degree + out_degree,
            betweenness=betweenness[node.id],
            page_rank=page_rank[node.id],
        )

    records = list(by_node.values())
    report = CentralityReport(
        by_node=by_node,
        top_by_degree=_top(records, lambda r: r.total_degree, top_n),
        top_by_page_rank=_top(records, lambda r: r.page_rank, top_n),
        top_by_betweenness=_top(records, lambda r: r.betweenness, top_n),
    )
    logger.debug(f"Computed centrality for {len(by_node)} nodes")
    return report
