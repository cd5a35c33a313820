from typing import Dict, Iterable, List

from ..types import ClusterMap, ClusterMember, GraphNode


def compute_clusters(nodes: Iterable[GraphNode]) -> ClusterMap:
    """Group nodes by language and, separately, by directory."""
    by_language: Dict[str, List[ClusterMember]] = {}
    by_directory: Dict[str, List[ClusterMember]] = {}

    for node in nodes:
        member = ClusterMember(id=node.id, label=node.label)
        by_language.setdefault(node.language or "unknown", []).append(member)
        by_directory.setdefault(node.directory or "root", []).append(member)

    return ClusterMap(by_language=by_language, by_directory=by_directory)
