from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class InvalidFileRecordError(ValueError):
    """Raised when a file record is missing a required field or holds a bad value."""


class Severity(Enum):
    """Cycle severity, derived from the size of the component."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(Enum):
    """Risk level, derived from the additive risk score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class CodeFile:
    """Represents a source file found by the scanner."""
    path: str
    absolute_path: str
    language: str
    size: int = 0
    last_modified: float = 0.0
    content: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "absolute_path": self.absolute_path,
            "language": self.language,
            "size": self.size,
            "last_modified": self.last_modified,
        }


@dataclass(frozen=True)
class ImportRef:
    """A single import statement extracted from a file."""
    module: str
    is_relative: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImportRef":
        if not isinstance(data, dict):
            raise InvalidFileRecordError(f"Import entry must be a mapping, got {type(data).__name__}")
        if "module" not in data:
            raise InvalidFileRecordError("Import entry is missing 'module'")
        if "isRelative" in data:
            is_relative = data["isRelative"]
        elif "is_relative" in data:
            is_relative = data["is_relative"]
        else:
            raise InvalidFileRecordError(f"Import '{data['module']}' is missing 'isRelative'")
        if not isinstance(data["module"], str) or not isinstance(is_relative, bool):
            raise InvalidFileRecordError(f"Import '{data['module']}' has invalid field types")
        return cls(module=data["module"], is_relative=is_relative)

    def to_dict(self) -> Dict[str, Any]:
        return {"module": self.module, "isRelative": self.is_relative}


@dataclass(frozen=True)
class FileRecord:
    """Per-file input record: path, metrics and extracted imports."""
    path: str
    language: str
    loc: int
    complexity: int
    imports: Tuple[ImportRef, ...] = ()

    _REQUIRED = ("path", "language", "loc", "complexity", "imports")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileRecord":
        """Build a record from a plain mapping, failing fast on bad input."""
        if not isinstance(data, dict):
            raise InvalidFileRecordError(f"File record must be a mapping, got {type(data).__name__}")
        missing = [name for name in cls._REQUIRED if name not in data]
        if missing:
            raise InvalidFileRecordError(
                f"File record {data.get('path', '<unknown>')!r} is missing {', '.join(missing)}"
            )
        path = data["path"]
        if not isinstance(path, str) or not path:
            raise InvalidFileRecordError("File record 'path' must be a non-empty string")
        loc = data["loc"]
        complexity = data["complexity"]
        if isinstance(loc, bool) or not isinstance(loc, int) or loc < 0:
            raise InvalidFileRecordError(f"File record {path!r} has invalid loc {loc!r}")
        if isinstance(complexity, bool) or not isinstance(complexity, int) or complexity < 1:
            raise InvalidFileRecordError(f"File record {path!r} has invalid complexity {complexity!r}")
        if not isinstance(data["imports"], (list, tuple)):
            raise InvalidFileRecordError(f"File record {path!r} 'imports' must be a list")
        return cls(
            path=path,
            language=str(data["language"]),
            loc=loc,
            complexity=complexity,
            imports=tuple(ImportRef.from_dict(item) for item in data["imports"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "language": self.language,
            "loc": self.loc,
            "complexity": self.complexity,
            "imports": [imp.to_dict() for imp in self.imports],
        }


@dataclass(frozen=True)
class GraphNode:
    """Represents a file node in the dependency graph."""
    id: str
    label: str
    language: str
    loc: int
    complexity: int
    directory: str
    in_degree: int = 0
    out_degree: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "language": self.language,
            "loc": self.loc,
            "complexity": self.complexity,
            "directory": self.directory,
            "inDegree": self.in_degree,
            "outDegree": self.out_degree,
        }


@dataclass(frozen=True)
class GraphEdge:
    """Represents a resolved internal import between two files."""
    source: str
    target: str
    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
        }


@dataclass(frozen=True)
class Graph:
    """Directed file dependency graph."""
    nodes: Tuple[GraphNode, ...] = ()
    edges: Tuple[GraphEdge, ...] = ()

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def adjacency(self) -> Dict[str, List[str]]:
        """Outgoing neighbours per node, in edge order."""
        adj: Dict[str, List[str]] = {node.id: [] for node in self.nodes}
        for edge in self.edges:
            if edge.source in adj:
                adj[edge.source].append(edge.target)
        return adj

    def reverse_adjacency(self) -> Dict[str, List[str]]:
        """Incoming neighbours per node, in edge order."""
        adj: Dict[str, List[str]] = {node.id: [] for node in self.nodes}
        for edge in self.edges:
            if edge.target in adj:
                adj[edge.target].append(edge.source)
        return adj

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class Cycle:
    """A strongly connected component reported as a circular dependency."""
    id: str
    nodes: List[str]
    node_labels: List[str]
    size: int
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "nodes": list(self.nodes),
            "nodeLabels": list(self.node_labels),
            "size": self.size,
            "severity": self.severity.value,
        }


@dataclass
class CentralityRecord:
    """Centrality measures of a single node."""
    node_id: str
    label: str
    in_degree: int
    out_degree: int
    total_degree: int
    betweenness: float = 0.0
    page_rank: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodeId": self.node_id,
            "label": self.label,
            "inDegree": self.in_degree,
            "outDegree": self.out_degree,
            "totalDegree": self.total_degree,
            "betweenness": self.betweenness,
            "pageRank": self.page_rank,
        }


@dataclass
class CentralityReport:
    """Per-node centrality plus the top-N rankings."""
    by_node: Dict[str, CentralityRecord] = field(default_factory=dict)
    top_by_degree: List[CentralityRecord] = field(default_factory=list)
    top_by_page_rank: List[CentralityRecord] = field(default_factory=list)
    top_by_betweenness: List[CentralityRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "byNode": {node_id: record.to_dict() for node_id, record in self.by_node.items()},
            "topByDegree": [record.to_dict() for record in self.top_by_degree],
            "topByPageRank": [record.to_dict() for record in self.top_by_page_rank],
            "topByBetweenness": [record.to_dict() for record in self.top_by_betweenness],
        }


@dataclass
class ClusterMember:
    id: str
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label}


@dataclass
class ClusterMap:
    """Nodes grouped by language and by directory."""
    by_language: Dict[str, List[ClusterMember]] = field(default_factory=dict)
    by_directory: Dict[str, List[ClusterMember]] = field(default_factory=dict)

    @property
    def language_counts(self) -> Dict[str, int]:
        return {key: len(members) for key, members in self.by_language.items()}

    @property
    def directory_counts(self) -> Dict[str, int]:
        return {key: len(members) for key, members in self.by_directory.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "byLanguage": {
                key: [member.to_dict() for member in members]
                for key, members in self.by_language.items()
            },
            "byDirectory": {
                key: [member.to_dict() for member in members]
                for key, members in self.by_directory.items()
            },
            "languageCounts": self.language_counts,
            "directoryCounts": self.directory_counts,
        }


@dataclass
class RiskRecord:
    """Risk assessment for a flagged node."""
    node_id: str
    label: str
    risk_score: int
    risk_level: RiskLevel
    risk_factors: List[str]
    complexity: int = 0
    loc: int = 0
    in_degree: int = 0
    out_degree: int = 0
    in_cycle: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodeId": self.node_id,
            "label": self.label,
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "riskFactors": list(self.risk_factors),
            "complexity": self.complexity,
            "loc": self.loc,
            "inDegree": self.in_degree,
            "outDegree": self.out_degree,
            "inCycle": self.in_cycle,
        }


@dataclass
class AnalyticsSummary:
    total_cycles: int = 0
    high_risk_count: int = 0
    medium_risk_count: int = 0
    cluster_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCycles": self.total_cycles,
            "highRiskCount": self.high_risk_count,
            "mediumRiskCount": self.medium_risk_count,
            "clusterCount": self.cluster_count,
        }


@dataclass
class Analytics:
    """Complete analytics result for one graph."""
    cycles: List[Cycle] = field(default_factory=list)
    centrality: CentralityReport = field(default_factory=CentralityReport)
    clusters: ClusterMap = field(default_factory=ClusterMap)
    risks: List[RiskRecord] = field(default_factory=list)
    summary: AnalyticsSummary = field(default_factory=AnalyticsSummary)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "cycles": [cycle.to_dict() for cycle in self.cycles],
            "centrality": self.centrality.to_dict(),
            "clusters": self.clusters.to_dict(),
            "risks": [risk.to_dict() for risk in self.risks],
            "summary": self.summary.to_dict(),
        }
