"""
End-to-end analysis: file records (or a local directory) to graph and analytics.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Union

from .analytics.engine import AnalyticsEngine
from .config import settings
from .graph.graph_builder import GraphBuilder
from .processor.import_extractor import ImportExtractor
from .scanner.local_codebase_scanner import LocalCodebaseScanner
from .types import Analytics, FileRecord, Graph
from .utils.logger import app_logger

logger = app_logger.bind(component="pipeline")


@dataclass
class AnalysisResult:
    """Graph, analytics and run statistics for one analysis."""
    graph: Graph
    analytics: Analytics
    stats: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "graph": self.graph.to_dict(),
            "analytics": self.analytics.to_dict(),
            "stats": dict(self.stats),
        }


def _default_engine() -> AnalyticsEngine:
    return AnalyticsEngine(
        top_n=settings.top_n,
        damping=settings.pagerank_damping,
        iterations=settings.pagerank_iterations,
    )


def analyze_records(
    records: Iterable[Union[FileRecord, Dict[str, Any]]],
    total_files: Optional[int] = None,
    builder: Optional[GraphBuilder] = None,
    engine: Optional[AnalyticsEngine] = None,
) -> AnalysisResult:
    """Build the graph for the records and run every analytic over it."""
    records = list(records)
    graph = (builder or GraphBuilder.from_settings()).build(records)
    analytics = (engine or _default_engine()).analyze(graph)

    stats = {
        "totalFiles": len(records) if total_files is None else total_files,
        "parsedFiles": len(records),
        "nodes": len(graph.nodes),
        "edges": len(graph.edges),
        "cycles": len(analytics.cycles),
        "highRiskModules": analytics.summary.high_risk_count,
    }
    logger.info(f"Analysis complete: {stats['nodes']} nodes, {stats['edges']} edges")
    return AnalysisResult(graph=graph, analytics=analytics, stats=stats)


def analyze_directory(root_path: str) -> AnalysisResult:
    """Scan a local directory, extract records and analyze them."""
    scanner = LocalCodebaseScanner(root_path)
    code_files = scanner.scan_directory()
    loaded_files = scanner.load_files_content(code_files)
    records = ImportExtractor().extract_records(loaded_files)
    return analyze_records(records, total_files=len(code_files))
