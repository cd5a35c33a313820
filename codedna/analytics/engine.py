"""
Analytics engine: runs cycle detection, centrality, clustering and risk
scoring over one graph and assembles the summary.
"""
from ..types import Analytics, AnalyticsSummary, Graph, RiskLevel
from ..utils.logger import app_logger
from .centrality import DEFAULT_DAMPING, DEFAULT_ITERATIONS, DEFAULT_TOP_N, compute_centrality
from .clusters import compute_clusters
from .cycle_detector import detect_cycles
from .risk_scorer import compute_risks


class AnalyticsEngine:
    """Computes architectural analytics for a dependency graph."""

    def __init__(
        self,
        top_n: int = DEFAULT_TOP_N,
        damping: float = DEFAULT_DAMPING,
        iterations: int = DEFAULT_ITERATIONS,
    ):
        self.logger = app_logger.bind(component="analytics_engine")
        self.top_n = top_n
        self.damping = damping
        self.iterations = iterations

    def analyze(self, graph: Graph) -> Analytics:
        """Compute all analytics; either returns a complete result or raises."""
        cycles = detect_cycles(graph)
        centrality = compute_centrality(
            graph, top_n=self.top_n, damping=self.damping, iterations=self.iterations
        )
        clusters = compute_clusters(graph.nodes)
        risks = compute_risks(graph.nodes, centrality, cycles)

        summary = AnalyticsSummary(
            total_cycles=len(cycles),
            high_risk_count=sum(1 for risk in risks if risk.risk_level is RiskLevel.HIGH),
            medium_risk_count=sum(1 for risk in risks if risk.risk_level is RiskLevel.MEDIUM),
            cluster_count=len(clusters.by_language),
        )
        self.logger.info(f"Found {len(cycles)} cycles, {len(risks)} risk items")
        return Analytics(
            cycles=cycles,
            centrality=centrality,
            clusters=clusters,
            risks=risks,
            summary=summary,
        )


def compute_graph_analytics(graph: Graph) -> Analytics:
    """Compute analytics with the default parameters."""
    return AnalyticsEngine().analyze(graph)
