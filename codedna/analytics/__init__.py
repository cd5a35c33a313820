"""
Graph analytics: cycles, centrality, clusters and risk scoring.
"""

from .centrality import compute_centrality
from .clusters import compute_clusters
from .cycle_detector import detect_cycles
from .engine import AnalyticsEngine, compute_graph_analytics
from .risk_scorer import RISK_RULES, compute_risks

__all__ = [
    'AnalyticsEngine',
    'compute_graph_analytics',
    'detect_cycles',
    'compute_centrality',
    'compute_clusters',
    'compute_risks',
    'RISK_RULES',
]
