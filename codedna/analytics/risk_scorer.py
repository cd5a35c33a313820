"""
Rule-based risk scoring of graph nodes.

The policy lives in ``RISK_RULES``: each rule group lists its tiers from the
highest threshold down, and at most one tier per group fires for a node.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Set, Tuple

from ..types import CentralityRecord, CentralityReport, Cycle, GraphNode, RiskLevel, RiskRecord


@dataclass
class NodeFacts:
    """Everything a risk rule may look at for one node."""
    complexity: int
    loc: int
    in_degree: int
    out_degree: int
    total_degree: int
    betweenness: float
    in_cycle: bool


@dataclass(frozen=True)
class RiskTier:
    predicate: Callable[[NodeFacts], bool]
    score: int
    factor: str


@dataclass(frozen=True)
class RiskRule:
    name: str
    tiers: Tuple[RiskTier, ...]

    def evaluate(self, facts: NodeFacts):
        for tier in self.tiers:
            if tier.predicate(facts):
                return tier
        return None


RISK_RULES: Tuple[RiskRule, ...] = (
    RiskRule("complexity", (
        RiskTier(lambda f: f.complexity > 20, 30, "High complexity"),
        RiskTier(lambda f: f.complexity > 10, 15, "Moderate complexity"),
    )),
    RiskRule("coupling", (
        RiskTier(lambda f: f.in_degree > 5, 25, "High coupling (many dependents)"),
        RiskTier(lambda f: f.in_degree > 3, 10, "Moderate coupling"),
    )),
    RiskRule("dependencies", (
        RiskTier(lambda f: f.out_degree > 8, 20, "Too many dependencies"),
        RiskTier(lambda f: f.out_degree > 5, 10, "Many dependencies"),
    )),
    RiskRule("cycle", (
        RiskTier(lambda f: f.in_cycle, 35, "Part of circular dependency"),
    )),
    RiskRule("god_module", (
        RiskTier(lambda f: f.loc > 300 and f.total_degree > 5, 25, "God module (large + central)"),
    )),
    RiskRule("bottleneck", (
        RiskTier(lambda f: f.betweenness > 0.5, 15, "Refactoring bottleneck"),
    )),
)

HIGH_RISK_THRESHOLD = 50
MEDIUM_RISK_THRESHOLD = 25


def classify_risk(score: int) -> RiskLevel:
    if score >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def score_node(facts: NodeFacts, rules: Iterable[RiskRule] = RISK_RULES) -> Tuple[int, List[str]]:
    """Apply the rule table to one node and return its score and factors."""
    score = 0
    factors: List[str] = []
    for rule in rules:
        tier = rule.evaluate(facts)
        if tier is not None:
            score += tier.score
            factors.append(tier.factor)
    return score, factors


def cycle_node_ids(cycles: Iterable[Cycle]) -> Set[str]:
    return {node_id for cycle in cycles for node_id in cycle.nodes}


def compute_risks(
    nodes: Iterable[GraphNode],
    centrality: CentralityReport,
    cycles: Iterable[Cycle],
    rules: Iterable[RiskRule] = RISK_RULES,
) -> List[RiskRecord]:
    """Score every node; return flagged nodes ordered by descending score."""
    in_cycle = cycle_node_ids(cycles)
    rules = tuple(rules)
    by_node: Dict[str, CentralityRecord] = centrality.by_node
    risks: List[RiskRecord] = []

    for node in nodes:
        cent = by_node.get(node.id)
        in_degree = cent.in_degree if cent else node.in_degree
        out_degree = cent.out_degree if cent else node.out_degree
        facts = NodeFacts(
            complexity=node.complexity or 0,
            loc=node.loc or 0,
            in_degree=in_degree,
            out_degree=out_degree,
            total_degree=cent.total_degree if cent else in_degree + out_degree,
            betweenness=cent.betweenness if cent else 0.0,
            in_cycle=node.id in in_cycle,
        )
        score, factors = score_node(facts, rules)
        if score <= 0:
            continue
        risks.append(
            RiskRecord(
                node_id=node.id,
                label=node.label,
                risk_score=score,
                risk_level=classify_risk(score),
                risk_factors=factors,
                complexity=facts.complexity,
                loc=facts.loc,
                in_degree=in_degree,
                out_degree=out_degree,
                in_cycle=facts.in_cycle,
            )
        )

    risks.sort(key=lambda risk: risk.risk_score, reverse=True)
    return risks
