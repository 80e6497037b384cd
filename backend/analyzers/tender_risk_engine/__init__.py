"""
Tender Risk Engine

Deterministic multi-factor risk scoring for public procurement tenders.
Combines seasonal, financial, deadline, timeline and category signals into a
bounded score, a risk level and a readable summary.
"""

from .definition import (
    DEFAULT_RULE_CONFIG,
    FindingType,
    Recommendation,
    RecommendationType,
    RiskAssessment,
    RiskFinding,
    RiskLevel,
    RiskRuleConfig,
    Severity,
    Tender,
    TenderCategory,
)

from .impl import (
    RISK_LEVEL_LABELS,
    TenderRiskEngine,
    days_until,
    evaluate_tender,
    format_amount,
    format_month,
    render_summary,
    round_half_up,
)

__all__ = [
    # Classes
    "TenderRiskEngine",
    # Models
    "FindingType",
    "Recommendation",
    "RecommendationType",
    "RiskAssessment",
    "RiskFinding",
    "RiskLevel",
    "RiskRuleConfig",
    "Severity",
    "Tender",
    "TenderCategory",
    # Functions
    "days_until",
    "evaluate_tender",
    "format_amount",
    "format_month",
    "render_summary",
    "round_half_up",
    # Constants
    "DEFAULT_RULE_CONFIG",
    "RISK_LEVEL_LABELS",
]
