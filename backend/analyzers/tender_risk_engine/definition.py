"""
Tender Risk Engine - Data Definitions

Pydantic models for tender risk scoring: the tender input, the findings and
recommendations the rules emit, the final assessment, and the immutable rule
configuration holding every calibration constant.

JSON payloads use camelCase (executionStart, riskScore, ...); Python
attributes are snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class TenderCategory(str, Enum):
    """Categories the rules know about. Others are accepted but inert."""
    CONSTRUCTION = "construction"
    MEDICAL = "medical"
    IT = "it"
    OTHER = "other"


class FindingType(str, Enum):
    SEASONAL = "seasonal"
    FINANCIAL = "financial"
    DEADLINE = "deadline"
    TIMELINE = "timeline"
    COMBINED = "combined"
    CATEGORY = "category"


class Severity(str, Enum):
    """
    Severity of a risk finding.

    - MEDIUM: needs attention, reported as a warning
    - HIGH: significant risk to delivery
    - CRITICAL: several aggravating factors combined
    """
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RecommendationType(str, Enum):
    TIMING = "timing"
    CONTROL = "control"
    GUARANTEE = "guarantee"
    CURRENCY = "currency"
    SUPPORT = "support"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Tender(_CamelModel):
    """
    Public procurement record to be risk-scored.

    Only `amount`, `category` and the three timestamps feed the rules; every
    other field is display data. Naive timestamps are treated as UTC.
    """

    id: Optional[str] = Field(default=None, description="Dataset identifier.")
    title: str = Field(default="", description="Tender title.")
    description: str = Field(default="", description="Free-text description.")
    organization: str = Field(default="", description="Procuring organization.")

    amount: int = Field(..., ge=0, description="Contract value in tenge.")
    category: str = Field(..., min_length=1, description="construction, medical, it, other...")

    execution_start: datetime = Field(..., description="Start of the execution window.")
    execution_end: datetime = Field(..., description="End of the execution window.")
    deadline: datetime = Field(..., description="Bid submission deadline.")

    category_name: Optional[str] = Field(default=None, description="Display label for category.")
    region: Optional[str] = None
    contact: Optional[str] = None
    publish_date: Optional[datetime] = None
    status: Optional[str] = None

    @field_validator("execution_start", "execution_end", "deadline", "publish_date")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def check_execution_window(self) -> "Tender":
        if self.execution_start > self.execution_end:
            raise ValueError("executionStart must not be later than executionEnd")
        return self


class RiskFinding(_CamelModel):
    """A detected risk condition. Used for both risks and warnings."""

    type: FindingType
    severity: Severity
    title: str
    description: str


class Recommendation(_CamelModel):
    """A mitigation the procuring organization should consider."""

    type: RecommendationType
    title: str
    description: str


class RiskAssessment(_CamelModel):
    """
    Result of evaluating one tender.

    Sequences keep the order in which rules fired; that order is used for
    display only.
    """

    risk_score: int = Field(..., ge=0, le=100, description="Clamped score (0-100).")
    raw_score: int = Field(..., ge=0, description="Sum of rule increments before clamping.")
    risk_level: RiskLevel
    risks: List[RiskFinding] = Field(default_factory=list)
    warnings: List[RiskFinding] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    summary: str = ""


class RiskRuleConfig(BaseModel):
    """
    Calibration constants for the rule engine.

    Months are 1-based (January = 1). `months_per_billion` and
    `timeline_slack` are heuristics without a documented derivation;
    they are kept as-is for compatibility and can be overridden from settings.
    """

    model_config = ConfigDict(frozen=True)

    # Seasonal
    winter_months: FrozenSet[int] = frozenset({11, 12, 1, 2, 3})
    winter_risk_categories: FrozenSet[str] = frozenset({TenderCategory.CONSTRUCTION.value})
    seasonal_points: int = 35

    # Financial (amounts in billions of tenge)
    large_amount_billions: float = 2.0
    large_amount_points: int = 25
    significant_amount_billions: float = 1.0
    significant_amount_points: int = 15

    # Deadline pressure
    deadline_window_days: int = 10
    deadline_points: int = 15

    # Timeline realism
    timeline_min_billions: float = 0.5
    months_per_billion: float = Field(default=3.0, gt=0)
    timeline_slack: float = Field(default=0.7, gt=0)
    days_per_month: int = 30
    timeline_points: int = 20

    # Combined seasonal + scale
    combined_min_billions: float = 1.0
    combined_points: int = 20

    # Category advisories
    medical_min_billions: float = 0.5

    # Score and levels
    max_score: int = 100
    medium_level_min: int = 30
    high_level_min: int = 60


DEFAULT_RULE_CONFIG = RiskRuleConfig()
