from typing import Literal, Optional

from pydantic import Field

from analyzers.tender_risk_engine import RiskAssessment, Tender
from app.schemas.air_quality import CamelModel


class CategoryInfo(CamelModel):
    id: str
    name: str


class CategoryStatistics(CamelModel):
    count: int = 0
    amount: int = 0


class TenderStatistics(CamelModel):
    """Aggregates over the whole dataset."""
    total_count: int = 0
    total_amount: int = 0
    by_category: dict[str, CategoryStatistics] = Field(default_factory=dict)


class TenderListResponse(CamelModel):
    success: bool = True
    tenders: list[Tender] = Field(default_factory=list)
    categories: list[CategoryInfo] = Field(default_factory=list)
    statistics: TenderStatistics


class TenderResponse(CamelModel):
    success: bool = True
    tender: Tender


class TenderRisksResponse(CamelModel):
    success: bool = True
    tender_id: Optional[str] = None
    assessment: RiskAssessment


class TenderAnalysisResponse(CamelModel):
    """Narrative plus the full local assessment."""
    success: bool = True
    analysis: str = Field(description="AI narrative or the local rule summary")
    details: RiskAssessment
    source: Literal["ai", "local"]
    error: Optional[str] = Field(default=None, description="Reason the AI path fell back, if it did")
