"""
Static tender dataset.

Loads `data/tenders.json` once and validates every record through the
Tender model, so records reaching the risk engine already satisfy its
preconditions (non-negative amount, execution start not after end).
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from analyzers.tender_risk_engine import Tender
from app.core.exceptions import InvalidTenderError, TenderNotFoundError, UpstreamDataError
from app.core.logging import get_logger
from app.schemas.tenders import CategoryInfo, CategoryStatistics, TenderStatistics

logger = get_logger(__name__)


class TenderRepository:
    """
    Read-only access to the tender dataset.

    The file is read lazily on first access and kept in memory.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._tenders: Optional[dict[str, Tender]] = None
        self._categories: list[CategoryInfo] = []

    def _load(self) -> dict[str, Tender]:
        if self._tenders is not None:
            return self._tenders

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise UpstreamDataError("Dataset file not found", source="tender dataset", details=str(self.path)) from e
        except (OSError, json.JSONDecodeError) as e:
            raise UpstreamDataError("Dataset file unreadable", source="tender dataset", details=str(e)) from e

        if not isinstance(raw, dict) or not isinstance(raw.get("tenders"), list):
            raise UpstreamDataError("Dataset must contain a 'tenders' list", source="tender dataset")

        tenders: dict[str, Tender] = {}
        for record in raw["tenders"]:
            tender_id = str(record.get("id")) if isinstance(record, dict) and record.get("id") is not None else None
            try:
                tender = Tender.model_validate(record)
            except ValidationError as e:
                raise InvalidTenderError("Record failed validation", tender_id=tender_id, details=str(e)) from e
            if tender.id is None:
                raise InvalidTenderError("Record has no id")
            tenders[tender.id] = tender

        self._categories = [CategoryInfo.model_validate(c) for c in raw.get("categories", [])]
        self._tenders = tenders
        logger.info(f"Tender dataset loaded: {len(tenders)} tenders from {self.path.name}")
        return tenders

    def list_tenders(self) -> list[Tender]:
        return list(self._load().values())

    def get_tender(self, tender_id: str) -> Tender:
        """
        Raises:
            TenderNotFoundError: No tender with this id.
        """
        tender = self._load().get(str(tender_id))
        if tender is None:
            raise TenderNotFoundError(str(tender_id))
        return tender

    @property
    def categories(self) -> list[CategoryInfo]:
        self._load()
        return list(self._categories)

    def statistics(self) -> TenderStatistics:
        by_category: dict[str, CategoryStatistics] = {}
        total_amount = 0
        tenders = self.list_tenders()

        for tender in tenders:
            stats = by_category.setdefault(tender.category, CategoryStatistics())
            stats.count += 1
            stats.amount += tender.amount
            total_amount += tender.amount

        return TenderStatistics(
            total_count=len(tenders),
            total_amount=total_amount,
            by_category=by_category,
        )

    def reload(self) -> None:
        self._tenders = None
        self._categories = []
