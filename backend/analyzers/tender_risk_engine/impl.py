"""
Tender Risk Engine - Implementation

Deterministic tender risk scoring with:
- Seasonal risk for cold-season construction
- Financial scale thresholds
- Bid deadline pressure
- Execution timeline realism
- Combined seasonal + scale aggravation
- Category advisories (medical imports, IT support)

The engine is a pure function of (tender, now, config): no clock reads,
no I/O, no shared state between calls.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional

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

logger = logging.getLogger(__name__)


ONE_DAY = timedelta(days=1)

MONTH_NAMES = (
    "январь", "февраль", "март", "апрель", "май", "июнь",
    "июль", "август", "сентябрь", "октябрь", "ноябрь", "декабрь",
)

RISK_LEVEL_LABELS = {
    RiskLevel.LOW: "низкий",
    RiskLevel.MEDIUM: "средний",
    RiskLevel.HIGH: "высокий",
}


# =============================================================================
# FORMATTING HELPERS
# =============================================================================


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (built-in round() is banker's)."""
    return int(math.floor(value + 0.5))


def format_amount(amount: int) -> str:
    """Human-readable tenge amount: '2.5 млрд ₸', '350 млн ₸', '12 500 ₸'."""
    if amount >= 1_000_000_000:
        return f"{amount / 1_000_000_000:.1f} млрд ₸"
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.0f} млн ₸"
    return f"{amount:,}".replace(",", "\u00a0") + " ₸"


def format_month(month: int) -> str:
    """Russian month name for a 1-based month number."""
    return MONTH_NAMES[month - 1]


def _as_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def days_until(later: datetime, earlier: datetime) -> int:
    """Whole days from `earlier` to `later`, rounded up (partial days count)."""
    return math.ceil((_as_aware(later) - _as_aware(earlier)) / ONE_DAY)


# =============================================================================
# ENGINE
# =============================================================================


class _Evaluation:
    """Mutable accumulator for a single evaluate() call."""

    def __init__(self) -> None:
        self.score = 0
        self.risks: List[RiskFinding] = []
        self.warnings: List[RiskFinding] = []
        self.recommendations: List[Recommendation] = []

    def risk(self, points: int, type_: FindingType, severity: Severity, title: str, description: str) -> None:
        self.score += points
        self.risks.append(RiskFinding(type=type_, severity=severity, title=title, description=description))

    def warning(self, points: int, type_: FindingType, title: str, description: str) -> None:
        self.score += points
        self.warnings.append(
            RiskFinding(type=type_, severity=Severity.MEDIUM, title=title, description=description)
        )

    def recommend(self, type_: RecommendationType, title: str, description: str) -> None:
        self.recommendations.append(Recommendation(type=type_, title=title, description=description))


class TenderRiskEngine:
    """
    Rule-based tender risk scorer.

    Rules run in a fixed order; each may add findings, recommendations and a
    non-negative score increment. The sum is clamped to [0, max_score] and
    mapped to a RiskLevel.

    Usage:
        engine = TenderRiskEngine()
        assessment = engine.evaluate(tender, now=datetime.now(timezone.utc))
        print(assessment.risk_score, assessment.risk_level)
    """

    def __init__(self, config: RiskRuleConfig = DEFAULT_RULE_CONFIG):
        """
        Initialize the engine.

        Args:
            config: Calibration constants (thresholds, increments, heuristics).
        """
        self.config = config

    def evaluate(self, tender: Tender, now: datetime) -> RiskAssessment:
        """
        Score a tender against the reference moment `now`.

        Args:
            tender: Validated tender record.
            now: Reference timestamp for deadline pressure.

        Returns:
            RiskAssessment with score, level, findings and summary text.
        """
        cfg = self.config
        result = _Evaluation()
        amount_billions = tender.amount / 1e9
        winter_risk = self.is_winter_risk(tender)

        self._seasonal_rule(tender, winter_risk, result)
        self._financial_rule(tender, amount_billions, result)
        self._deadline_rule(tender, now, result)
        self._timeline_rule(tender, amount_billions, result)
        self._combined_rule(tender, winter_risk, amount_billions, result)
        self._category_rules(tender, amount_billions, result)

        risk_score = max(0, min(result.score, cfg.max_score))
        risk_level = self.risk_level_for(risk_score)

        logger.info(
            f"Tender {tender.id or '<inline>'}: raw={result.score}, "
            f"score={risk_score}, level={risk_level.value}, "
            f"risks={len(result.risks)}, warnings={len(result.warnings)}"
        )

        return RiskAssessment(
            risk_score=risk_score,
            raw_score=result.score,
            risk_level=risk_level,
            risks=result.risks,
            warnings=result.warnings,
            recommendations=result.recommendations,
            summary=render_summary(tender, risk_score, risk_level, result.risks, result.warnings),
        )

    def risk_level_for(self, score: int) -> RiskLevel:
        """Map a clamped score to its level (low < 30 <= medium < 60 <= high)."""
        if score >= self.config.high_level_min:
            return RiskLevel.HIGH
        if score >= self.config.medium_level_min:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def is_winter_risk(self, tender: Tender) -> bool:
        """Winter-sensitive category with start or end month in the cold season."""
        cfg = self.config
        if tender.category not in cfg.winter_risk_categories:
            return False
        return (
            tender.execution_start.month in cfg.winter_months
            or tender.execution_end.month in cfg.winter_months
        )

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def _seasonal_rule(self, tender: Tender, winter_risk: bool, result: _Evaluation) -> None:
        if not winter_risk:
            return

        start = format_month(tender.execution_start.month)
        end = format_month(tender.execution_end.month)
        result.risk(
            self.config.seasonal_points,
            FindingType.SEASONAL,
            Severity.HIGH,
            "Сезонный риск",
            f"Выполнение строительных работ запланировано на зимний период ({start} - {end}). "
            "Низкие температуры могут привести к срыву сроков и снижению качества работ.",
        )
        result.recommend(
            RecommendationType.TIMING,
            "Перенос сроков",
            "Рекомендуется перенести начало работ на весенний период (апрель-май) для снижения рисков.",
        )

    def _financial_rule(self, tender: Tender, amount_billions: float, result: _Evaluation) -> None:
        cfg = self.config
        amount = format_amount(tender.amount)

        if amount_billions >= cfg.large_amount_billions:
            result.risk(
                cfg.large_amount_points,
                FindingType.FINANCIAL,
                Severity.HIGH,
                "Высокая стоимость контракта",
                f"Сумма контракта {amount} превышает {cfg.large_amount_billions:g} млрд тенге. "
                "Контракты такого масштаба требуют усиленного контроля и поэтапной приемки работ.",
            )
            result.recommend(
                RecommendationType.CONTROL,
                "Поэтапный контроль",
                "Рекомендуется разбить контракт на этапы с промежуточной приемкой "
                "и оплатой по факту выполнения.",
            )
        elif amount_billions >= cfg.significant_amount_billions:
            result.warning(
                cfg.significant_amount_points,
                FindingType.FINANCIAL,
                "Значительная сумма контракта",
                f"Сумма контракта {amount} требует тщательной проверки поставщика.",
            )

    def _deadline_rule(self, tender: Tender, now: datetime, result: _Evaluation) -> None:
        days_to_deadline = days_until(tender.deadline, now)
        if not 0 < days_to_deadline < self.config.deadline_window_days:
            return

        result.warning(
            self.config.deadline_points,
            FindingType.DEADLINE,
            "Сжатые сроки подачи заявок",
            f"До окончания приема заявок осталось {days_to_deadline} дней. "
            "Короткие сроки могут ограничить конкуренцию.",
        )

    def _timeline_rule(self, tender: Tender, amount_billions: float, result: _Evaluation) -> None:
        cfg = self.config
        if tender.category != TenderCategory.CONSTRUCTION.value:
            return
        if amount_billions < cfg.timeline_min_billions:
            return

        execution_days = days_until(tender.execution_end, tender.execution_start)
        months_for_execution = execution_days / cfg.days_per_month
        expected_months = amount_billions * cfg.months_per_billion

        if months_for_execution < expected_months * cfg.timeline_slack:
            result.risk(
                cfg.timeline_points,
                FindingType.TIMELINE,
                Severity.HIGH,
                "Нереалистичные сроки выполнения",
                f"Срок выполнения ({round_half_up(months_for_execution)} мес.) может быть "
                f"недостаточным для контракта на {format_amount(tender.amount)}. "
                "Есть риск срыва сроков или снижения качества.",
            )

    def _combined_rule(
        self,
        tender: Tender,
        winter_risk: bool,
        amount_billions: float,
        result: _Evaluation,
    ) -> None:
        if not winter_risk or amount_billions < self.config.combined_min_billions:
            return

        result.risk(
            self.config.combined_points,
            FindingType.COMBINED,
            Severity.CRITICAL,
            "Комбинированный риск",
            f"Крупный строительный контракт ({format_amount(tender.amount)}) с выполнением "
            "в зимний период. Сочетание факторов значительно повышает вероятность "
            "проблем с исполнением.",
        )
        result.recommend(
            RecommendationType.GUARANTEE,
            "Усиление гарантий",
            "Рекомендуется увеличить размер обеспечения контракта и включить "
            "штрафные санкции за срыв сроков.",
        )

    def _category_rules(self, tender: Tender, amount_billions: float, result: _Evaluation) -> None:
        if (
            tender.category == TenderCategory.MEDICAL.value
            and amount_billions >= self.config.medical_min_billions
        ):
            result.warning(
                0,
                FindingType.CATEGORY,
                "Импортное оборудование",
                "Медицинское оборудование часто импортируется. Учитывайте риски "
                "колебания курса валют и логистические задержки.",
            )
            result.recommend(
                RecommendationType.CURRENCY,
                "Валютные риски",
                "Рекомендуется фиксировать цену в тенге или предусмотреть механизм "
                "корректировки при изменении курса более 10%.",
            )

        if tender.category == TenderCategory.IT.value:
            result.recommend(
                RecommendationType.SUPPORT,
                "Техническая поддержка",
                "Убедитесь, что контракт включает гарантийное обслуживание "
                "и техническую поддержку минимум на 2 года.",
            )


# =============================================================================
# SUMMARY
# =============================================================================


def render_summary(
    tender: Tender,
    risk_score: int,
    risk_level: RiskLevel,
    risks: List[RiskFinding],
    warnings: List[RiskFinding],
) -> str:
    """Markdown summary: header, verdict sentence, then risk and warning titles."""
    summary = f"**Общая оценка риска: {risk_score}% ({RISK_LEVEL_LABELS[risk_level]})**\n\n"

    if not risks and not warnings:
        summary += (
            f'Тендер "{tender.title}" не имеет существенных рисков. '
            "Рекомендуется стандартная процедура проверки поставщика."
        )
        return summary

    summary += f'Тендер "{tender.title}" требует внимания.\n\n'

    if risks:
        summary += f"**Выявлено критических рисков: {len(risks)}**\n"
        for risk in risks:
            summary += f"- {risk.title}\n"
        summary += "\n"

    if warnings:
        summary += f"**Предупреждений: {len(warnings)}**\n"
        for warning in warnings:
            summary += f"- {warning.title}\n"

    return summary


# Convenience function
def evaluate_tender(
    tender: Tender,
    now: datetime,
    config: Optional[RiskRuleConfig] = None,
) -> RiskAssessment:
    """
    Evaluate a tender with default (or given) rule configuration.

    Convenience function for simple use cases.
    """
    engine = TenderRiskEngine(config or DEFAULT_RULE_CONFIG)
    return engine.evaluate(tender, now)
