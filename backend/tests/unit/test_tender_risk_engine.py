"""
Unit tests for TenderRiskEngine.

Each rule is exercised in isolation, then the combined scenarios check
ordering, clamping and the rendered summary.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from analyzers.tender_risk_engine import (
    FindingType,
    RecommendationType,
    RiskLevel,
    RiskRuleConfig,
    Severity,
    Tender,
    TenderRiskEngine,
    days_until,
    evaluate_tender,
    format_amount,
    format_month,
    round_half_up,
)


def utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    return TenderRiskEngine()


def finding_types(findings):
    return [f.type for f in findings]


class TestSeasonalRule:
    """Winter execution for winter-sensitive categories."""

    def test_winter_start_month_triggers(self, engine, tender_factory, now):
        tender = tender_factory(
            category="construction",
            execution_start=utc(2027, 1, 10),
            execution_end=utc(2027, 6, 30),
        )

        result = engine.evaluate(tender, now)

        assert finding_types(result.risks) == [FindingType.SEASONAL]
        assert result.risks[0].severity == Severity.HIGH
        assert "январь - июнь" in result.risks[0].description
        assert result.risk_score == 35
        assert result.risk_level == RiskLevel.MEDIUM
        assert [r.type for r in result.recommendations] == [RecommendationType.TIMING]

    def test_winter_end_month_triggers(self, engine, tender_factory, now):
        tender = tender_factory(
            category="construction",
            execution_start=utc(2027, 9, 1),
            execution_end=utc(2027, 11, 15),
        )

        result = engine.evaluate(tender, now)

        assert FindingType.SEASONAL in finding_types(result.risks)

    def test_summer_window_does_not_trigger(self, engine, tender_factory, now):
        tender = tender_factory(category="construction")

        result = engine.evaluate(tender, now)

        assert result.risks == []
        assert result.risk_score == 0

    @pytest.mark.parametrize("category", ["medical", "it", "other"])
    def test_non_construction_never_gets_seasonal_or_timeline(self, engine, tender_factory, now, category):
        tender = tender_factory(
            category=category,
            amount=1_900_000_000,
            execution_start=utc(2027, 1, 1),
            execution_end=utc(2027, 1, 5),
        )

        result = engine.evaluate(tender, now)

        types = finding_types(result.risks) + finding_types(result.warnings)
        assert FindingType.SEASONAL not in types
        assert FindingType.TIMELINE not in types
        assert FindingType.COMBINED not in types


class TestFinancialRule:
    """Contract value thresholds."""

    def test_two_billion_is_a_high_risk(self, engine, tender_factory, now):
        result = engine.evaluate(tender_factory(amount=2_000_000_000), now)

        assert finding_types(result.risks) == [FindingType.FINANCIAL]
        assert result.risks[0].severity == Severity.HIGH
        assert "2.0 млрд ₸" in result.risks[0].description
        assert result.risk_score == 25
        assert [r.type for r in result.recommendations] == [RecommendationType.CONTROL]

    def test_branches_are_mutually_exclusive(self, engine, tender_factory, now):
        result = engine.evaluate(tender_factory(amount=1_500_000_000), now)

        assert result.risks == []
        assert finding_types(result.warnings) == [FindingType.FINANCIAL]
        assert result.warnings[0].severity == Severity.MEDIUM
        assert result.risk_score == 15
        assert result.recommendations == []

    def test_below_one_billion_is_silent(self, engine, tender_factory, now):
        result = engine.evaluate(tender_factory(amount=999_999_999), now)

        assert result.risks == []
        assert result.warnings == []


class TestDeadlineRule:
    """Bid deadline pressure."""

    @pytest.mark.parametrize(
        "delta, expected_days",
        [
            (timedelta(hours=1), 1),
            (timedelta(days=5), 5),
            (timedelta(days=9), 9),
        ],
    )
    def test_short_deadline_triggers(self, engine, tender_factory, now, delta, expected_days):
        result = engine.evaluate(tender_factory(deadline=now + delta), now)

        assert finding_types(result.warnings) == [FindingType.DEADLINE]
        assert f"осталось {expected_days} дней" in result.warnings[0].description
        assert result.risk_score == 15

    @pytest.mark.parametrize(
        "delta",
        [
            timedelta(0),
            timedelta(days=-3),
            timedelta(days=10),
            timedelta(days=9, hours=1),
            timedelta(days=60),
        ],
    )
    def test_deadline_outside_window_does_not_trigger(self, engine, tender_factory, now, delta):
        result = engine.evaluate(tender_factory(deadline=now + delta), now)

        assert FindingType.DEADLINE not in finding_types(result.warnings)


class TestTimelineRule:
    """Execution window realism for construction."""

    def test_short_window_for_amount_triggers(self, engine, tender_factory, now):
        # 0.5 bn -> 1.5 expected months, 0.7 slack -> 1.05 months needed
        tender = tender_factory(
            category="construction",
            amount=500_000_000,
            execution_start=utc(2027, 4, 1),
            execution_end=utc(2027, 4, 30),
        )

        result = engine.evaluate(tender, now)

        assert finding_types(result.risks) == [FindingType.TIMELINE]
        assert "(1 мес.)" in result.risks[0].description
        assert result.risk_score == 20

    def test_sufficient_window_does_not_trigger(self, engine, tender_factory, now):
        tender = tender_factory(
            category="construction",
            amount=500_000_000,
            execution_start=utc(2027, 4, 1),
            execution_end=utc(2027, 5, 15),
        )

        assert engine.evaluate(tender, now).risks == []

    def test_small_contracts_are_exempt(self, engine, tender_factory, now):
        tender = tender_factory(
            category="construction",
            amount=499_000_000,
            execution_start=utc(2027, 4, 1),
            execution_end=utc(2027, 4, 2),
        )

        assert engine.evaluate(tender, now).risks == []

    def test_calibration_comes_from_config(self, tender_factory, now):
        tender = tender_factory(
            category="construction",
            amount=500_000_000,
            execution_start=utc(2027, 4, 1),
            execution_end=utc(2027, 4, 30),
        )
        relaxed = TenderRiskEngine(RiskRuleConfig(months_per_billion=1.0))

        assert relaxed.evaluate(tender, now).risks == []


class TestCombinedRule:
    """Large winter construction contracts."""

    def test_combined_risk_is_critical(self, engine, tender_factory, now):
        tender = tender_factory(
            category="construction",
            amount=1_000_000_000,
            execution_start=utc(2026, 12, 1),
            execution_end=utc(2027, 6, 30),
        )

        result = engine.evaluate(tender, now)

        assert finding_types(result.risks) == [FindingType.SEASONAL, FindingType.COMBINED]
        assert result.risks[1].severity == Severity.CRITICAL
        assert finding_types(result.warnings) == [FindingType.FINANCIAL]
        assert result.risk_score == 35 + 15 + 20
        assert result.risk_level == RiskLevel.HIGH
        assert [r.type for r in result.recommendations] == [
            RecommendationType.TIMING,
            RecommendationType.GUARANTEE,
        ]


class TestCategoryRules:
    """Advisories for medical and IT tenders."""

    def test_expensive_medical_adds_zero_point_warning(self, engine, tender_factory, now):
        result = engine.evaluate(tender_factory(category="medical", amount=500_000_000), now)

        assert finding_types(result.warnings) == [FindingType.CATEGORY]
        assert result.risk_score == 0
        assert result.risk_level == RiskLevel.LOW
        assert [r.type for r in result.recommendations] == [RecommendationType.CURRENCY]
        assert "требует внимания" in result.summary

    def test_cheap_medical_is_silent(self, engine, tender_factory, now):
        result = engine.evaluate(tender_factory(category="medical", amount=400_000_000), now)

        assert result.warnings == []
        assert result.recommendations == []

    def test_it_scenario_has_only_support_recommendation(self, engine, tender_factory, now):
        tender = tender_factory(category="it", amount=100_000_000, deadline=now + timedelta(days=60))

        result = engine.evaluate(tender, now)

        assert result.risks == []
        assert result.warnings == []
        assert [r.type for r in result.recommendations] == [RecommendationType.SUPPORT]
        assert result.risk_score == 0
        assert result.risk_level == RiskLevel.LOW


class TestScoreAndLevel:
    """Aggregation, clamping and level mapping."""

    def test_worst_case_is_clamped_to_100(self, engine, tender_factory, now):
        # Jan-15 .. Mar-01 is 1.5 months, far below 7.5 * 0.7, so the timeline rule fires too
        tender = tender_factory(
            category="construction",
            amount=2_500_000_000,
            execution_start=utc(2027, 1, 15),
            execution_end=utc(2027, 3, 1),
            deadline=now + timedelta(days=5),
        )

        result = engine.evaluate(tender, now)

        assert finding_types(result.risks) == [
            FindingType.SEASONAL,
            FindingType.FINANCIAL,
            FindingType.TIMELINE,
            FindingType.COMBINED,
        ]
        assert finding_types(result.warnings) == [FindingType.DEADLINE]
        assert result.raw_score == 115
        assert result.risk_score == 100
        assert result.risk_level == RiskLevel.HIGH

    def test_large_winter_contract_with_short_deadline_scores_95(self, engine, tender_factory, now):
        # Six-month window keeps the timeline rule quiet
        tender = tender_factory(
            category="construction",
            amount=2_500_000_000,
            execution_start=utc(2026, 11, 1),
            execution_end=utc(2027, 4, 30),
            deadline=now + timedelta(days=5),
        )

        result = engine.evaluate(tender, now)

        assert finding_types(result.risks) == [
            FindingType.SEASONAL,
            FindingType.FINANCIAL,
            FindingType.COMBINED,
        ]
        assert finding_types(result.warnings) == [FindingType.DEADLINE]
        assert result.risk_score == 95
        assert result.raw_score == 95
        assert result.risk_level == RiskLevel.HIGH

    @pytest.mark.parametrize(
        "score, level",
        [
            (0, RiskLevel.LOW),
            (29, RiskLevel.LOW),
            (30, RiskLevel.MEDIUM),
            (59, RiskLevel.MEDIUM),
            (60, RiskLevel.HIGH),
            (100, RiskLevel.HIGH),
        ],
    )
    def test_level_boundaries(self, engine, score, level):
        assert engine.risk_level_for(score) == level

    def test_evaluation_is_deterministic(self, engine, tender_factory, now):
        tender = tender_factory(category="construction", amount=1_200_000_000)

        assert engine.evaluate(tender, now) == engine.evaluate(tender, now)

    def test_evaluate_tender_uses_default_config(self, tender_factory, now):
        tender = tender_factory(amount=2_000_000_000)

        assert evaluate_tender(tender, now).risk_score == 25


class TestSummary:
    """Markdown summary text."""

    def test_clean_tender_summary(self, engine, tender_factory, now):
        result = engine.evaluate(tender_factory(title="Поставка бумаги"), now)

        assert result.summary == (
            "**Общая оценка риска: 0% (низкий)**\n\n"
            'Тендер "Поставка бумаги" не имеет существенных рисков. '
            "Рекомендуется стандартная процедура проверки поставщика."
        )

    def test_summary_lists_risk_and_warning_titles(self, engine, tender_factory, now):
        tender = tender_factory(
            title="Мост",
            category="construction",
            amount=1_000_000_000,
            execution_start=utc(2026, 12, 1),
            execution_end=utc(2027, 6, 30),
        )

        result = engine.evaluate(tender, now)

        assert result.summary == (
            "**Общая оценка риска: 70% (высокий)**\n\n"
            'Тендер "Мост" требует внимания.\n\n'
            "**Выявлено критических рисков: 2**\n"
            "- Сезонный риск\n"
            "- Комбинированный риск\n"
            "\n"
            "**Предупреждений: 1**\n"
            "- Значительная сумма контракта\n"
        )


class TestHelpers:
    """Formatting and date helpers."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (2_500_000_000, "2.5 млрд ₸"),
            (1_000_000_000, "1.0 млрд ₸"),
            (350_000_000, "350 млн ₸"),
            (12_500, "12\u00a0500 ₸"),
        ],
    )
    def test_format_amount(self, amount, expected):
        assert format_amount(amount) == expected

    def test_format_month_is_one_based(self):
        assert format_month(1) == "январь"
        assert format_month(12) == "декабрь"

    def test_days_until_counts_partial_days(self):
        assert days_until(utc(2027, 1, 2) + timedelta(minutes=1), utc(2027, 1, 1)) == 2
        assert days_until(utc(2027, 1, 1), utc(2027, 1, 1)) == 0
        assert days_until(utc(2027, 1, 1), utc(2027, 1, 4)) == -3

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(1.49) == 1


class TestTenderValidation:
    """Preconditions are enforced when a Tender is built."""

    def test_negative_amount_is_rejected(self, tender_factory):
        with pytest.raises(ValidationError):
            tender_factory(amount=-1)

    def test_inverted_execution_window_is_rejected(self, tender_factory):
        with pytest.raises(ValidationError):
            tender_factory(execution_start=utc(2027, 5, 1), execution_end=utc(2027, 4, 1))

    def test_naive_timestamps_are_treated_as_utc(self, tender_factory):
        tender = tender_factory(deadline=datetime(2027, 1, 1, 12, 0))

        assert tender.deadline.tzinfo is not None
        assert tender.deadline == utc(2027, 1, 1) + timedelta(hours=12)

    def test_parses_camel_case_records(self):
        tender = Tender.model_validate(
            {
                "amount": 10,
                "category": "it",
                "categoryName": "ИТ",
                "executionStart": "2027-01-01T00:00:00Z",
                "executionEnd": "2027-02-01T00:00:00Z",
                "deadline": "2026-12-01T00:00:00Z",
            }
        )

        assert tender.category_name == "ИТ"
        assert tender.execution_end.month == 2
