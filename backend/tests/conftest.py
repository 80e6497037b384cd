"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing the VKO monitor backend.
All fixtures use mocks to avoid real calls to the Groq API or to WAQI.

Usage:
    def test_example(mock_llm, test_container):
        # mock_llm is already configured as AsyncMock
        # test_container has mocked dependencies
        pass
"""

import json
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock


# Reference moment used by the rule engine tests
NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# LLM MOCK FIXTURES
# =============================================================================


@pytest.fixture
def mock_llm_response():
    """
    Factory fixture for creating mock LLM responses.

    Usage:
        def test_example(mock_llm_response):
            response = mock_llm_response("Test content")
            assert response.content == "Test content"
    """
    def _create_response(content: str = "Mocked LLM response"):
        response = MagicMock()
        response.content = content
        return response
    return _create_response


@pytest.fixture
def mock_llm(mock_llm_response):
    """
    AsyncMock that simulates ChatGroq behavior.

    Usage:
        async def test_example(mock_llm):
            mock_llm.ainvoke.return_value.content = "Custom"
            mock_llm.ainvoke.side_effect = RuntimeError("boom")
    """
    llm = AsyncMock()
    llm.ainvoke.return_value = mock_llm_response("Mocked LLM response")
    return llm


# =============================================================================
# TENDER FIXTURES
# =============================================================================


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def tender_factory():
    """
    Factory fixture for Tender records.

    Defaults describe a low-risk tender (category 'other', 100M tenge,
    summer execution, deadline two months after NOW). Override any field.

    Usage:
        def test_example(tender_factory):
            tender = tender_factory(category="construction", amount=2_500_000_000)
    """
    from analyzers.tender_risk_engine import Tender

    def _create_tender(**overrides):
        data = {
            "id": "T-TEST",
            "title": "Тестовый тендер",
            "description": "Описание тестового тендера",
            "organization": "ГУ «Тестовая организация»",
            "amount": 100_000_000,
            "category": "other",
            "execution_start": datetime(2027, 6, 1, tzinfo=timezone.utc),
            "execution_end": datetime(2027, 8, 31, tzinfo=timezone.utc),
            "deadline": NOW + timedelta(days=60),
        }
        data.update(overrides)
        return Tender(**data)
    return _create_tender


@pytest.fixture
def tender_records():
    """Raw camelCase records as stored in data/tenders.json."""
    return [
        {
            "id": "T-1",
            "title": "Реконструкция моста",
            "organization": "ГУ «Управление дорог»",
            "amount": 2_500_000_000,
            "category": "construction",
            "categoryName": "Строительство",
            "executionStart": "2027-01-15T00:00:00Z",
            "executionEnd": "2027-03-01T00:00:00Z",
            "deadline": "2027-01-05T18:00:00Z",
        },
        {
            "id": "T-2",
            "title": "Поставка томографа",
            "organization": "КГП «Областная больница»",
            "amount": 600_000_000,
            "category": "medical",
            "categoryName": "Медицинское оборудование",
            "executionStart": "2027-05-01T00:00:00Z",
            "executionEnd": "2027-07-01T00:00:00Z",
            "deadline": "2027-04-01T18:00:00Z",
        },
        {
            "id": "T-3",
            "title": "Внедрение СЭД",
            "organization": "ГУ «Управление цифровизации»",
            "amount": 100_000_000,
            "category": "it",
            "categoryName": "Информационные технологии",
            "executionStart": "2027-05-01T00:00:00Z",
            "executionEnd": "2027-09-01T00:00:00Z",
            "deadline": "2027-04-01T18:00:00Z",
        },
    ]


@pytest.fixture
def tenders_file(tmp_path, tender_records):
    """Dataset file written to a temporary directory."""
    path = tmp_path / "tenders.json"
    path.write_text(
        json.dumps(
            {
                "categories": [
                    {"id": "construction", "name": "Строительство"},
                    {"id": "medical", "name": "Медицинское оборудование"},
                    {"id": "it", "name": "Информационные технологии"},
                ],
                "tenders": tender_records,
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return path


# =============================================================================
# CONTAINER FIXTURES
# =============================================================================


@pytest.fixture
def test_container(mock_llm, tenders_file):
    """
    DependencyContainer with mocked LLM and a temporary tender dataset.

    Usage:
        async def test_example(test_container):
            result = await test_container.narrative_generator.narrate(tender, assessment)
    """
    from app.services.container import DependencyContainer
    from app.services.tender_repository import TenderRepository

    container = DependencyContainer()
    container.override_llm(mock_llm)
    container.override_tender_repository(TenderRepository(tenders_file))
    return container


# =============================================================================
# LOGGER FIXTURES
# =============================================================================


@pytest.fixture
def mock_logger():
    """
    Mock AnalysisLogger for asserting on trace calls.

    Usage:
        def test_example(mock_logger):
            generator = NarrativeGenerator(llm=None, logger=mock_logger)
            mock_logger.step.assert_called_once()
    """
    logger = MagicMock()
    logger.step = MagicMock()
    logger.fallback = MagicMock()
    logger.error = MagicMock()
    return logger


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
