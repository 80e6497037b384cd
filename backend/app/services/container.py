"""
Dependency Injection Container.

This module provides a centralized container for managing service dependencies
across the application. It holds singletons for the expensive resources (LLM
client, HTTP client, tender dataset) and builds the services on top of them.

The container pattern enables:
- Centralized dependency management
- Easy testing with mock dependencies
- Lazy initialization of expensive resources

Example:
    from app.services.container import get_container

    container = get_container()
    assessment = container.risk_engine.evaluate(tender, now)
    result = await container.narrative_generator.narrate(tender, assessment, now)
"""

from functools import lru_cache
from typing import Any, Optional

import httpx

from analyzers.tender_risk_engine import RiskRuleConfig, TenderRiskEngine
from app.core.cache import TTLCache
from app.core.config import Settings, settings as default_settings
from app.core.logging import AnalysisLogger
from app.services.air_quality import AirQualityService
from app.services.air_quality_advisor import AirQualityAdvisor
from app.services.llm_factory import get_llm
from app.services.narrative import NarrativeGenerator
from app.services.tender_repository import TenderRepository

_UNSET: Any = object()


class DependencyContainer:
    """
    Centralized container for application dependencies.

    Attributes:
        settings: Application settings used to build services.
        _llm_override: LLM forced by tests (None means local-only mode).
        _http_client: Shared httpx.AsyncClient for upstream calls.
    """

    def __init__(self, settings: Settings = default_settings) -> None:
        """Initialize the container with lazy service references."""
        self.settings = settings
        self._llm_override: Any = _UNSET
        self._http_client: Optional[httpx.AsyncClient] = None
        self._tender_repository: Optional[TenderRepository] = None
        self._air_quality_service: Optional[AirQualityService] = None
        self._risk_engine: Optional[TenderRiskEngine] = None
        self._narrative_generator: Optional[NarrativeGenerator] = None
        self._advisor: Optional[AirQualityAdvisor] = None
        self._logger: Optional[AnalysisLogger] = None

    def _resolve_llm(self, temperature: float):
        """Chat model for the given temperature, or None when no API key is configured."""
        if self._llm_override is not _UNSET:
            return self._llm_override
        return get_llm(temperature)

    @property
    def logger(self) -> AnalysisLogger:
        if self._logger is None:
            self._logger = AnalysisLogger("tenders")
        return self._logger

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.settings.upstream_timeout_seconds,
                headers={"User-Agent": "vko-monitor/0.1"},
            )
        return self._http_client

    @property
    def tender_repository(self) -> TenderRepository:
        if self._tender_repository is None:
            self._tender_repository = TenderRepository(self.settings.tenders_data_path)
        return self._tender_repository

    @property
    def risk_engine(self) -> TenderRiskEngine:
        """Rule engine with calibration constants taken from settings."""
        if self._risk_engine is None:
            self._risk_engine = TenderRiskEngine(
                RiskRuleConfig(
                    months_per_billion=self.settings.months_per_billion,
                    timeline_slack=self.settings.timeline_slack,
                )
            )
        return self._risk_engine

    @property
    def air_quality_service(self) -> AirQualityService:
        if self._air_quality_service is None:
            self._air_quality_service = AirQualityService(
                client=self.http_client,
                bounds_url=self.settings.waqi_bounds_url,
                station_url=self.settings.waqi_station_url,
                city_name=self.settings.city_name,
                default_bounds=self.settings.default_bounds,
                cache=TTLCache(
                    ttl_seconds=self.settings.cache_ttl_seconds,
                    max_size=self.settings.cache_max_size,
                ),
            )
        return self._air_quality_service

    @property
    def narrative_generator(self) -> NarrativeGenerator:
        if self._narrative_generator is None:
            self._narrative_generator = NarrativeGenerator(
                llm=self._resolve_llm(self.settings.narrative_temperature),
                timeout_seconds=self.settings.llm_timeout_seconds,
                logger=self.logger,
            )
        return self._narrative_generator

    @property
    def advisor(self) -> AirQualityAdvisor:
        if self._advisor is None:
            self._advisor = AirQualityAdvisor(
                llm=self._resolve_llm(self.settings.advisor_temperature),
                timeout_seconds=self.settings.llm_timeout_seconds,
            )
        return self._advisor

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._air_quality_service = None

    def reset(self) -> None:
        """
        Reset all cached services.

        Useful for testing to ensure fresh instances.
        """
        self._llm_override = _UNSET
        self._http_client = None
        self._tender_repository = None
        self._air_quality_service = None
        self._risk_engine = None
        self._narrative_generator = None
        self._advisor = None
        self._logger = None

    def override_llm(self, mock_llm) -> None:
        """
        Override the LLM with a mock (or None for local-only mode).

        Args:
            mock_llm: Mock LLM implementation for testing.
        """
        self._llm_override = mock_llm
        # Rebuild LLM consumers on next access
        self._narrative_generator = None
        self._advisor = None

    def override_http_client(self, client: httpx.AsyncClient) -> None:
        """Use a custom HTTP client (e.g. one with httpx.MockTransport)."""
        self._http_client = client
        self._air_quality_service = None

    def override_tender_repository(self, repository: TenderRepository) -> None:
        self._tender_repository = repository


@lru_cache(maxsize=1)
def get_container() -> DependencyContainer:
    """
    Get the singleton DependencyContainer instance.

    Uses lru_cache to ensure only one container exists per process.
    """
    return DependencyContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.

    Clears the lru_cache and allows a fresh container to be created.
    Useful for testing isolation.
    """
    get_container.cache_clear()
