"""
Air-quality data service (WAQI).

Fetches station lists and hourly feeds from the World Air Quality Index
endpoints, keeps only the latest value per pollutant, and classifies
readings with the pollutant classifier.

Example:
    async with httpx.AsyncClient(timeout=15) as client:
        service = AirQualityService(client)
        city = await service.get_all_air_quality()
        print(city.average_aqi, city.average_aqi_status.label)
"""

import asyncio
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx

from analyzers.pollutant_classifier import PollutantKind, build_measurement, classify_aqi
from app.core.cache import TTLCache
from app.core.config import settings
from app.core.exceptions import MonitorBaseException, StationNotFoundError, UpstreamDataError
from app.core.logging import get_logger
from app.schemas.air_quality import (
    Attribution,
    CityAirQuality,
    Coordinates,
    HistoryPoint,
    Station,
    StationCounts,
    StationDetails,
    StationHistory,
    StationList,
    StationSnapshot,
)

logger = get_logger(__name__)

POLLUTANT_KINDS = [kind.value for kind in PollutantKind]
NO_DATA_MARK = "-"


# =============================================================================
# PARSING HELPERS
# =============================================================================


def normalize_station_id(station_id: str | int) -> str:
    """'A517510' -> '517510'. Numeric ids are returned unchanged."""
    return str(station_id).strip().removeprefix("A")


def parse_aqi(raw: Any) -> Optional[int]:
    """Upstream AQI as int, or None for '-' / empty / unparseable values."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or text == NO_DATA_MARK:
        return None
    try:
        return int(text)
    except ValueError:
        try:
            return int(float(text))
        except ValueError:
            return None


def parse_time(raw: Any) -> Optional[datetime]:
    """ISO-8601 timestamp (with optional trailing Z); naive values are UTC."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _geo(geo: Any) -> Coordinates:
    if isinstance(geo, (list, tuple)) and len(geo) >= 2:
        return Coordinates(lat=geo[0], lng=geo[1])
    return Coordinates()


def parse_station(raw: dict) -> Station:
    idx = str(raw["idx"])
    aqi = parse_aqi(raw.get("aqi"))
    return Station(
        id=normalize_station_id(idx),
        idx=idx,
        name=raw.get("name") or "Unknown",
        aqi=aqi,
        has_data=aqi is not None,
        last_update=str(raw["utime"]) if raw.get("utime") is not None else None,
        coordinates=_geo(raw.get("geo")),
    )


def extract_latest_pollutants(data: dict) -> dict:
    """Latest reading per pollutant kind; kinds without readings are omitted."""
    pollutants = {}
    for kind in POLLUTANT_KINDS:
        series = data.get(kind)
        if not series:
            continue
        latest = series[-1]
        if latest.get("mean") is None:
            continue
        pollutants[kind] = build_measurement(kind, latest["mean"], parse_time(latest.get("time")))
    return pollutants


def filter_series_since(series: Any, cutoff: datetime) -> list[HistoryPoint]:
    """Readings at or after `cutoff`; entries with unreadable times are dropped."""
    if not isinstance(series, list):
        return []

    points = []
    for item in series:
        if not isinstance(item, dict):
            continue
        moment = parse_time(item.get("time"))
        if moment is not None and moment >= cutoff:
            points.append(HistoryPoint(time=item["time"], value=item.get("mean")))
    return points


# =============================================================================
# SERVICE
# =============================================================================


class AirQualityService:
    """
    Client for the WAQI map-bounds and hourly-feed endpoints.

    Attributes:
        client: Shared httpx.AsyncClient (timeouts configured by the owner).
        cache: TTL cache for city-wide snapshots, keyed by bounds.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        bounds_url: str = settings.waqi_bounds_url,
        station_url: str = settings.waqi_station_url,
        city_name: str = settings.city_name,
        default_bounds: str = settings.default_bounds,
        cache: Optional[TTLCache[CityAirQuality]] = None,
    ) -> None:
        self.client = client
        self.bounds_url = bounds_url
        self.station_url = station_url.rstrip("/")
        self.city_name = city_name
        self.default_bounds = default_bounds
        self.cache = cache

    async def _request_json(
        self,
        method: str,
        url: str,
        source: str,
        station_id: Optional[str] = None,
        **kwargs,
    ) -> dict:
        """
        Perform a request and return the payload of a `status == "ok"` answer.

        When `station_id` is given, a 404 or an "Unknown station" answer is
        reported as StationNotFoundError instead of UpstreamDataError.
        """
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise UpstreamDataError(
                "Request failed", source=source, details=f"{type(e).__name__}: {e}"
            ) from e

        if response.status_code == 404 and station_id is not None:
            raise StationNotFoundError(station_id)
        if not response.is_success:
            raise UpstreamDataError("Unexpected response", source=source, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamDataError("Response is not valid JSON", source=source) from e

        if not isinstance(payload, dict) or payload.get("status") != "ok":
            status = payload.get("status") if isinstance(payload, dict) else None
            message = str(payload.get("data") or payload.get("message") or "") if isinstance(payload, dict) else ""
            if station_id is not None and "unknown" in message.lower():
                raise StationNotFoundError(station_id, details=message)
            raise UpstreamDataError("Upstream returned error status", source=source, details=str(status))

        return payload

    async def get_stations_in_bounds(self, bounds: Optional[str] = None) -> StationList:
        """List monitoring stations inside a lng/lat bounding box."""
        payload = await self._request_json(
            "POST",
            self.bounds_url,
            source="WAQI bounds",
            data={"bounds": bounds or self.default_bounds},
        )

        try:
            stations = [parse_station(raw) for raw in payload["data"]]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamDataError("Malformed station list", source="WAQI bounds", details=str(e)) from e

        logger.info(f"Stations in bounds: {len(stations)} ({sum(s.has_data for s in stations)} with data)")
        return StationList(
            stations=stations,
            total_count=len(stations),
            with_data=sum(1 for s in stations if s.has_data),
        )

    async def _fetch_feed(self, station_id: str | int) -> tuple[str, dict]:
        sid = normalize_station_id(station_id)
        payload = await self._request_json(
            "GET", f"{self.station_url}/{sid}", source="WAQI station", station_id=sid
        )
        return sid, payload

    async def get_station_details(self, station_id: str | int) -> StationDetails:
        """
        Latest pollutant readings for one station.

        Raises:
            StationNotFoundError: Unknown station id.
            UpstreamDataError: Provider unavailable or malformed answer.
        """
        sid, payload = await self._fetch_feed(station_id)

        try:
            meta = payload.get("meta") or {}
            atrb = payload.get("atrb") or {}
            utime = meta.get("utime")
            return StationDetails(
                id=str(meta.get("id") or sid),
                name=meta.get("name") or "Unknown",
                coordinates=_geo(meta.get("geo")),
                last_update=datetime.fromtimestamp(utime, tz=timezone.utc) if utime else None,
                attribution=Attribution(name=atrb.get("name"), url=atrb.get("url")),
                pollutants=extract_latest_pollutants(payload.get("data") or {}),
                raw_feed=payload.get("feed"),
            )
        except (AttributeError, KeyError, TypeError, ValueError, OverflowError) as e:
            raise UpstreamDataError("Malformed station feed", source="WAQI station", details=str(e)) from e

    async def _details_or_none(self, station: Station) -> Optional[StationDetails]:
        try:
            return await self.get_station_details(station.id)
        except MonitorBaseException as e:
            logger.warning(f"Details unavailable for station {station.id}: {e}")
            return None

    async def get_all_air_quality(
        self,
        bounds: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CityAirQuality:
        """
        City snapshot: stations with data (plus details) first, then the rest.

        A failing detail call only blanks that station's `details`.
        """
        bounds = bounds or self.default_bounds
        if self.cache is not None:
            cached = self.cache.get(bounds)
            if cached is not None:
                logger.info("[AIR] Cache HIT for bounds")
                return cached

        station_list = await self.get_stations_in_bounds(bounds)
        with_data = [s for s in station_list.stations if s.has_data]
        without_data = [s for s in station_list.stations if not s.has_data]

        details = await asyncio.gather(*(self._details_or_none(s) for s in with_data))

        snapshots = [
            StationSnapshot(**station.model_dump(), aqi_status=classify_aqi(station.aqi), details=detail)
            for station, detail in zip(with_data, details)
        ]
        snapshots += [
            StationSnapshot(**station.model_dump(), aqi_status=classify_aqi(None), details=None)
            for station in without_data
        ]

        valid_aqi = [s.aqi for s in with_data if s.aqi is not None]
        average_aqi = math.floor(sum(valid_aqi) / len(valid_aqi) + 0.5) if valid_aqi else None

        result = CityAirQuality(
            city=self.city_name,
            average_aqi=average_aqi,
            average_aqi_status=classify_aqi(average_aqi),
            stations=snapshots,
            summary=StationCounts(
                total=len(snapshots),
                with_data=len(with_data),
                without_data=len(snapshots) - len(with_data),
            ),
            last_update=now or datetime.now(timezone.utc),
        )

        if self.cache is not None:
            self.cache.set(bounds, result)
        return result

    async def get_station_history(
        self,
        station_id: str | int,
        hours: int = 24,
        now: Optional[datetime] = None,
    ) -> StationHistory:
        """Per-pollutant readings from the last `hours` hours, for charts."""
        sid, payload = await self._fetch_feed(station_id)
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(hours=hours)
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise UpstreamDataError("Malformed station feed", source="WAQI station")

        return StationHistory(
            station_id=sid,
            history={kind: filter_series_since(data.get(kind), cutoff) for kind in POLLUTANT_KINDS},
            period=f"{hours} hours",
        )

