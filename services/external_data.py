import logging
from typing import Any, Dict, Optional
import requests
from fastapi import Request
from utils.config import Settings
from utils.errors import InternalError, InvalidRequest

logger = logging.getLogger(__name__)

MAPBOX_GEOCODING_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{lon},{lat}.json"
OPENWEATHER_CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
OPENWEATHER_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"

NEARBY_PLACES_LIMIT = 10


def _require_coordinates(lat: Optional[float], lon: Optional[float]):
    if lat is None or lon is None:
        raise InvalidRequest("Latitude and longitude are required")


class ExternalDataGateway:
    """
    Pass-through access to the geocoding and weather providers.

    Provider payloads are returned exactly as received. There is no caching
    and no retry: any transport error, non-2xx status or undecodable body
    fails the whole call with InternalError.
    """

    def __init__(self, settings: Settings, http: Optional[requests.Session] = None):
        self.settings = settings
        self.http = http or requests.Session()

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        response = self.http.get(url, params=params, timeout=self.settings.upstream_timeout_seconds)
        response.raise_for_status()
        return response.json()

    def nearby_places(self, lat: Optional[float], lon: Optional[float], kind: str = "poi") -> Any:
        _require_coordinates(lat, lon)
        token = self.settings.mapbox_access_token
        if not token:
            raise InternalError("Mapbox API token is not configured")

        try:
            return self._get_json(
                MAPBOX_GEOCODING_URL.format(lon=lon, lat=lat),
                {
                    "access_token": token,
                    "types": kind or "poi",
                    "limit": NEARBY_PLACES_LIMIT,
                    "proximity": f"{lon},{lat}",
                },
            )
        except (requests.RequestException, ValueError):
            logger.exception("Error fetching nearby places for %s,%s", lat, lon)
            raise InternalError("Error fetching nearby places")

    def weather(self, lat: Optional[float], lon: Optional[float]) -> Dict[str, Any]:
        _require_coordinates(lat, lon)
        api_key = self.settings.openweather_api_key
        if not api_key:
            raise InternalError("Weather API key is not configured")

        params = {"lat": lat, "lon": lon, "appid": api_key, "units": "metric"}
        try:
            current = self._get_json(OPENWEATHER_CURRENT_URL, params)
            forecast = self._get_json(OPENWEATHER_FORECAST_URL, params)
        except (requests.RequestException, ValueError):
            logger.exception("Error fetching weather data for %s,%s", lat, lon)
            raise InternalError("Error fetching weather data")

        return {"current": current, "forecast": forecast}

    def close(self):
        self.http.close()


def get_external_data_gateway(request: Request) -> ExternalDataGateway:
    return request.app.state.external_data
