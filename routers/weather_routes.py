from typing import Optional
from fastapi import APIRouter, Depends
from services.external_data import ExternalDataGateway, get_external_data_gateway
from utils.auth import get_current_user_id

router = APIRouter(tags=["Weather"])


# Current conditions plus the 5-day forecast, both as returned by the provider
@router.get("/weather")
def get_weather(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    user_id: str = Depends(get_current_user_id),
    gateway: ExternalDataGateway = Depends(get_external_data_gateway),
):
    return gateway.weather(lat, lon)
