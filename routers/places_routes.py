from typing import Optional
from fastapi import APIRouter, Depends, Query
from services.external_data import ExternalDataGateway, get_external_data_gateway
from utils.auth import get_current_user_id

router = APIRouter(tags=["Places"])


@router.get("/places")
def get_nearby_places(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    type: str = Query("poi"),
    user_id: str = Depends(get_current_user_id),
    gateway: ExternalDataGateway = Depends(get_external_data_gateway),
):
    return gateway.nearby_places(lat, lon, type)
