from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import Any, List
from models.database import get_db
from schemas.itinerary import ItineraryEnvelope, ItineraryResponse, MessageResponse
from services.itinerary_repository import ItineraryRepository
from services.itinerary_service import ItineraryService
from utils.auth import get_current_user_id
from utils.errors import InvalidRequest

router = APIRouter(prefix="/itineraries", tags=["Itineraries"])


def get_itinerary_service(db: Session = Depends(get_db)) -> ItineraryService:
    return ItineraryService(ItineraryRepository(db))


# Raw JSON body, read only once the caller is authenticated; the service validates it
async def read_json_body(request: Request, user_id: str = Depends(get_current_user_id)) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise InvalidRequest("Invalid request")


# All itineraries owned by the caller, newest first
@router.get("", response_model=List[ItineraryResponse], response_model_exclude_none=True)
def list_itineraries(
    user_id: str = Depends(get_current_user_id),
    service: ItineraryService = Depends(get_itinerary_service),
):
    return service.list_itineraries(user_id)


@router.post("", response_model=ItineraryEnvelope, response_model_exclude_none=True, status_code=201)
def create_itinerary(
    user_id: str = Depends(get_current_user_id),
    body: Any = Depends(read_json_body),
    service: ItineraryService = Depends(get_itinerary_service),
):
    itin = service.create_itinerary(user_id, body)
    return {"message": "Itinerary created successfully", "itinerary": itin}


@router.get("/{itinerary_id}", response_model=ItineraryResponse, response_model_exclude_none=True)
def get_itinerary(
    itinerary_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ItineraryService = Depends(get_itinerary_service),
):
    return service.get_itinerary(user_id, itinerary_id)


# Full replace of title, description, dates and locations (owner only)
@router.put("/{itinerary_id}", response_model=ItineraryEnvelope, response_model_exclude_none=True)
def update_itinerary(
    itinerary_id: str,
    user_id: str = Depends(get_current_user_id),
    body: Any = Depends(read_json_body),
    service: ItineraryService = Depends(get_itinerary_service),
):
    itin = service.update_itinerary(user_id, itinerary_id, body)
    return {"message": "Itinerary updated successfully", "itinerary": itin}


@router.delete("/{itinerary_id}", response_model=MessageResponse)
def delete_itinerary(
    itinerary_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ItineraryService = Depends(get_itinerary_service),
):
    service.delete_itinerary(user_id, itinerary_id)
    return {"message": "Itinerary deleted successfully"}
