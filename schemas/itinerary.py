from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from datetime import date, datetime

WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


def _calendar_date(v):
    """Blank means absent; a datetime (or ISO datetime string) keeps only its date."""
    if isinstance(v, str):
        if not v.strip():
            return None
        if "T" in v:
            return v.split("T", 1)[0]
    if isinstance(v, datetime):
        return v.date()
    return v


class Coordinates(BaseModel):
    lat: float
    lng: float


class Location(BaseModel):
    name: str
    address: str
    coordinates: Coordinates
    visit_date: Optional[date] = None
    notes: Optional[str] = None
    # Provider payloads are cached as-is; nothing here reads into them
    weather_data: Optional[Dict[str, Any]] = None
    nearby_attractions: List[Any] = Field(default_factory=list)

    model_config = WIRE_CONFIG

    @field_validator("visit_date", mode="before")
    @classmethod
    def _visit_date(cls, v):
        return _calendar_date(v)


class ItineraryPayload(BaseModel):
    """Body accepted by create and update.

    Required fields are optional here so that a missing one is reported by
    the service as a 400 rather than a schema error.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    locations: Optional[List[Location]] = None

    model_config = WIRE_CONFIG

    @field_validator("title", mode="before")
    @classmethod
    def _blank_title(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, v):
        return _calendar_date(v)


class ItineraryResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    locations: List[Location] = Field(default_factory=list)
    created_at: datetime

    model_config = WIRE_CONFIG


class ItineraryEnvelope(BaseModel):
    message: str
    itinerary: ItineraryResponse


class MessageResponse(BaseModel):
    message: str
