import uuid
from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from models.itinerary import Itinerary
from schemas.itinerary import Location


class NotFoundError(Exception):
    pass


class InvalidIdError(ValueError):
    pass


def parse_itinerary_id(itinerary_id: str) -> str:
    """Return the canonical hex form of an id, or raise InvalidIdError."""
    try:
        return uuid.UUID(str(itinerary_id)).hex
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdError(itinerary_id)


def _serialize_locations(locations: Optional[List[Location]]) -> List[Dict[str, Any]]:
    return [loc.model_dump(mode="json", by_alias=True) for loc in (locations or [])]


class ItineraryRepository:
    """CRUD over itinerary rows. Each write is a single-row commit."""

    def __init__(self, db: Session):
        self.db = db

    def list_by_owner(self, owner_id: str) -> List[Itinerary]:
        return (
            self.db.query(Itinerary)
            .filter_by(owner_id=owner_id)
            .order_by(Itinerary.created_at.desc())
            .all()
        )

    def get_by_id(self, itinerary_id: str) -> Itinerary:
        key = parse_itinerary_id(itinerary_id)
        itin = self.db.get(Itinerary, key)
        if itin is None:
            raise NotFoundError(key)
        return itin

    def create(
        self,
        owner_id: str,
        title: str,
        start_date: date,
        end_date: date,
        description: Optional[str] = None,
        locations: Optional[List[Location]] = None,
    ) -> Itinerary:
        itin = Itinerary(
            owner_id=owner_id,
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            locations=_serialize_locations(locations),
        )
        self.db.add(itin)
        self.db.commit()
        self.db.refresh(itin)
        return itin

    def update_by_id(
        self,
        itinerary_id: str,
        title: str,
        start_date: date,
        end_date: date,
        description: Optional[str] = None,
        locations: Optional[List[Location]] = None,
    ) -> Itinerary:
        itin = self.get_by_id(itinerary_id)
        # Full replace of the mutable fields; owner_id and created_at never change
        itin.title = title
        itin.description = description
        itin.start_date = start_date
        itin.end_date = end_date
        itin.locations = _serialize_locations(locations)
        self.db.commit()
        self.db.refresh(itin)
        return itin

    def delete_by_id(self, itinerary_id: str) -> None:
        itin = self.get_by_id(itinerary_id)
        self.db.delete(itin)
        self.db.commit()
