import logging
from contextlib import contextmanager
from typing import Any, List
from pydantic import ValidationError
from models.itinerary import Itinerary
from schemas.itinerary import ItineraryPayload
from services.itinerary_repository import InvalidIdError, ItineraryRepository, NotFoundError
from utils.errors import ApiError, Forbidden, InternalError, InvalidRequest, NotFound

logger = logging.getLogger(__name__)


class ItineraryService:
    """
    Authorization and validation in front of the itinerary repository.

    Every operation takes the caller's user id as resolved by the session
    dependency. For per-id operations the record is looked up first and the
    ownership check runs only once it is known to exist, so a caller can
    tell "not yours" (403) apart from "no such itinerary" (404).
    """

    def __init__(self, repository: ItineraryRepository):
        self.repository = repository

    @contextmanager
    def _guard(self, failure_message: str):
        try:
            yield
        except ApiError:
            raise
        except Exception:
            self.repository.db.rollback()
            logger.exception(failure_message)
            raise InternalError(failure_message)

    def _fetch_owned(self, caller_id: str, itinerary_id: str) -> Itinerary:
        try:
            itin = self.repository.get_by_id(itinerary_id)
        except InvalidIdError:
            raise InvalidRequest("Invalid itinerary ID")
        except NotFoundError:
            raise NotFound("Itinerary not found")

        if itin.owner_id != caller_id:
            logger.info("User %s denied access to itinerary %s", caller_id, itin.id)
            raise Forbidden("Not authorized to access this itinerary")
        return itin

    @staticmethod
    def _parse(body: Any) -> ItineraryPayload:
        if not isinstance(body, dict):
            raise InvalidRequest("Invalid request")
        try:
            payload = ItineraryPayload.model_validate(body)
        except ValidationError:
            raise InvalidRequest("Invalid request")

        if not payload.title or not payload.start_date or not payload.end_date:
            raise InvalidRequest("Missing required fields")
        if payload.start_date > payload.end_date:
            raise InvalidRequest("Start date must be on or before end date")
        return payload

    def list_itineraries(self, caller_id: str) -> List[Itinerary]:
        with self._guard("Error fetching itineraries"):
            return self.repository.list_by_owner(caller_id)

    def get_itinerary(self, caller_id: str, itinerary_id: str) -> Itinerary:
        with self._guard("Error fetching itinerary"):
            return self._fetch_owned(caller_id, itinerary_id)

    def create_itinerary(self, caller_id: str, body: Any) -> Itinerary:
        payload = self._parse(body)
        with self._guard("Error creating itinerary"):
            itin = self.repository.create(
                owner_id=caller_id,
                title=payload.title,
                description=payload.description,
                start_date=payload.start_date,
                end_date=payload.end_date,
                locations=payload.locations,
            )
        logger.info("Created itinerary %s for user %s", itin.id, caller_id)
        return itin

    def update_itinerary(self, caller_id: str, itinerary_id: str, body: Any) -> Itinerary:
        with self._guard("Error updating itinerary"):
            itin = self._fetch_owned(caller_id, itinerary_id)
            payload = self._parse(body)
            itin = self.repository.update_by_id(
                itin.id,
                title=payload.title,
                description=payload.description,
                start_date=payload.start_date,
                end_date=payload.end_date,
                locations=payload.locations,
            )
        logger.info("Updated itinerary %s for user %s", itin.id, caller_id)
        return itin

    def delete_itinerary(self, caller_id: str, itinerary_id: str) -> None:
        with self._guard("Error deleting itinerary"):
            key = self._fetch_owned(caller_id, itinerary_id).id
            self.repository.delete_by_id(key)
        logger.info("Deleted itinerary %s for user %s", key, caller_id)
