"""Coach data sources for API consumers: a canned mock and the real API.

Which one is used is decided once, from configuration, by get_coaches_service().
"""
import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, Field

from backend import config
from backend.client import mock_data
from backend.schema.feedback import FeedbackSort

logger = logging.getLogger(__name__)


class SortByValues(str, Enum):
    RATING_ASC = "RATING_ASC"
    RATING_DESC = "RATING_DESC"
    DATE_ASC = "DATE_ASC"
    DATE_DESC = "DATE_DESC"


# UI sort option -> feedback query sortBy
FEEDBACK_SORTS = {
    SortByValues.DATE_DESC: FeedbackSort.NEWEST,
    SortByValues.DATE_ASC: FeedbackSort.OLDEST,
    SortByValues.RATING_DESC: FeedbackSort.HIGHEST_RATED,
    SortByValues.RATING_ASC: FeedbackSort.LOWEST_RATED,
}


class CoachesResponse(BaseModel):
    data: List[Any] = Field(default_factory=list)
    status: int
    message: Optional[str] = None
    current_page: Optional[int] = None
    total_pages: Optional[int] = None
    total_elements: Optional[int] = None
    average_rating: Optional[float] = None


class CoachesService(ABC):
    @abstractmethod
    def get_coaches(self) -> CoachesResponse:
        ...

    @abstractmethod
    def get_coach_by_id(self, coach_id: str) -> CoachesResponse:
        ...

    @abstractmethod
    def get_coach_time_slots(self, coach_id: str, date: str) -> CoachesResponse:
        ...

    @abstractmethod
    def get_coach_feedback(
        self,
        coach_id: str,
        page_number: int = 1,
        page_size: int = 10,
        sort_by: SortByValues = SortByValues.DATE_DESC,
    ) -> CoachesResponse:
        ...


class MockCoachesService(CoachesService):
    """Serves mock_data, for running a frontend without the API."""

    def get_coaches(self) -> CoachesResponse:
        return CoachesResponse(data=list(mock_data.COACHES), status=200, message="Coaches fetched successfully")

    def get_coach_by_id(self, coach_id: str) -> CoachesResponse:
        coach = next((c for c in mock_data.COACHES if c["id"] == coach_id), None)
        if coach is None:
            return CoachesResponse(status=404, message="Coach not found")
        return CoachesResponse(data=[coach], status=200, message="Coach fetched successfully")

    def get_coach_time_slots(self, coach_id: str, date: str) -> CoachesResponse:
        slots = mock_data.TIME_SLOTS.get(coach_id, {}).get(date)
        if not slots:
            return CoachesResponse(status=404, message="Time slots not found")
        return CoachesResponse(
            data=[slot for part in slots.values() for slot in part],
            status=200,
            message="Time slots fetched successfully",
        )

    def get_coach_feedback(
        self,
        coach_id: str,
        page_number: int = 1,
        page_size: int = 10,
        sort_by: SortByValues = SortByValues.DATE_DESC,
    ) -> CoachesResponse:
        feedback = mock_data.FEEDBACK.get(coach_id)
        if not feedback:
            return CoachesResponse(status=404, message="Feedback not found")

        sort_by = SortByValues(sort_by)
        if sort_by in (SortByValues.RATING_ASC, SortByValues.RATING_DESC):
            key = lambda item: int(item["rating"])
        else:
            key = lambda item: item["date"]
        ordered = sorted(
            feedback,
            key=key,
            reverse=sort_by in (SortByValues.RATING_DESC, SortByValues.DATE_DESC),
        )

        start = (page_number - 1) * page_size
        return CoachesResponse(
            data=ordered[start:start + page_size],
            status=200,
            message="Feedback fetched successfully",
            current_page=page_number,
            total_pages=math.ceil(len(feedback) / page_size),
            total_elements=len(feedback),
            average_rating=round(sum(int(f["rating"]) for f in feedback) / len(feedback), 1),
        )


class ApiCoachesService(CoachesService):
    """Reads coaches from the API and maps them to the shape the UI renders."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        response = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response

    @staticmethod
    def _failure(error: requests.RequestException, message: str) -> CoachesResponse:
        """Turn a failed request into an empty response carrying the API's status and message."""
        logger.error(message, extra={"error": str(error)})
        response = error.response
        if response is None:
            return CoachesResponse(status=500, message=message)
        try:
            message = response.json().get("message") or message
        except ValueError:
            pass
        return CoachesResponse(status=response.status_code, message=message)

    @staticmethod
    def _coach_card(coach: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": coach["id"],
            "imageUrl": coach.get("image") or "",
            "motivationPitch": coach.get("title") or "",
            "name": f"{coach['firstName']} {coach['lastName']}",
            "rating": float(coach.get("rating") or 0),
            "summary": coach.get("about") or "",
            "specializations": [s["label"] for s in coach.get("specializations") or []],
        }

    def get_coaches(self) -> CoachesResponse:
        try:
            response = self._get("/coaches")
        except requests.RequestException as e:
            return self._failure(e, "Failed to fetch coaches")
        return CoachesResponse(
            data=[self._coach_card(coach) for coach in response.json()["data"]],
            status=response.status_code,
            message="Coaches fetched successfully",
        )

    def get_coach_by_id(self, coach_id: str) -> CoachesResponse:
        try:
            response = self._get(f"/coaches/{coach_id}")
        except requests.RequestException as e:
            return self._failure(e, "Failed to fetch coach")
        return CoachesResponse(
            data=[self._coach_card(response.json()["data"])],
            status=response.status_code,
            message="Coach fetched successfully",
        )

    def get_coach_time_slots(self, coach_id: str, date: str) -> CoachesResponse:
        """Free slots on the day, as "HH:MM - HH:MM" labels."""
        try:
            response = self._get(f"/coaches/{coach_id}/time-slots", params={"date": date})
        except requests.RequestException as e:
            return self._failure(e, "Failed to fetch time slots")
        return CoachesResponse(
            data=[
                f"{slot['startTime']} - {slot['endTime']}"
                for slot in response.json()["data"]
                if not slot["isBooked"]
            ],
            status=response.status_code,
            message="Time slots fetched successfully",
        )

    def get_coach_feedback(
        self,
        coach_id: str,
        page_number: int = 1,
        page_size: int = 10,
        sort_by: SortByValues = SortByValues.DATE_DESC,
    ) -> CoachesResponse:
        params = {
            "page": page_number,
            "perPage": page_size,
            "sortBy": FEEDBACK_SORTS[SortByValues(sort_by)].value,
        }
        try:
            response = self._get(f"/feedback/coach/{coach_id}", params=params)
        except requests.RequestException as e:
            failure = self._failure(e, "Failed to fetch feedback")
            failure.current_page = page_number
            failure.total_pages = 0
            failure.total_elements = 0
            failure.average_rating = 0
            return failure

        page = response.json()["data"]
        return CoachesResponse(
            data=[
                {
                    "id": item["feedbackId"],
                    "userId": item["from"]["id"],
                    "userName": item["from"]["name"],
                    "userImage": item["from"].get("image") or "",
                    "rating": str(item.get("rating") or 0),
                    "comment": item.get("message") or "No feedback message provided",
                    "date": item["timestamp"].split("T")[0],
                }
                for item in page["feedback"]
            ],
            status=response.status_code,
            message="Feedback fetched successfully",
            current_page=page["currentPage"],
            total_pages=page["totalPages"],
            total_elements=page["total"],
            average_rating=page["averageRating"],
        )


def get_coaches_service(use_mock: Optional[bool] = None) -> CoachesService:
    """Pick the coaches service; defaults to the USE_MOCK_API setting."""
    if use_mock is None:
        use_mock = config.USE_MOCK_API
    logger.debug("Selecting coaches service", extra={"useMock": use_mock})

    if use_mock:
        return MockCoachesService()
    return ApiCoachesService()
