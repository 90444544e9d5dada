"""HTTP routes for visitor feedback."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.dependencies import get_feedback_service
from app.schemas import FeedbackIn, FeedbackOut
from app.services.feedback import FeedbackService

router = APIRouter(prefix="/feedback", tags=["feedback"])


def _many(entries) -> list[FeedbackOut]:
    return [FeedbackOut.from_entity(entry) for entry in entries]


@router.get("", response_model=list[FeedbackOut])
def list_feedback(service: FeedbackService = Depends(get_feedback_service)) -> list[FeedbackOut]:
    return _many(service.list_all())


@router.get("/{feedback_id}", response_model=FeedbackOut)
def get_feedback(
    feedback_id: int, service: FeedbackService = Depends(get_feedback_service)
) -> FeedbackOut:
    feedback = service.get_by_id(feedback_id)
    if feedback is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Feedback not found with id: {feedback_id}",
        )
    return FeedbackOut.from_entity(feedback)


@router.post("", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED)
def create_feedback(
    payload: FeedbackIn, service: FeedbackService = Depends(get_feedback_service)
) -> FeedbackOut:
    return FeedbackOut.from_entity(service.create(payload.to_data()))


@router.put("/{feedback_id}", response_model=FeedbackOut)
def update_feedback(
    feedback_id: int,
    payload: FeedbackIn,
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackOut:
    return FeedbackOut.from_entity(service.update(feedback_id, payload.to_data()))


@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feedback(
    feedback_id: int, service: FeedbackService = Depends(get_feedback_service)
) -> Response:
    service.delete(feedback_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/movie/{movie_id}", response_model=list[FeedbackOut])
def feedback_for_movie(
    movie_id: int, service: FeedbackService = Depends(get_feedback_service)
) -> list[FeedbackOut]:
    return _many(service.by_movie_id(movie_id))


@router.get("/movie/{movie_id}/average-rating", response_model=float)
def average_rating(movie_id: int, service: FeedbackService = Depends(get_feedback_service)) -> float:
    return service.average_rating_for_movie(movie_id)


@router.get("/movie/{movie_id}/count", response_model=int)
def feedback_count(movie_id: int, service: FeedbackService = Depends(get_feedback_service)) -> int:
    return service.count_for_movie(movie_id)


@router.get("/movie/{movie_id}/recent", response_model=list[FeedbackOut])
def recent_feedback(
    movie_id: int, service: FeedbackService = Depends(get_feedback_service)
) -> list[FeedbackOut]:
    return _many(service.recent_for_movie(movie_id))


@router.get("/visitor/{visitor_name}", response_model=list[FeedbackOut])
def feedback_by_visitor(
    visitor_name: str, service: FeedbackService = Depends(get_feedback_service)
) -> list[FeedbackOut]:
    return _many(service.by_visitor_name(visitor_name))


@router.get("/rating/{rating}", response_model=list[FeedbackOut])
def feedback_by_rating(
    rating: int, service: FeedbackService = Depends(get_feedback_service)
) -> list[FeedbackOut]:
    return _many(service.by_rating(rating))


@router.get("/rating/gte/{rating}", response_model=list[FeedbackOut])
def feedback_by_min_rating(
    rating: int, service: FeedbackService = Depends(get_feedback_service)
) -> list[FeedbackOut]:
    return _many(service.by_rating_at_least(rating))
