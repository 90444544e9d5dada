"""Visitor feedback rules: rating bounds, timestamps and per-movie aggregates."""

from __future__ import annotations

import dataclasses
import logging

from app.services.errors import NotFound, UnknownMovie
from app.services.models import Feedback, FeedbackData
from app.services.stores import FeedbackStore, MovieExistenceChecker
from app.services.validation import (
    COMMENT_MAX,
    VISITOR_NAME_MAX,
    check_email,
    check_rating,
    require_text,
)

logger = logging.getLogger(__name__)

NO_RATING = 0.0


def validate_feedback(data: FeedbackData) -> FeedbackData:
    """Check field constraints, then the rating range.

    Field errors raise ``ValidationFailed``; an out-of-range rating raises
    ``InvalidRating`` so callers can tell the two apart. Returns a copy with
    the email normalised (blank becomes ``None``); ``data`` is left untouched.
    """

    require_text(data.visitor_name, "visitor_name", VISITOR_NAME_MAX)
    require_text(data.comment, "comment", COMMENT_MAX)
    email = check_email(data.visitor_email)
    check_rating(data.rating)
    return dataclasses.replace(data, visitor_email=email)


class FeedbackService:
    """Business rules over a :class:`FeedbackStore`.

    Feedback points at a movie by id only. Pass ``movies`` to reject feedback
    for movies that do not exist; without it orphaned feedback is accepted.
    """

    def __init__(
        self,
        store: FeedbackStore,
        *,
        movies: MovieExistenceChecker | None = None,
    ) -> None:
        self.store = store
        self.movies = movies

    def list_all(self) -> list[Feedback]:
        logger.info("Fetching all feedback")
        return self.store.list_all()

    def get_by_id(self, feedback_id: int) -> Feedback | None:
        logger.info("Fetching feedback with id: %s", feedback_id)
        return self.store.get(feedback_id)

    def create(self, data: FeedbackData) -> Feedback:
        logger.info("Creating new feedback for movie: %s", data.movie_id)
        data = validate_feedback(data)
        if self.movies is not None and not self.movies.exists(data.movie_id):
            logger.warning("Rejected feedback for unknown movie: %s", data.movie_id)
            raise UnknownMovie(data.movie_id)
        feedback = self.store.add(data)
        logger.info("Feedback created successfully with id: %s", feedback.id)
        return feedback

    def update(self, feedback_id: int, data: FeedbackData) -> Feedback:
        logger.info("Updating feedback with id: %s", feedback_id)
        if not self.store.exists(feedback_id):
            raise NotFound("Feedback", feedback_id)
        data = validate_feedback(data)
        feedback = self.store.replace(feedback_id, data)
        if feedback is None:
            # deleted by a concurrent request after the existence check
            raise NotFound("Feedback", feedback_id)
        logger.info("Feedback updated successfully with id: %s", feedback.id)
        return feedback

    def delete(self, feedback_id: int) -> None:
        logger.info("Deleting feedback with id: %s", feedback_id)
        if not self.store.exists(feedback_id):
            raise NotFound("Feedback", feedback_id)
        self.store.delete(feedback_id)
        logger.info("Feedback deleted successfully with id: %s", feedback_id)

    def by_movie_id(self, movie_id: int) -> list[Feedback]:
        logger.info("Fetching feedback for movie: %s", movie_id)
        return self.store.by_movie(movie_id)

    def by_visitor_name(self, visitor_name: str) -> list[Feedback]:
        logger.info("Fetching feedback by visitor name: %s", visitor_name)
        return self.store.by_visitor_name(visitor_name)

    def by_rating(self, rating: int) -> list[Feedback]:
        logger.info("Fetching feedback with rating: %s", rating)
        return self.store.by_rating(rating)

    def by_rating_at_least(self, rating: int) -> list[Feedback]:
        logger.info("Fetching feedback with rating >= %s", rating)
        return self.store.by_rating_at_least(rating)

    def average_rating_for_movie(self, movie_id: int) -> float:
        """Mean rating, or ``0.0`` when the movie has no feedback yet."""

        logger.info("Calculating average rating for movie: %s", movie_id)
        average = self.store.average_rating(movie_id)
        return NO_RATING if average is None else float(average)

    def count_for_movie(self, movie_id: int) -> int:
        logger.info("Getting feedback count for movie: %s", movie_id)
        return self.store.count_for_movie(movie_id)

    def recent_for_movie(self, movie_id: int) -> list[Feedback]:
        logger.info("Fetching recent feedback for movie: %s", movie_id)
        return self.store.recent_for_movie(movie_id)
