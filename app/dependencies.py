"""FastAPI dependencies wiring session -> store -> service per request."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db import SqlFeedbackStore, SqlMovieStore, get_session
from app.services.feedback import FeedbackService
from app.services.movies import MovieService


def get_movie_service(session: Session = Depends(get_session)) -> MovieService:
    return MovieService(SqlMovieStore(session))


def get_feedback_service(session: Session = Depends(get_session)) -> FeedbackService:
    """Build the feedback service, checking movie ids only when configured to."""

    movies = SqlMovieStore(session) if get_settings().enforce_movie_reference else None
    return FeedbackService(SqlFeedbackStore(session), movies=movies)
