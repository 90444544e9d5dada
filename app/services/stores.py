"""Persistence capabilities consumed by the movie and feedback services.

Stores are thin: lookups, filters, writes and aggregates. They never validate
business rules. A store reports a unique-constraint rejection from its engine
as :class:`~app.services.errors.StoreConflict`; anything else propagates as-is.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol

from app.services.models import Feedback, FeedbackData, Movie, MovieData


class MovieStore(Protocol):
    def list_all(self) -> list[Movie]: ...

    def get(self, movie_id: int) -> Movie | None: ...

    def exists(self, movie_id: int) -> bool: ...

    def exists_by_title(self, title: str) -> bool:
        """Case-insensitive title lookup."""
        ...

    def add(self, data: MovieData) -> Movie: ...

    def replace(self, movie_id: int, data: MovieData) -> Movie | None:
        """Overwrite mutable fields; ``None`` when the row is gone."""
        ...

    def delete(self, movie_id: int) -> None: ...

    def search(self, keyword: str) -> list[Movie]:
        """Substring match (ignore case) on title, description or director."""
        ...

    def by_genre(self, genre: str) -> list[Movie]: ...

    def by_year(self, year: int) -> list[Movie]: ...

    def by_director(self, director: str) -> list[Movie]: ...


class FeedbackStore(Protocol):
    def list_all(self) -> list[Feedback]: ...

    def get(self, feedback_id: int) -> Feedback | None: ...

    def exists(self, feedback_id: int) -> bool: ...

    def add(self, data: FeedbackData) -> Feedback:
        """Insert and stamp ``created_at``/``updated_at`` with the same instant."""
        ...

    def replace(self, feedback_id: int, data: FeedbackData) -> Feedback | None:
        """Overwrite mutable fields and advance ``updated_at``; ``None`` when the row is gone."""
        ...

    def delete(self, feedback_id: int) -> None: ...

    def by_movie(self, movie_id: int) -> list[Feedback]: ...

    def by_visitor_name(self, fragment: str) -> list[Feedback]: ...

    def by_rating(self, rating: int) -> list[Feedback]: ...

    def by_rating_at_least(self, rating: int) -> list[Feedback]: ...

    def average_rating(self, movie_id: int) -> float | None:
        """Mean rating for a movie, ``None`` when it has no feedback."""
        ...

    def count_for_movie(self, movie_id: int) -> int: ...

    def recent_for_movie(self, movie_id: int) -> list[Feedback]:
        """Newest first by ``created_at``; ties newest id first."""
        ...


class MovieExistenceChecker(Protocol):
    def exists(self, movie_id: int) -> bool: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset on read)."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current UTC time, forced strictly past ``previous`` when given."""

    now = utcnow()
    if previous is None:
        return now
    floor = as_utc(previous) + timedelta(microseconds=1)
    return now if now >= floor else floor
