"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class MovieData:
    """Mutable movie fields supplied on create and update."""

    title: str
    description: str | None = None
    genre: str | None = None
    release_year: int | None = None
    director: str | None = None


@dataclass(slots=True)
class Movie:
    """A stored movie record."""

    id: int
    title: str
    description: str | None = None
    genre: str | None = None
    release_year: int | None = None
    director: str | None = None


@dataclass(slots=True)
class FeedbackData:
    """Feedback fields supplied on create and update.

    ``movie_id`` is only read on create; an update never re-targets feedback
    to another movie.
    """

    movie_id: int
    visitor_name: str
    comment: str
    rating: int
    visitor_email: str | None = None


@dataclass(slots=True)
class Feedback:
    """A stored feedback record; timestamps are assigned by the store."""

    id: int
    movie_id: int
    visitor_name: str
    comment: str
    rating: int
    created_at: datetime
    updated_at: datetime
    visitor_email: str | None = None
