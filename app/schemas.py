"""Request/response bodies for the HTTP layer.

JSON uses camelCase keys (``releaseYear``, ``visitorName`` ...); requests may
also send snake_case.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.services.models import Feedback, FeedbackData, Movie, MovieData


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MovieIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    genre: str | None = Field(default=None, max_length=50)
    release_year: int | None = None
    director: str | None = Field(default=None, max_length=100)

    def to_data(self) -> MovieData:
        return MovieData(
            title=self.title,
            description=self.description,
            genre=self.genre,
            release_year=self.release_year,
            director=self.director,
        )


class MovieOut(CamelModel):
    id: int
    title: str
    description: str | None = None
    genre: str | None = None
    release_year: int | None = None
    director: str | None = None

    @classmethod
    def from_entity(cls, movie: Movie) -> "MovieOut":
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            genre=movie.genre,
            release_year=movie.release_year,
            director=movie.director,
        )


class FeedbackIn(CamelModel):
    movie_id: int
    visitor_name: str = Field(..., min_length=1, max_length=100)
    comment: str = Field(..., min_length=1, max_length=1000)
    # range and email syntax are checked by the service (InvalidRating, ValidationFailed)
    rating: int
    visitor_email: str | None = Field(default=None, max_length=255)

    def to_data(self) -> FeedbackData:
        return FeedbackData(
            movie_id=self.movie_id,
            visitor_name=self.visitor_name,
            comment=self.comment,
            rating=self.rating,
            visitor_email=self.visitor_email,
        )


class FeedbackOut(CamelModel):
    id: int
    movie_id: int
    visitor_name: str
    comment: str
    rating: int
    visitor_email: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, feedback: Feedback) -> "FeedbackOut":
        return cls(
            id=feedback.id,
            movie_id=feedback.movie_id,
            visitor_name=feedback.visitor_name,
            comment=feedback.comment,
            rating=feedback.rating,
            visitor_email=feedback.visitor_email,
            created_at=feedback.created_at,
            updated_at=feedback.updated_at,
        )
