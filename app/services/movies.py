"""Movie catalogue rules: title uniqueness and derived listings."""

from __future__ import annotations

import logging

from app.services.errors import DuplicateTitle, NotFound, StoreConflict
from app.services.models import Movie, MovieData
from app.services.stores import MovieStore
from app.services.validation import (
    DESCRIPTION_MAX,
    DIRECTOR_MAX,
    GENRE_MAX,
    TITLE_MAX,
    optional_text,
    require_text,
)

logger = logging.getLogger(__name__)


def validate_movie(data: MovieData) -> MovieData:
    """Raise ``ValidationFailed`` if any field breaks its column constraints."""

    require_text(data.title, "title", TITLE_MAX)
    optional_text(data.description, "description", DESCRIPTION_MAX)
    optional_text(data.genre, "genre", GENRE_MAX)
    optional_text(data.director, "director", DIRECTOR_MAX)
    return data


class MovieService:
    """Business rules over a :class:`MovieStore`.

    The service keeps no state besides its store, so one instance per request
    (or one shared instance over a thread-safe store) is fine.
    """

    def __init__(self, store: MovieStore) -> None:
        self.store = store

    def list_all(self) -> list[Movie]:
        logger.info("Fetching all movies")
        return self.store.list_all()

    def get_by_id(self, movie_id: int) -> Movie | None:
        logger.info("Fetching movie with id: %s", movie_id)
        return self.store.get(movie_id)

    def create(self, data: MovieData) -> Movie:
        logger.info("Creating new movie: %s", data.title)
        validate_movie(data)
        if self.store.exists_by_title(data.title):
            logger.warning("Rejected duplicate movie title: %s", data.title)
            raise DuplicateTitle(data.title)
        try:
            movie = self.store.add(data)
        except StoreConflict as exc:
            # lost the race against a concurrent insert of the same title
            raise DuplicateTitle(data.title) from exc
        logger.info("Movie created successfully with id: %s", movie.id)
        return movie

    def update(self, movie_id: int, data: MovieData) -> Movie:
        logger.info("Updating movie with id: %s", movie_id)
        current = self.store.get(movie_id)
        if current is None:
            raise NotFound("Movie", movie_id)
        validate_movie(data)
        title_changed = current.title.lower() != data.title.lower()
        if title_changed and self.store.exists_by_title(data.title):
            logger.warning("Rejected duplicate movie title on update: %s", data.title)
            raise DuplicateTitle(data.title)
        try:
            movie = self.store.replace(movie_id, data)
        except StoreConflict as exc:
            raise DuplicateTitle(data.title) from exc
        if movie is None:
            # deleted by a concurrent request after the existence check
            raise NotFound("Movie", movie_id)
        logger.info("Movie updated successfully with id: %s", movie.id)
        return movie

    def delete(self, movie_id: int) -> None:
        logger.info("Deleting movie with id: %s", movie_id)
        if not self.store.exists(movie_id):
            raise NotFound("Movie", movie_id)
        self.store.delete(movie_id)
        logger.info("Movie deleted successfully with id: %s", movie_id)

    def search(self, keyword: str) -> list[Movie]:
        logger.info("Searching movies with keyword: %s", keyword)
        return self.store.search(keyword)

    def by_genre(self, genre: str) -> list[Movie]:
        logger.info("Fetching movies by genre: %s", genre)
        return self.store.by_genre(genre)

    def by_year(self, year: int) -> list[Movie]:
        logger.info("Fetching movies by year: %s", year)
        return self.store.by_year(year)

    def by_director(self, director: str) -> list[Movie]:
        logger.info("Fetching movies by director: %s", director)
        return self.store.by_director(director)
