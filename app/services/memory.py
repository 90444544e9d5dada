"""Dictionary-backed stores used by tests and local experiments.

Every read and write holds the store's lock, so one instance can be shared by
concurrent requests.
"""

from __future__ import annotations

import dataclasses
import threading
from itertools import count

from app.services.errors import StoreConflict
from app.services.models import Feedback, FeedbackData, Movie, MovieData
from app.services.stores import next_timestamp


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


class InMemoryMovieStore:
    """Mirrors the relational store, including the unique title index."""

    def __init__(self) -> None:
        self._rows: dict[int, Movie] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def list_all(self) -> list[Movie]:
        return self._filter(lambda m: True)

    def get(self, movie_id: int) -> Movie | None:
        with self._lock:
            movie = self._rows.get(movie_id)
            return dataclasses.replace(movie) if movie else None

    def exists(self, movie_id: int) -> bool:
        with self._lock:
            return movie_id in self._rows

    def exists_by_title(self, title: str) -> bool:
        with self._lock:
            return self._title_owner(title) is not None

    def add(self, data: MovieData) -> Movie:
        with self._lock:
            if self._title_owner(data.title) is not None:
                raise StoreConflict(f"title '{data.title}' already stored")
            movie = Movie(id=next(self._ids), **_movie_fields(data))
            self._rows[movie.id] = movie
            return dataclasses.replace(movie)

    def replace(self, movie_id: int, data: MovieData) -> Movie | None:
        with self._lock:
            current = self._rows.get(movie_id)
            if current is None:
                return None
            owner = self._title_owner(data.title)
            if owner is not None and owner != movie_id:
                raise StoreConflict(f"title '{data.title}' already stored")
            movie = dataclasses.replace(current, **_movie_fields(data))
            self._rows[movie_id] = movie
            return dataclasses.replace(movie)

    def delete(self, movie_id: int) -> None:
        with self._lock:
            self._rows.pop(movie_id, None)

    def search(self, keyword: str) -> list[Movie]:
        return self._filter(
            lambda m: _contains(m.title, keyword)
            or _contains(m.description, keyword)
            or _contains(m.director, keyword)
        )

    def by_genre(self, genre: str) -> list[Movie]:
        return self._filter(lambda m: m.genre is not None and m.genre.lower() == genre.lower())

    def by_year(self, year: int) -> list[Movie]:
        return self._filter(lambda m: m.release_year == year)

    def by_director(self, director: str) -> list[Movie]:
        return self._filter(lambda m: _contains(m.director, director))

    def _filter(self, predicate) -> list[Movie]:
        with self._lock:
            return [dataclasses.replace(m) for m in self._rows.values() if predicate(m)]

    def _title_owner(self, title: str) -> int | None:
        # caller holds the lock
        wanted = title.lower()
        for movie in self._rows.values():
            if movie.title.lower() == wanted:
                return movie.id
        return None


def _movie_fields(data: MovieData) -> dict:
    return {
        "title": data.title,
        "description": data.description,
        "genre": data.genre,
        "release_year": data.release_year,
        "director": data.director,
    }


class InMemoryFeedbackStore:
    def __init__(self) -> None:
        self._rows: dict[int, Feedback] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def list_all(self) -> list[Feedback]:
        return self._filter(lambda f: True)

    def get(self, feedback_id: int) -> Feedback | None:
        with self._lock:
            feedback = self._rows.get(feedback_id)
            return dataclasses.replace(feedback) if feedback else None

    def exists(self, feedback_id: int) -> bool:
        with self._lock:
            return feedback_id in self._rows

    def add(self, data: FeedbackData) -> Feedback:
        with self._lock:
            stamp = next_timestamp()
            feedback = Feedback(
                id=next(self._ids),
                movie_id=data.movie_id,
                visitor_name=data.visitor_name,
                comment=data.comment,
                rating=data.rating,
                visitor_email=data.visitor_email,
                created_at=stamp,
                updated_at=stamp,
            )
            self._rows[feedback.id] = feedback
            return dataclasses.replace(feedback)

    def replace(self, feedback_id: int, data: FeedbackData) -> Feedback | None:
        with self._lock:
            current = self._rows.get(feedback_id)
            if current is None:
                return None
            feedback = dataclasses.replace(
                current,
                visitor_name=data.visitor_name,
                comment=data.comment,
                rating=data.rating,
                visitor_email=data.visitor_email,
                updated_at=next_timestamp(current.updated_at),
            )
            self._rows[feedback_id] = feedback
            return dataclasses.replace(feedback)

    def delete(self, feedback_id: int) -> None:
        with self._lock:
            self._rows.pop(feedback_id, None)

    def by_movie(self, movie_id: int) -> list[Feedback]:
        return self._filter(lambda f: f.movie_id == movie_id)

    def by_visitor_name(self, fragment: str) -> list[Feedback]:
        return self._filter(lambda f: _contains(f.visitor_name, fragment))

    def by_rating(self, rating: int) -> list[Feedback]:
        return self._filter(lambda f: f.rating == rating)

    def by_rating_at_least(self, rating: int) -> list[Feedback]:
        return self._filter(lambda f: f.rating >= rating)

    def average_rating(self, movie_id: int) -> float | None:
        ratings = [f.rating for f in self.by_movie(movie_id)]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)

    def count_for_movie(self, movie_id: int) -> int:
        return len(self.by_movie(movie_id))

    def recent_for_movie(self, movie_id: int) -> list[Feedback]:
        rows = self.by_movie(movie_id)
        rows.sort(key=lambda f: (f.created_at, f.id), reverse=True)
        return rows

    def _filter(self, predicate) -> list[Feedback]:
        with self._lock:
            return [dataclasses.replace(f) for f in self._rows.values() if predicate(f)]
