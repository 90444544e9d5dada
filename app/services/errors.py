"""Typed errors raised by the movie and feedback services."""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for request-scoped business rule failures."""

    status_code = 400


class NotFound(CatalogError):
    """Raised when the target id of an operation does not exist."""

    status_code = 404

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(f"{kind} not found with id: {record_id}")
        self.kind = kind
        self.record_id = record_id


class DuplicateTitle(CatalogError):
    """Raised when a movie title collides case-insensitively with another."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Movie with title '{title}' already exists")
        self.title = title


class InvalidRating(CatalogError):
    """Raised when a feedback rating falls outside 1..5."""

    def __init__(self, rating: object) -> None:
        super().__init__(f"Rating must be between 1 and 5, got {rating!r}")
        self.rating = rating


class ValidationFailed(CatalogError):
    """Raised when a required field is missing, oversized or malformed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class UnknownMovie(ValidationFailed):
    """Raised when feedback references a movie that does not exist."""

    def __init__(self, movie_id: int) -> None:
        super().__init__("movie_id", f"no movie with id {movie_id}")
        self.movie_id = movie_id


class StoreConflict(Exception):
    """Raised by a store when the engine rejects a write on a unique constraint."""
