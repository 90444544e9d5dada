"""Field rules shared by the movie and feedback services."""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email

from app.services.errors import InvalidRating, ValidationFailed

TITLE_MAX = 100
DESCRIPTION_MAX = 1000
GENRE_MAX = 50
DIRECTOR_MAX = 100
VISITOR_NAME_MAX = 100
COMMENT_MAX = 1000
EMAIL_MAX = 255
RATING_MIN = 1
RATING_MAX = 5


def require_text(value: str | None, field: str, max_length: int) -> str:
    """Return ``value`` if it is non-blank and within ``max_length``."""

    if value is None or not value.strip():
        raise ValidationFailed(field, "is required")
    if len(value) > max_length:
        raise ValidationFailed(field, f"must be at most {max_length} characters")
    return value


def optional_text(value: str | None, field: str, max_length: int) -> str | None:
    if value is None:
        return None
    if len(value) > max_length:
        raise ValidationFailed(field, f"must be at most {max_length} characters")
    return value


def check_rating(rating: int | None) -> int:
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRating(rating)
    if not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidRating(rating)
    return rating


def check_email(value: str | None) -> str | None:
    """Validate email syntax only; deliverability is never checked."""

    if value is None or value == "":
        return None
    if len(value) > EMAIL_MAX:
        raise ValidationFailed("visitor_email", f"must be at most {EMAIL_MAX} characters")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationFailed("visitor_email", str(exc)) from exc
    return value
