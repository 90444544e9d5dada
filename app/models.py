"""SQLAlchemy ORM models.

This module defines the "movies" and "feedback" tables. The two tables are
deliberately not linked by a foreign key: feedback references a movie by id
only, so each vertical can live in its own database.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class MovieRow(Base):
    """A catalogue entry that visitors can leave feedback on."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(50), nullable=True)
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    director: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"MovieRow(id={self.id}, title={self.title})"


# Titles are unique ignoring case; the service pre-checks, this index decides.
Index("uq_movies_title_lower", func.lower(MovieRow.title), unique=True)


class FeedbackRow(Base):
    """A visitor's rating and comment about one movie."""

    __tablename__ = "feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    visitor_name: Mapped[str] = mapped_column(String(100), nullable=False)
    comment: Mapped[str] = mapped_column(String(1000), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    visitor_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"FeedbackRow(id={self.id}, movie_id={self.movie_id}, rating={self.rating})"
