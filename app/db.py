"""Database session management and repositories."""

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import create_engine, event, func, or_, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import get_settings
from app.models import Base, FeedbackRow, MovieRow
from app.services.errors import StoreConflict
from app.services.models import Feedback, FeedbackData, Movie, MovieData
from app.services.stores import as_utc, next_timestamp

logger = logging.getLogger(__name__)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def build_engine(url: str, *, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections may be shared across threads.

    SQLite's built-in ``lower()`` folds ASCII only, so every SQLite connection
    gets a Unicode-aware replacement. It must be deterministic because the
    unique title index is built on ``lower(title)``.
    """

    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    new_engine = create_engine(url, echo=echo, future=True, **kwargs)
    if is_sqlite:

        @event.listens_for(new_engine, "connect")
        def _register_lower(dbapi_connection, _connection_record) -> None:
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return new_engine


def _database_url() -> str:
    """Return the SQLAlchemy URL from settings (defaults to local SQLite for dev)."""
    return get_settings().database_url


engine = build_engine(_database_url(), echo=get_settings().sql_echo)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_models(bind: Engine | None = None) -> None:
    """Create tables if they do not exist (no migrations are shipped)."""
    Base.metadata.create_all(bind=bind or engine)


def get_session() -> Iterator[Session]:
    """FastAPI-friendly dependency that manages commits/rollbacks."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _to_movie(row: MovieRow) -> Movie:
    return Movie(
        id=row.id,
        title=row.title,
        description=row.description,
        genre=row.genre,
        release_year=row.release_year,
        director=row.director,
    )


def _to_feedback(row: FeedbackRow) -> Feedback:
    return Feedback(
        id=row.id,
        movie_id=row.movie_id,
        visitor_name=row.visitor_name,
        comment=row.comment,
        rating=row.rating,
        visitor_email=row.visitor_email,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlMovieStore:
    """Movie persistence on top of an open SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Movie]:
        return self._all(select(MovieRow).order_by(MovieRow.id))

    def get(self, movie_id: int) -> Movie | None:
        row = self.session.get(MovieRow, movie_id)
        return _to_movie(row) if row else None

    def exists(self, movie_id: int) -> bool:
        query = select(MovieRow.id).where(MovieRow.id == movie_id)
        return self.session.execute(query).first() is not None

    def exists_by_title(self, title: str) -> bool:
        query = select(MovieRow.id).where(func.lower(MovieRow.title) == title.lower()).limit(1)
        return self.session.execute(query).first() is not None

    def add(self, data: MovieData) -> Movie:
        row = MovieRow(
            title=data.title,
            description=data.description,
            genre=data.genre,
            release_year=data.release_year,
            director=data.director,
        )
        self.session.add(row)
        self._flush()
        self.session.refresh(row)
        return _to_movie(row)

    def replace(self, movie_id: int, data: MovieData) -> Movie | None:
        row = self.session.get(MovieRow, movie_id)
        if row is None:
            return None
        row.title = data.title
        row.description = data.description
        row.genre = data.genre
        row.release_year = data.release_year
        row.director = data.director
        self._flush()
        return _to_movie(row)

    def delete(self, movie_id: int) -> None:
        row = self.session.get(MovieRow, movie_id)
        if row is not None:
            self.session.delete(row)
            self.session.flush()

    def search(self, keyword: str) -> list[Movie]:
        needle = keyword.lower()
        query = (
            select(MovieRow)
            .where(
                or_(
                    func.lower(MovieRow.title).contains(needle, autoescape=True),
                    func.lower(MovieRow.description).contains(needle, autoescape=True),
                    func.lower(MovieRow.director).contains(needle, autoescape=True),
                )
            )
            .order_by(MovieRow.id)
        )
        return self._all(query)

    def by_genre(self, genre: str) -> list[Movie]:
        query = (
            select(MovieRow)
            .where(func.lower(MovieRow.genre) == genre.lower())
            .order_by(MovieRow.id)
        )
        return self._all(query)

    def by_year(self, year: int) -> list[Movie]:
        query = select(MovieRow).where(MovieRow.release_year == year).order_by(MovieRow.id)
        return self._all(query)

    def by_director(self, director: str) -> list[Movie]:
        query = (
            select(MovieRow)
            .where(func.lower(MovieRow.director).contains(director.lower(), autoescape=True))
            .order_by(MovieRow.id)
        )
        return self._all(query)

    def _all(self, query) -> list[Movie]:
        return [_to_movie(row) for row in self.session.execute(query).scalars()]

    def _flush(self) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Movie write rejected by unique constraint: %s", exc.orig)
            raise StoreConflict(str(exc.orig)) from exc


class SqlFeedbackStore:
    """Feedback persistence on top of an open SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Feedback]:
        return self._all(select(FeedbackRow).order_by(FeedbackRow.id))

    def get(self, feedback_id: int) -> Feedback | None:
        row = self.session.get(FeedbackRow, feedback_id)
        return _to_feedback(row) if row else None

    def exists(self, feedback_id: int) -> bool:
        query = select(FeedbackRow.id).where(FeedbackRow.id == feedback_id)
        return self.session.execute(query).first() is not None

    def add(self, data: FeedbackData) -> Feedback:
        stamp = next_timestamp()
        row = FeedbackRow(
            movie_id=data.movie_id,
            visitor_name=data.visitor_name,
            comment=data.comment,
            rating=data.rating,
            visitor_email=data.visitor_email,
            created_at=stamp,
            updated_at=stamp,
        )
        self.session.add(row)
        self.session.flush()  # assign IDs before leaving scope
        return _to_feedback(row)

    def replace(self, feedback_id: int, data: FeedbackData) -> Feedback | None:
        row = self.session.get(FeedbackRow, feedback_id)
        if row is None:
            return None
        row.visitor_name = data.visitor_name
        row.comment = data.comment
        row.rating = data.rating
        row.visitor_email = data.visitor_email
        row.updated_at = next_timestamp(row.updated_at)
        self.session.flush()
        return _to_feedback(row)

    def delete(self, feedback_id: int) -> None:
        row = self.session.get(FeedbackRow, feedback_id)
        if row is not None:
            self.session.delete(row)
            self.session.flush()

    def by_movie(self, movie_id: int) -> list[Feedback]:
        query = select(FeedbackRow).where(FeedbackRow.movie_id == movie_id).order_by(FeedbackRow.id)
        return self._all(query)

    def by_visitor_name(self, fragment: str) -> list[Feedback]:
        query = (
            select(FeedbackRow)
            .where(func.lower(FeedbackRow.visitor_name).contains(fragment.lower(), autoescape=True))
            .order_by(FeedbackRow.id)
        )
        return self._all(query)

    def by_rating(self, rating: int) -> list[Feedback]:
        query = select(FeedbackRow).where(FeedbackRow.rating == rating).order_by(FeedbackRow.id)
        return self._all(query)

    def by_rating_at_least(self, rating: int) -> list[Feedback]:
        query = select(FeedbackRow).where(FeedbackRow.rating >= rating).order_by(FeedbackRow.id)
        return self._all(query)

    def average_rating(self, movie_id: int) -> float | None:
        query = select(func.avg(FeedbackRow.rating)).where(FeedbackRow.movie_id == movie_id)
        average = self.session.execute(query).scalar_one()
        # Postgres hands back Decimal, SQLite a float
        return None if average is None else float(average)

    def count_for_movie(self, movie_id: int) -> int:
        query = select(func.count()).select_from(FeedbackRow).where(FeedbackRow.movie_id == movie_id)
        return int(self.session.execute(query).scalar_one())

    def recent_for_movie(self, movie_id: int) -> list[Feedback]:
        query = (
            select(FeedbackRow)
            .where(FeedbackRow.movie_id == movie_id)
            .order_by(FeedbackRow.created_at.desc(), FeedbackRow.id.desc())
        )
        return self._all(query)

    def _all(self, query) -> list[Feedback]:
        return [_to_feedback(row) for row in self.session.execute(query).scalars()]
