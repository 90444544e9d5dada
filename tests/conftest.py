import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.db import build_engine, get_session, init_models
from app.main import app
from app.services.feedback import FeedbackService
from app.services.memory import InMemoryFeedbackStore, InMemoryMovieStore
from app.services.movies import MovieService


@pytest.fixture
def engine():
    # one shared connection so every session sees the same in-memory database
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_models(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def client(session_factory):
    def _override_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = _override_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def api_prefix():
    return get_settings().api_prefix


@pytest.fixture
def movie_service():
    return MovieService(InMemoryMovieStore())


@pytest.fixture
def feedback_service():
    return FeedbackService(InMemoryFeedbackStore())
