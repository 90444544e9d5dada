from datetime import datetime

import pytest


@pytest.fixture
def movies_url(api_prefix):
    return f"{api_prefix}/movies"


@pytest.fixture
def feedback_url(api_prefix):
    return f"{api_prefix}/feedback"


DUNE = {
    "title": "Dune",
    "genre": "Sci-Fi",
    "releaseYear": 2021,
    "director": "Denis Villeneuve",
}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_movie_then_duplicate_title(client, movies_url):
    created = client.post(movies_url, json=DUNE)
    assert created.status_code == 201
    body = created.json()
    assert body["id"] == 1
    assert body["releaseYear"] == 2021

    duplicate = client.post(movies_url, json={"title": "dune"})
    assert duplicate.status_code == 400
    assert "already exists" in duplicate.json()["detail"]


def test_movie_crud_status_codes(client, movies_url):
    movie_id = client.post(movies_url, json=DUNE).json()["id"]

    assert client.get(f"{movies_url}/{movie_id}").status_code == 200
    assert client.get(f"{movies_url}/999").status_code == 404

    updated = client.put(f"{movies_url}/{movie_id}", json={**DUNE, "title": "DUNE", "releaseYear": 2022})
    assert updated.status_code == 200
    assert updated.json()["title"] == "DUNE"
    assert updated.json()["releaseYear"] == 2022

    assert client.put(f"{movies_url}/999", json=DUNE).status_code == 404

    assert client.delete(f"{movies_url}/{movie_id}").status_code == 204
    assert client.delete(f"{movies_url}/{movie_id}").status_code == 404
    assert client.get(movies_url).json() == []


def test_movie_update_to_taken_title_is_bad_request(client, movies_url):
    client.post(movies_url, json=DUNE)
    arrival_id = client.post(movies_url, json={"title": "Arrival"}).json()["id"]
    resp = client.put(f"{movies_url}/{arrival_id}", json={"title": "DUNE"})
    assert resp.status_code == 400


def test_malformed_movie_is_bad_request(client, movies_url):
    assert client.post(movies_url, json={"genre": "Drama"}).status_code == 400
    assert client.post(movies_url, json={"title": "x" * 101}).status_code == 400
    assert client.post(movies_url, json={"title": "   "}).status_code == 400


def test_movie_query_routes(client, movies_url):
    client.post(movies_url, json=DUNE)
    client.post(movies_url, json={"title": "Sicario", "genre": "Crime", "releaseYear": 2015,
                                  "director": "Denis Villeneuve"})
    client.post(movies_url, json={"title": "Heat", "description": "LA heist", "genre": "crime"})

    search = client.get(f"{movies_url}/search", params={"keyword": "heist"})
    assert [m["title"] for m in search.json()] == ["Heat"]
    assert client.get(f"{movies_url}/search").status_code == 400

    genre = client.get(f"{movies_url}/genre/CRIME").json()
    assert {m["title"] for m in genre} == {"Sicario", "Heat"}
    assert [m["title"] for m in client.get(f"{movies_url}/year/2015").json()] == ["Sicario"]
    assert len(client.get(f"{movies_url}/director/villeneuve").json()) == 2


def test_feedback_lifecycle(client, feedback_url):
    created = client.post(
        feedback_url,
        json={"movieId": 1, "visitorName": "Alice", "comment": "Great", "rating": 5},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["createdAt"] == body["updatedAt"]

    updated = client.put(
        f"{feedback_url}/{body['id']}",
        json={"movieId": 1, "visitorName": "Alice", "comment": "Great", "rating": 3},
    )
    assert updated.status_code == 200
    after = updated.json()
    assert after["rating"] == 3
    assert after["createdAt"] == body["createdAt"]
    assert _parse(after["updatedAt"]) > _parse(body["updatedAt"])

    assert client.get(f"{feedback_url}/{body['id']}").status_code == 200
    assert client.delete(f"{feedback_url}/{body['id']}").status_code == 204
    assert client.get(f"{feedback_url}/{body['id']}").status_code == 404
    assert client.delete(f"{feedback_url}/{body['id']}").status_code == 404


@pytest.mark.parametrize("rating", [0, 6])
def test_feedback_rating_out_of_range_is_bad_request(client, feedback_url, rating):
    resp = client.post(
        feedback_url,
        json={"movieId": 1, "visitorName": "Alice", "comment": "Great", "rating": rating},
    )
    assert resp.status_code == 400
    assert client.get(feedback_url).json() == []


def test_feedback_update_missing_is_not_found(client, feedback_url):
    resp = client.put(
        f"{feedback_url}/77",
        json={"movieId": 1, "visitorName": "Alice", "comment": "Great", "rating": 9},
    )
    assert resp.status_code == 404


def test_feedback_bad_email_is_bad_request(client, feedback_url):
    resp = client.post(
        feedback_url,
        json={"movieId": 1, "visitorName": "Alice", "comment": "Great", "rating": 4,
              "visitorEmail": "nope"},
    )
    assert resp.status_code == 400


def test_feedback_queries_and_aggregates(client, feedback_url):
    for name, rating in (("Ann", 2), ("Bea", 4), ("Cleo", 4)):
        client.post(feedback_url, json={"movieId": 2, "visitorName": name, "comment": "c", "rating": rating})
    client.post(feedback_url, json={"movieId": 3, "visitorName": "annabel", "comment": "c", "rating": 1})

    assert client.get(f"{feedback_url}/movie/2/average-rating").json() == pytest.approx(10 / 3)
    assert client.get(f"{feedback_url}/movie/2/count").json() == 3
    assert client.get(f"{feedback_url}/movie/42/average-rating").json() == 0.0
    assert client.get(f"{feedback_url}/movie/42/count").json() == 0

    assert len(client.get(f"{feedback_url}/movie/2").json()) == 3
    recent = client.get(f"{feedback_url}/movie/2/recent").json()
    assert [f["visitorName"] for f in recent] == ["Cleo", "Bea", "Ann"]

    assert [f["rating"] for f in client.get(f"{feedback_url}/rating/gte/4").json()] == [4, 4]
    assert len(client.get(f"{feedback_url}/rating/1").json()) == 1
    assert {f["visitorName"] for f in client.get(f"{feedback_url}/visitor/ANN").json()} == {"Ann", "annabel"}


def test_movie_reference_enforced_when_configured(client, feedback_url, movies_url, monkeypatch):
    from app.core.config import get_settings

    monkeypatch.setattr(get_settings(), "enforce_movie_reference", True)
    movie_id = client.post(movies_url, json=DUNE).json()["id"]

    ok = client.post(feedback_url, json={"movieId": movie_id, "visitorName": "A", "comment": "c", "rating": 4})
    assert ok.status_code == 201
    orphan = client.post(feedback_url, json={"movieId": 999, "visitorName": "A", "comment": "c", "rating": 4})
    assert orphan.status_code == 400


def _parse(raw: str) -> datetime:
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))
