"""HTTP routes for the movie catalogue."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.dependencies import get_movie_service
from app.schemas import MovieIn, MovieOut
from app.services.movies import MovieService

router = APIRouter(prefix="/movies", tags=["movies"])


def _many(movies) -> list[MovieOut]:
    return [MovieOut.from_entity(movie) for movie in movies]


@router.get("", response_model=list[MovieOut])
def list_movies(service: MovieService = Depends(get_movie_service)) -> list[MovieOut]:
    return _many(service.list_all())


# Fixed paths are registered before /{movie_id} so they are not parsed as ids.
@router.get("/search", response_model=list[MovieOut])
def search_movies(
    keyword: str = Query(..., description="Matched against title, description and director"),
    service: MovieService = Depends(get_movie_service),
) -> list[MovieOut]:
    return _many(service.search(keyword))


@router.get("/genre/{genre}", response_model=list[MovieOut])
def movies_by_genre(genre: str, service: MovieService = Depends(get_movie_service)) -> list[MovieOut]:
    return _many(service.by_genre(genre))


@router.get("/year/{year}", response_model=list[MovieOut])
def movies_by_year(year: int, service: MovieService = Depends(get_movie_service)) -> list[MovieOut]:
    return _many(service.by_year(year))


@router.get("/director/{director}", response_model=list[MovieOut])
def movies_by_director(
    director: str, service: MovieService = Depends(get_movie_service)
) -> list[MovieOut]:
    return _many(service.by_director(director))


@router.get("/{movie_id}", response_model=MovieOut)
def get_movie(movie_id: int, service: MovieService = Depends(get_movie_service)) -> MovieOut:
    movie = service.get_by_id(movie_id)
    if movie is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Movie not found with id: {movie_id}",
        )
    return MovieOut.from_entity(movie)


@router.post("", response_model=MovieOut, status_code=status.HTTP_201_CREATED)
def create_movie(payload: MovieIn, service: MovieService = Depends(get_movie_service)) -> MovieOut:
    return MovieOut.from_entity(service.create(payload.to_data()))


@router.put("/{movie_id}", response_model=MovieOut)
def update_movie(
    movie_id: int,
    payload: MovieIn,
    service: MovieService = Depends(get_movie_service),
) -> MovieOut:
    return MovieOut.from_entity(service.update(movie_id, payload.to_data()))


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movie(movie_id: int, service: MovieService = Depends(get_movie_service)) -> Response:
    service.delete(movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
