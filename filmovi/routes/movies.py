"""
Filmovi API — Movie Route Handlers
===================================

What:  CRUD endpoints for the `filmovi` resource.
Why:   The HTTP face of MovieRepository.
How:   Extract path/body parameters, call the repository, translate its
       not-found signal into NotFoundError (rendered as 404 by the global
       handler in main.py) and return the response model.

Route Inventory:
    GET    /filmovi        list all movies
    GET    /filmovi/{id}   one movie
    POST   /filmovi        create a movie
    PUT    /filmovi/{id}   partial update
    DELETE /filmovi/{id}   delete a movie

Handlers stay thin: no validation beyond the schema, no SQL.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response, status

from filmovi.dependencies import get_movie_repository
from filmovi.exceptions import NotFoundError
from filmovi.repositories.movie_repository import MovieRepository
from filmovi.schemas.movie import (
    ErrorResponse,
    MovieCreate,
    MovieResponse,
    MovieUpdate,
)

router = APIRouter(prefix="/filmovi", tags=["Filmovi"])

NOT_FOUND_RESPONSE = {404: {"description": "Film nije pronađen", "model": ErrorResponse}}
SERVER_ERROR_RESPONSE = {500: {"description": "Greška na poslužitelju", "model": ErrorResponse}}

MovieId = Annotated[int, Path(description="ID filma")]


@router.get(
    "",
    response_model=List[MovieResponse],
    responses={**SERVER_ERROR_RESPONSE},
    summary="Dohvati sve filmove",
    response_description="Lista filmova",
)
async def list_movies(
    repository: MovieRepository = Depends(get_movie_repository),
) -> List[MovieResponse]:
    return await repository.list()


@router.get(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={**NOT_FOUND_RESPONSE, **SERVER_ERROR_RESPONSE},
    summary="Dohvati film po ID-u",
    response_description="Jedan film",
)
async def get_movie(
    movie_id: MovieId,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieResponse:
    movie = await repository.get(movie_id)
    if movie is None:
        raise NotFoundError(resource_id=movie_id)
    return movie


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MovieResponse,
    responses={**SERVER_ERROR_RESPONSE},
    summary="Dodaj novi film",
    response_description="Film je dodan",
)
async def create_movie(
    payload: MovieCreate,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieResponse:
    return await repository.create(payload)


@router.put(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={**NOT_FOUND_RESPONSE, **SERVER_ERROR_RESPONSE},
    summary="Ažuriraj film",
    response_description="Ažurirani film",
)
async def update_movie(
    movie_id: MovieId,
    payload: MovieUpdate,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieResponse:
    """
    Partial update. Fields missing from the body, or sent as null, keep
    their stored value.
    """
    movie = await repository.update(movie_id, payload)
    if movie is None:
        raise NotFoundError(resource_id=movie_id)
    return movie


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND_RESPONSE, **SERVER_ERROR_RESPONSE},
    summary="Obriši film",
    response_description="Film obrisan",
)
async def delete_movie(
    movie_id: MovieId,
    repository: MovieRepository = Depends(get_movie_repository),
) -> Response:
    if not await repository.delete(movie_id):
        raise NotFoundError(resource_id=movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
