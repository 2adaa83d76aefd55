"""
FastAPI dependency injection for the database pool and movie repository.
"""

from fastapi import Depends, Request

from filmovi.database import Database
from filmovi.repositories.movie_repository import MovieRepository


def get_database(request: Request) -> Database:
    """The Database the application was built with (see create_app)."""
    return request.app.state.database


def get_movie_repository(database: Database = Depends(get_database)) -> MovieRepository:
    """Repository bound to the application's pool, for FastAPI Depends()."""
    return MovieRepository(database)
