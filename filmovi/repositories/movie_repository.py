"""
Filmovi API — Movie Repository
===============================

What:  The five storage operations behind the /filmovi endpoints.
Why:   Keeps SQL out of the route handlers; routes only translate HTTP.
How:   Each operation opens one unit of work on the injected Database,
       issues parameterized statements built with SQLAlchemy's expression
       language and converts rows into MovieResponse objects.
Who:   Called by the route handlers in filmovi.routes.movies.

Not-found is a return value here, not an exception:
    get / update  → None when no row has the id
    delete        → False when no row was deleted
The route layer decides how that looks over HTTP.

Every value that comes from a request reaches the database as a bound
parameter. Nothing is formatted into SQL text.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from filmovi.database import Database
from filmovi.exceptions import DatabaseError
from filmovi.models.movie import Movie
from filmovi.schemas.movie import MovieCreate, MovieResponse, MovieUpdate

logger = logging.getLogger(__name__)

# asyncpg raises OSError subclasses (ConnectionRefusedError, socket timeouts)
# straight through when it cannot open a connection; SQLAlchemy does not wrap them.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


class MovieRepository:
    """
    Storage operations for the `filmovi` table.

    Error Handling Strategy:
        SQLAlchemy errors and connection-level OSErrors are logged with the
        operation name and wrapped in DatabaseError (the client gets a generic 500). The unit of work has
        already rolled back by the time the wrapper is raised. Nothing is
        retried.
    """

    def __init__(self, database: Database):
        self.database = database

    async def list(self) -> List[MovieResponse]:
        """All rows, in whatever order the database returns them."""
        try:
            async with self.database.session_scope() as session:
                result = await session.execute(select(Movie))
                return [MovieResponse.model_validate(m) for m in result.scalars().all()]
        except STORAGE_ERRORS as e:
            raise self._database_error("list", e)

    async def get(self, movie_id: int) -> Optional[MovieResponse]:
        """One row by primary key, or None."""
        try:
            async with self.database.session_scope() as session:
                movie = await self._fetch(session, movie_id)
                return MovieResponse.model_validate(movie) if movie else None
        except STORAGE_ERRORS as e:
            raise self._database_error("get", e, movie_id)

    async def create(self, data: MovieCreate) -> MovieResponse:
        """
        Insert a movie and return it as stored.

        The database assigns `id` and `created_at`, so the row is read back
        by its new id before the transaction commits.
        """
        try:
            async with self.database.session_scope() as session:
                movie = Movie(naslov=data.naslov, godina=data.godina, zanr=data.zanr)
                session.add(movie)
                # Flush assigns the autoincrement id without committing
                await session.flush()
                stored = await self._fetch(session, movie.id)
                logger.info("Created movie %s: %s", stored.id, stored.naslov)
                return MovieResponse.model_validate(stored)
        except STORAGE_ERRORS as e:
            raise self._database_error("create", e)

    async def update(self, movie_id: int, data: MovieUpdate) -> Optional[MovieResponse]:
        """
        Overwrite the columns the client sent (non-null only) and return the row.

        Returns None when no row has the id. An update without any changes
        touches nothing and just returns the current row.
        """
        changes = data.changes()
        try:
            async with self.database.session_scope() as session:
                if changes:
                    result = await session.execute(
                        update(Movie)
                        .where(Movie.id == movie_id)
                        .values(**changes)
                        .execution_options(synchronize_session=False)
                    )
                    if result.rowcount == 0:
                        return None
                movie = await self._fetch(session, movie_id)
                if movie is None:
                    return None
                logger.info("Updated movie %s: %s", movie_id, sorted(changes))
                return MovieResponse.model_validate(movie)
        except STORAGE_ERRORS as e:
            raise self._database_error("update", e, movie_id)

    async def delete(self, movie_id: int) -> bool:
        """Delete one row. False when there was nothing to delete."""
        try:
            async with self.database.session_scope() as session:
                result = await session.execute(delete(Movie).where(Movie.id == movie_id))
                deleted = result.rowcount > 0
        except STORAGE_ERRORS as e:
            raise self._database_error("delete", e, movie_id)

        if deleted:
            logger.info("Deleted movie %s", movie_id)
        return deleted

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    async def _fetch(session: AsyncSession, movie_id: int) -> Optional[Movie]:
        # populate_existing: after a flush or UPDATE the identity map may hold
        # stale or expired attributes (created_at is a server default)
        result = await session.execute(
            select(Movie)
            .where(Movie.id == movie_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _database_error(
        operation: str, error: Exception, movie_id: Optional[int] = None
    ) -> DatabaseError:
        logger.error(
            "Database error during %s (movie_id=%s): %s",
            operation,
            movie_id,
            str(error),
            exc_info=True,
        )
        context = {"operation": operation, "error_type": type(error).__name__}
        if movie_id is not None:
            context["movie_id"] = movie_id
        return DatabaseError(context=context)
