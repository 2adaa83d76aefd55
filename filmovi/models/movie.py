"""
Filmovi API — Movie SQLAlchemy Model
=====================================

What:  ORM mapping of the `filmovi` table.
Why:   Lets the repository build parameterized statements from Python
       expressions instead of SQL strings.
Who:   Used by MovieRepository; registered on Base.metadata for test schemas.

Table layout (owned by the database, not created by the service):
    id          INTEGER PK, autoincrement
    naslov      title, NOT NULL
    godina      release year, nullable
    zanr        genre, nullable
    created_at  insert timestamp, filled by the database default
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from filmovi.database import Base


class Movie(Base):
    """A single row of the `filmovi` table."""

    __tablename__ = "filmovi"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    naslov: Mapped[str] = mapped_column(String(255), nullable=False)

    godina: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    zanr: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Filled by the database on insert; the service never writes it
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, naslov='{self.naslov}', godina={self.godina})>"
