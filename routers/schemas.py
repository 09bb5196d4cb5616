"""Request bodies. Every field is optional so that the handlers can answer
missing data with their own 400 messages."""

from datetime import date
from typing import Optional
from pydantic import BaseModel


class MovieIn(BaseModel):
    title: Optional[str] = None
    release_date: Optional[date] = None
    synopsis: Optional[str] = None
    rating: Optional[float] = None
    run_time: Optional[int] = None
    category: Optional[str] = None

    def as_kwargs(self) -> dict:
        """Keyword arguments for add_movie / update_movie."""
        return self.model_dump()


class PersonIn(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    pay: Optional[float] = None
    type: Optional[str] = None
    role: Optional[str] = None
    contribution: Optional[str] = None
    position: Optional[str] = None


class PersonCreate(BaseModel):
    person: Optional[PersonIn] = None
    movie_id: Optional[int] = None


class MovieAndPersonCreate(BaseModel):
    movie: Optional[MovieIn] = None
    person: Optional[PersonIn] = None


class LinkIn(BaseModel):
    movie_id: Optional[int] = None
    person_id: Optional[int] = None
