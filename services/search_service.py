from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.sql.expression import func
from models.movie import Movie
from models.person import Person
from models.movie_person import MoviePerson
from models.roles import RoleKind, Producer


async def movies_by_role(session, kind: RoleKind, role_id: int) -> List[Movie]:
    """Movies linked to the person who holds the role record `<kind>_id = role_id`."""
    spec = kind.spec
    result = await session.execute(
        select(Movie)
        .join(MoviePerson, Movie.movie_id == MoviePerson.movie_id)
        .join(spec.model, spec.model.person_id == MoviePerson.person_id)
        .where(spec.id_column == role_id)
        .order_by(Movie.movie_id)
    )
    return result.scalars().all()


async def movies_by_year(session, year: int) -> List[Movie]:
    result = await session.execute(
        select(Movie)
        .where(func.strftime('%Y', Movie.release_date) == f"{year:04d}")
        .order_by(Movie.movie_id)
    )
    return result.scalars().all()


async def most_expensive_for_producer(session, producer_id: int) -> Optional[Person]:
    """
    The highest paid person linked to any movie the producer is linked to.
    The producer counts as well. None when the producer has no movies.
    """
    producer_person = select(Producer.person_id).where(Producer.producer_id == producer_id)
    producer_movies = (
        select(MoviePerson.movie_id)
        .where(MoviePerson.person_id.in_(producer_person))
    )
    result = await session.execute(
        select(Person)
        .join(MoviePerson, MoviePerson.person_id == Person.person_id)
        .where(MoviePerson.movie_id.in_(producer_movies))
        .order_by(Person.pay.desc(), Person.person_id)
        .limit(1)
    )
    return result.scalar_one_or_none()
