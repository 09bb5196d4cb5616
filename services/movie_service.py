from datetime import date
from typing import List, Optional
from sqlalchemy import select, update, delete, case
from sqlalchemy.sql.expression import func
from models.movie import Movie
from models.person import Person
from models.movie_person import MoviePerson
from models.roles import Actor, Actress, Director, Writer, Producer
from services.errors import flush, execute
from logger import get_logger

logger = get_logger()


async def add_movie(session, title: str, release_date: Optional[date] = None, synopsis: Optional[str] = None,
                    rating: Optional[float] = None, run_time: Optional[int] = None,
                    category: Optional[str] = None) -> int:
    """Inserts a movie and returns its new id. Title is the only required field."""
    movie = Movie(
        title=title,
        release_date=release_date,
        synopsis=synopsis,
        rating=rating,
        run_time=run_time,
        category=category,
    )
    session.add(movie)
    await flush(session)
    logger.info(f"Added movie #{movie.movie_id}: {title}")
    return movie.movie_id


async def update_movie(session, movie_id: int, title: str, release_date: Optional[date] = None,
                       synopsis: Optional[str] = None, rating: Optional[float] = None,
                       run_time: Optional[int] = None, category: Optional[str] = None) -> bool:
    """
    Replaces every mutable field of a movie. Omitted optionals are stored as null.
    Returns False when no movie has that id.
    """
    result = await execute(
        session,
        update(Movie)
        .where(Movie.movie_id == movie_id)
        .values(
            title=title,
            release_date=release_date,
            synopsis=synopsis,
            rating=rating,
            run_time=run_time,
            category=category,
        )
        .execution_options(synchronize_session=False),
    )
    return result.rowcount > 0


async def delete_movie_and_links(session, movie_id: int) -> bool:
    """
    Deletes every link to the movie, then the movie itself.

    Must run inside the caller's transaction: if the link deletion fails the
    movie row is rolled back with it. Returns whether the movie existed.
    """
    await execute(session, delete(MoviePerson).where(MoviePerson.movie_id == movie_id))
    result = await execute(session, delete(Movie).where(Movie.movie_id == movie_id))
    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Deleted movie #{movie_id} and its links")
    return deleted


async def get_movies(session) -> List[Movie]:
    result = await session.execute(select(Movie).order_by(Movie.movie_id))
    return result.scalars().all()


async def get_movie(session, movie_id: int) -> Optional[Movie]:
    result = await session.execute(select(Movie).where(Movie.movie_id == movie_id))
    return result.scalar_one_or_none()


async def get_movie_persons(session, movie_id: int) -> List[dict]:
    """
    Returns the people linked to a movie, each with the label of the first
    role kind they hold (`role_type`) and that record's descriptive value (`detail`).
    """
    role_type = case(
        (Actor.actor_id.is_not(None), "Actor"),
        (Actress.actress_id.is_not(None), "Actress"),
        (Director.director_id.is_not(None), "Director"),
        (Writer.writer_id.is_not(None), "Writer"),
        (Producer.producer_id.is_not(None), "Producer"),
    ).label("role_type")
    detail = func.coalesce(
        Actor.role, Actress.role, Director.position, Writer.contribution, Producer.position
    ).label("detail")

    stmt = (
        select(Person, role_type, detail)
        .select_from(MoviePerson)
        .join(Person, MoviePerson.person_id == Person.person_id)
        .outerjoin(Actor, Actor.person_id == Person.person_id)
        .outerjoin(Actress, Actress.person_id == Person.person_id)
        .outerjoin(Director, Director.person_id == Person.person_id)
        .outerjoin(Writer, Writer.person_id == Person.person_id)
        .outerjoin(Producer, Producer.person_id == Person.person_id)
        .where(MoviePerson.movie_id == movie_id)
        .order_by(Person.person_id)
    )
    result = await session.execute(stmt)
    return [
        {**person.to_dict(), "role_type": label, "detail": value}
        for person, label, value in result.all()
    ]
