from typing import List
from sqlalchemy import select, insert, delete
from models.movie_person import MoviePerson
from services.errors import DuplicateLink, execute
from logger import get_logger

logger = get_logger()


async def link_movie_person(session, movie_id: int, person_id: int) -> bool:
    """
    Links a person to a movie.

    Raises DuplicateLink when the pair is already linked and
    ForeignKeyViolation when either id does not exist.
    """
    await execute(
        session,
        insert(MoviePerson).values(movie_id=movie_id, person_id=person_id),
        duplicate=DuplicateLink,
    )
    logger.info(f"Linked person #{person_id} to movie #{movie_id}")
    return True


async def unlink_movie_person(session, movie_id: int, person_id: int) -> bool:
    """Removes a link. Succeeds whether or not the link existed."""
    await execute(
        session,
        delete(MoviePerson).where(
            MoviePerson.movie_id == movie_id,
            MoviePerson.person_id == person_id,
        ),
    )
    return True


async def get_links(session) -> List[MoviePerson]:
    result = await session.execute(
        select(MoviePerson).order_by(MoviePerson.movie_id, MoviePerson.person_id)
    )
    return result.scalars().all()
