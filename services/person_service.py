from typing import List, Optional, Tuple
from sqlalchemy import select, insert, update, delete
from models.movie import Movie
from models.person import Person
from models.movie_person import MoviePerson
from models.roles import RoleKind, ROLE_SPECS
from services.errors import DuplicatePerson, flush, execute
from services.movie_service import add_movie
from services.link_service import link_movie_person
from logger import get_logger

logger = get_logger()


async def add_person(session, first_name: str, last_name: str, pay: float) -> int:
    """
    Inserts a person and returns the new id.
    Raises DuplicatePerson when the first/last name pair is already taken.
    """
    person = Person(first_name=first_name, last_name=last_name, pay=pay)
    session.add(person)
    await flush(session, duplicate=DuplicatePerson)
    logger.info(f"Added person #{person.person_id}: {first_name} {last_name}")
    return person.person_id


async def update_person(session, person_id: int, first_name: str, last_name: str, pay: float) -> bool:
    result = await execute(
        session,
        update(Person)
        .where(Person.person_id == person_id)
        .values(first_name=first_name, last_name=last_name, pay=pay)
        .execution_options(synchronize_session=False),
        duplicate=DuplicatePerson,
    )
    return result.rowcount > 0


async def delete_person_and_links(session, person_id: int) -> bool:
    """
    Deletes the person's records of all five role kinds, their links and
    finally the person row. The first failing statement aborts the rest;
    the caller's transaction then discards the deletions already made.
    Returns whether the person existed.
    """
    for spec in ROLE_SPECS.values():
        await execute(session, delete(spec.model).where(spec.model.person_id == person_id))
    await execute(session, delete(MoviePerson).where(MoviePerson.person_id == person_id))
    result = await execute(session, delete(Person).where(Person.person_id == person_id))
    deleted = result.rowcount > 0
    if deleted:
        logger.info(f"Deleted person #{person_id} with role records and links")
    return deleted


async def get_persons(session) -> List[Person]:
    result = await session.execute(select(Person).order_by(Person.person_id))
    return result.scalars().all()


async def get_person(session, person_id: int) -> Optional[Person]:
    result = await session.execute(select(Person).where(Person.person_id == person_id))
    return result.scalar_one_or_none()


async def get_person_movies(session, person_id: int) -> List[Movie]:
    result = await session.execute(
        select(Movie)
        .join(MoviePerson, MoviePerson.movie_id == Movie.movie_id)
        .where(MoviePerson.person_id == person_id)
        .order_by(Movie.movie_id)
    )
    return result.scalars().all()


# ── Role records ──────────────────────────────────────────

async def add_job_record(session, kind: RoleKind, person_id: int, value: str) -> int:
    """Inserts a role record of the given kind and returns its id."""
    spec = kind.spec
    result = await execute(
        session,
        insert(spec.model.__table__).values({"person_id": person_id, spec.field: value}),
    )
    record_id = result.inserted_primary_key[0]
    logger.info(f"Added {kind.value} #{record_id} for person #{person_id}")
    return record_id


async def role_exists(session, kind: RoleKind, person_id: int) -> bool:
    spec = kind.spec
    result = await session.execute(
        select(spec.id_column).where(spec.model.person_id == person_id).limit(1)
    )
    return result.first() is not None


async def get_job_value(session, kind: RoleKind, person_id: int) -> Optional[str]:
    spec = kind.spec
    result = await session.execute(
        select(spec.value_column).where(spec.model.person_id == person_id).limit(1)
    )
    return result.scalar_one_or_none()


async def update_job_record(session, kind: RoleKind, person_id: int, value: Optional[str] = None) -> bool:
    """
    Updates the descriptive field of a person's role record.

    Nothing is created when the person holds no record of this kind (returns
    False). When `value` is None the stored value is kept.
    """
    if not await role_exists(session, kind, person_id):
        return False
    if value is None:
        value = await get_job_value(session, kind, person_id)

    spec = kind.spec
    await execute(
        session,
        update(spec.model)
        .where(spec.model.person_id == person_id)
        .values({spec.field: value})
        .execution_options(synchronize_session=False),
    )
    return True


async def list_role_holders(session, kind: RoleKind) -> List[dict]:
    """Every record of a role kind with the holder's first and last name."""
    spec = kind.spec
    result = await session.execute(
        select(
            spec.id_column,
            spec.model.person_id,
            spec.value_column,
            Person.first_name,
            Person.last_name,
        )
        .join(Person, spec.model.person_id == Person.person_id)
        .order_by(spec.id_column)
    )
    return [dict(row._mapping) for row in result.all()]


# ── Composite pipelines ───────────────────────────────────

async def create_person_with_role(session, first_name: str, last_name: str, pay: float,
                                  kind: RoleKind, value: str, movie_id: Optional[int] = None) -> int:
    """
    Adds a person, their role record and, when `movie_id` is given, links them
    to that movie. Steps run in order and the first failure propagates.
    """
    person_id = await add_person(session, first_name, last_name, pay)
    await add_job_record(session, kind, person_id, value)
    if movie_id is not None:
        await link_movie_person(session, movie_id, person_id)
    return person_id


async def add_movie_and_person(session, movie: dict, first_name: str, last_name: str, pay: float,
                               kind: RoleKind, value: str) -> Tuple[int, int]:
    """
    Adds a person with a role record, then the movie, then links the two.
    `movie` holds the keyword arguments of `add_movie`.
    Returns (movie_id, person_id).
    """
    person_id = await create_person_with_role(session, first_name, last_name, pay, kind, value)
    movie_id = await add_movie(session, **movie)
    await link_movie_person(session, movie_id, person_id)
    return movie_id, person_id
