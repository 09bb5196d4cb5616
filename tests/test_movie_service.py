"""Movie, link and search data access."""

from datetime import date
import pytest
from sqlalchemy import select, func
from models.movie_person import MoviePerson
from models.roles import RoleKind
from services.errors import DuplicateLink, ForeignKeyViolation
from services.movie_service import (
    add_movie, update_movie, delete_movie_and_links, get_movie, get_movies, get_movie_persons,
)
from services.link_service import link_movie_person, unlink_movie_person, get_links
from services.person_service import add_person, add_job_record
from services.search_service import movies_by_role, movies_by_year, most_expensive_for_producer


async def _write(database, fn):
    async with database.async_session() as session:
        async with session.begin():
            return await fn(session)


async def _read(database, fn):
    async with database.async_session() as session:
        return await fn(session)


async def _link_count(database) -> int:
    async with database.async_session() as session:
        result = await session.execute(select(func.count()).select_from(MoviePerson))
        return result.scalar_one()


def test_add_and_update_movie(run_with_db):
    async def scenario(database):
        movie_id = await _write(database, lambda s: add_movie(
            s, "Heat", release_date=date(1995, 12, 15), synopsis="Cops and robbers",
            rating=8.3, run_time=170, category="Crime",
        ))
        assert await _write(database, lambda s: update_movie(s, movie_id, "Heat (1995)", rating=9.0))
        movie = await _read(database, lambda s: get_movie(s, movie_id))
        assert movie.to_dict() == {
            "movie_id": movie_id,
            "title": "Heat (1995)",
            "release_date": None,
            "synopsis": None,
            "rating": 9.0,
            "run_time": None,
            "category": None,
        }
        assert await _write(database, lambda s: update_movie(s, 999, "Nothing")) is False

    run_with_db(scenario)


def test_delete_movie_removes_links(run_with_db):
    async def scenario(database):
        async def setup(session):
            movie_id = await add_movie(session, "Alien")
            other_id = await add_movie(session, "Aliens")
            person_id = await add_person(session, "Sigourney", "Weaver", 4000)
            await link_movie_person(session, movie_id, person_id)
            await link_movie_person(session, other_id, person_id)
            return movie_id, other_id

        movie_id, other_id = await _write(database, setup)
        assert await _write(database, lambda s: delete_movie_and_links(s, movie_id)) is True

        assert await _read(database, lambda s: get_movie(s, movie_id)) is None
        links = await _read(database, get_links)
        assert [link.movie_id for link in links] == [other_id]
        assert [m.title for m in await _read(database, get_movies)] == ["Aliens"]
        assert await _write(database, lambda s: delete_movie_and_links(s, movie_id)) is False

    run_with_db(scenario)


def test_duplicate_link_leaves_one_row(run_with_db):
    async def scenario(database):
        async def setup(session):
            movie_id = await add_movie(session, "Alien")
            person_id = await add_person(session, "Sigourney", "Weaver", 4000)
            await link_movie_person(session, movie_id, person_id)
            return movie_id, person_id

        movie_id, person_id = await _write(database, setup)
        with pytest.raises(DuplicateLink):
            await _write(database, lambda s: link_movie_person(s, movie_id, person_id))
        assert await _link_count(database) == 1

    run_with_db(scenario)


def test_link_to_missing_rows_is_foreign_key_violation(run_with_db):
    async def scenario(database):
        movie_id = await _write(database, lambda s: add_movie(s, "Alien"))
        with pytest.raises(ForeignKeyViolation):
            await _write(database, lambda s: link_movie_person(s, movie_id, 12))
        with pytest.raises(ForeignKeyViolation):
            await _write(database, lambda s: link_movie_person(s, 12, 1))

    run_with_db(scenario)


def test_unlink_is_idempotent(run_with_db):
    async def scenario(database):
        async def setup(session):
            movie_id = await add_movie(session, "Alien")
            person_id = await add_person(session, "Sigourney", "Weaver", 4000)
            await link_movie_person(session, movie_id, person_id)
            return movie_id, person_id

        movie_id, person_id = await _write(database, setup)
        assert await _write(database, lambda s: unlink_movie_person(s, movie_id, person_id))
        assert await _write(database, lambda s: unlink_movie_person(s, movie_id, person_id))
        assert await _read(database, get_links) == []

    run_with_db(scenario)


def test_movie_persons_resolve_role_label(run_with_db):
    async def scenario(database):
        async def setup(session):
            movie_id = await add_movie(session, "Barbie")
            director = await add_person(session, "Greta", "Gerwig", 3000)
            await add_job_record(session, RoleKind.DIRECTOR, director, "Lead")
            actress = await add_person(session, "Margot", "Robbie", 8000)
            await add_job_record(session, RoleKind.ACTRESS, actress, "Barbie")
            extra = await add_person(session, "No", "Role", 10)
            for person_id in (director, actress, extra):
                await link_movie_person(session, movie_id, person_id)
            return movie_id

        movie_id = await _write(database, setup)
        rows = await _read(database, lambda s: get_movie_persons(s, movie_id))
        assert [(r["first_name"], r["role_type"], r["detail"]) for r in rows] == [
            ("Greta", "Director", "Lead"),
            ("Margot", "Actress", "Barbie"),
            ("No", None, None),
        ]
        assert await _read(database, lambda s: get_movie_persons(s, 999)) == []

    run_with_db(scenario)


def test_movies_by_year_only_matches_that_year(run_with_db):
    async def scenario(database):
        async def setup(session):
            await add_movie(session, "Tenet", release_date=date(2020, 8, 26))
            await add_movie(session, "Dune", release_date=date(2021, 10, 22))
            await add_movie(session, "Soul", release_date=date(2020, 12, 25))
            await add_movie(session, "Undated")

        await _write(database, setup)
        movies = await _read(database, lambda s: movies_by_year(s, 2020))
        assert [m.title for m in movies] == ["Tenet", "Soul"]
        assert await _read(database, lambda s: movies_by_year(s, 1999)) == []

    run_with_db(scenario)


def test_movies_by_role(run_with_db):
    async def scenario(database):
        async def setup(session):
            first = await add_movie(session, "Heat")
            await add_movie(session, "Casino")
            third = await add_movie(session, "Ronin")
            person_id = await add_person(session, "Robert", "De Niro", 9000)
            actor_id = await add_job_record(session, RoleKind.ACTOR, person_id, "Neil")
            await link_movie_person(session, first, person_id)
            await link_movie_person(session, third, person_id)
            return actor_id

        actor_id = await _write(database, setup)
        movies = await _read(database, lambda s: movies_by_role(s, RoleKind.ACTOR, actor_id))
        assert [m.title for m in movies] == ["Heat", "Ronin"]
        assert await _read(database, lambda s: movies_by_role(s, RoleKind.WRITER, actor_id)) == []

    run_with_db(scenario)


def test_most_expensive_for_producer(run_with_db):
    async def scenario(database):
        async def setup(session):
            movie_a = await add_movie(session, "A")
            movie_b = await add_movie(session, "B")
            unrelated = await add_movie(session, "C")
            producer = await add_person(session, "Kathleen", "Kennedy", 100)
            producer_id = await add_job_record(session, RoleKind.PRODUCER, producer, "Executive")
            idle = await add_person(session, "Idle", "Producer", 100)
            idle_id = await add_job_record(session, RoleKind.PRODUCER, idle, "Associate")
            await link_movie_person(session, movie_a, producer)
            await link_movie_person(session, movie_b, producer)
            for first, pay, movie_id in (("Low", 1000, movie_a), ("High", 5000, movie_b), ("Mid", 2000, movie_a)):
                person_id = await add_person(session, first, "Paid", pay)
                await link_movie_person(session, movie_id, person_id)
            rich = await add_person(session, "Elsewhere", "Paid", 99999)
            await link_movie_person(session, unrelated, rich)
            return producer_id, idle_id

        producer_id, idle_id = await _write(database, setup)
        top = await _read(database, lambda s: most_expensive_for_producer(s, producer_id))
        assert (top.first_name, top.pay) == ("High", 5000)
        assert await _read(database, lambda s: most_expensive_for_producer(s, idle_id)) is None
        assert await _read(database, lambda s: most_expensive_for_producer(s, 404)) is None

    run_with_db(scenario)


def test_most_expensive_can_be_the_producer(run_with_db):
    async def scenario(database):
        async def setup(session):
            movie_id = await add_movie(session, "Avatar")
            producer = await add_person(session, "Jon", "Landau", 9000)
            producer_id = await add_job_record(session, RoleKind.PRODUCER, producer, "Producer")
            actor = await add_person(session, "Sam", "Worthington", 100)
            await link_movie_person(session, movie_id, producer)
            await link_movie_person(session, movie_id, actor)
            return producer_id, producer

        producer_id, producer = await _write(database, setup)
        top = await _read(database, lambda s: most_expensive_for_producer(s, producer_id))
        assert (top.person_id, top.pay) == (producer, 9000)

    run_with_db(scenario)
