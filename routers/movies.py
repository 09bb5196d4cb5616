from fastapi import APIRouter, Depends
from routers.dependencies import get_session, require_title, require_person, resolve_role
from routers.schemas import MovieIn, MovieAndPersonCreate
from services.errors import NotFound
from services.movie_service import (
    add_movie, update_movie, delete_movie_and_links, get_movies, get_movie, get_movie_persons,
)
from services.person_service import add_movie_and_person

router = APIRouter(prefix="/api", tags=["movies"])


@router.post("/movie")
async def create_movie(movie: MovieIn, session=Depends(get_session)):
    require_title(movie)
    async with session.begin():
        movie_id = await add_movie(session, **movie.as_kwargs())
    return {"success": True, "movie_id": movie_id}


@router.get("/movies")
async def list_movies(session=Depends(get_session)):
    movies = await get_movies(session)
    return [m.to_dict() for m in movies]


@router.get("/movie/{movie_id}")
async def read_movie(movie_id: int, session=Depends(get_session)):
    movie = await get_movie(session, movie_id)
    if movie is None:
        raise NotFound("Movie not found.")
    return movie.to_dict()


@router.get("/movie/{movie_id}/persons")
async def list_movie_persons(movie_id: int, session=Depends(get_session)):
    return await get_movie_persons(session, movie_id)


@router.put("/movie/{movie_id}")
async def edit_movie(movie_id: int, movie: MovieIn, session=Depends(get_session)):
    require_title(movie)
    async with session.begin():
        updated = await update_movie(session, movie_id, **movie.as_kwargs())
    if not updated:
        raise NotFound("Movie not found.")
    return {"success": True, "message": "Movie updated."}


@router.delete("/movie/{movie_id}")
async def remove_movie(movie_id: int, session=Depends(get_session)):
    async with session.begin():
        deleted = await delete_movie_and_links(session, movie_id)
    if not deleted:
        raise NotFound("Movie not found.")
    return {"success": True, "message": "Movie deleted."}


@router.post("/addMovieAndPerson")
async def create_movie_and_person(body: MovieAndPersonCreate, session=Depends(get_session)):
    """Adds a person with a role record and a movie, then links them, all in one transaction."""
    require_title(body.movie)
    require_person(body.person)
    person = body.person
    kind, value = resolve_role(person)

    async with session.begin():
        movie_id, person_id = await add_movie_and_person(
            session, body.movie.as_kwargs(), person.first_name, person.last_name, person.pay, kind, value,
        )
    return {
        "success": True,
        "message": "Movie and person added successfully.",
        "movie_id": movie_id,
        "person_id": person_id,
    }
