from fastapi import APIRouter, Depends
from routers.dependencies import get_session, require_person, resolve_role
from routers.schemas import PersonIn, PersonCreate
from services.errors import NotFound
from services.person_service import (
    create_person_with_role, update_person, update_job_record, delete_person_and_links,
    get_persons, get_person, get_person_movies,
)

router = APIRouter(prefix="/api", tags=["persons"])


@router.post("/person")
async def create_person(body: PersonCreate, session=Depends(get_session)):
    """
    Creates a person and their role record, and links them to `movie_id` when
    one is given. Any failing step rolls back the whole request.
    """
    person = body.person
    require_person(person)
    kind, value = resolve_role(person)

    async with session.begin():
        person_id = await create_person_with_role(
            session, person.first_name, person.last_name, person.pay, kind, value, body.movie_id,
        )

    message = "Person added and linked to movie." if body.movie_id is not None else "Person added."
    return {"success": True, "message": message, "person_id": person_id}


@router.get("/persons")
async def list_persons(session=Depends(get_session)):
    persons = await get_persons(session)
    return [p.to_dict() for p in persons]


@router.get("/person/{person_id}")
async def read_person(person_id: int, session=Depends(get_session)):
    person = await get_person(session, person_id)
    if person is None:
        raise NotFound("Person not found.")
    return person.to_dict()


@router.get("/person/{person_id}/movies")
async def list_person_movies(person_id: int, session=Depends(get_session)):
    movies = await get_person_movies(session, person_id)
    return [m.to_dict() for m in movies]


@router.put("/person/{person_id}")
async def edit_person(person_id: int, person: PersonIn, session=Depends(get_session)):
    """
    Replaces the person's fields. When `type` is given, the matching role
    record is updated too, but only if the person already holds one; an omitted
    descriptive field keeps the stored value.
    """
    require_person(person, with_type=False)
    role = resolve_role(person, require_value=False) if person.type else None

    async with session.begin():
        if not await update_person(session, person_id, person.first_name, person.last_name, person.pay):
            raise NotFound("Person not found.")
        if role is not None:
            kind, value = role
            await update_job_record(session, kind, person_id, value)

    return {"success": True, "message": "Person updated."}


@router.delete("/person/{person_id}")
async def remove_person(person_id: int, session=Depends(get_session)):
    async with session.begin():
        deleted = await delete_person_and_links(session, person_id)
    if not deleted:
        raise NotFound("Person not found.")
    return {"success": True, "message": "Person deleted."}
