from fastapi import APIRouter, Depends
from models.roles import RoleKind
from routers.dependencies import get_session
from services.search_service import movies_by_role, movies_by_year, most_expensive_for_producer

router = APIRouter(prefix="/api/search", tags=["search"])


# Registered before the role route so that "year" is never read as a role kind
@router.get("/movies-by-year/{year}")
async def search_movies_by_year(year: int, session=Depends(get_session)):
    movies = await movies_by_year(session, year)
    return [m.to_dict() for m in movies]


@router.get("/movies-by-{kind}/{role_id}")
async def search_movies_by_role(kind: RoleKind, role_id: int, session=Depends(get_session)):
    movies = await movies_by_role(session, kind, role_id)
    return [m.to_dict() for m in movies]


@router.get("/most-expensive/{producer_id}")
async def search_most_expensive(producer_id: int, session=Depends(get_session)):
    person = await most_expensive_for_producer(session, producer_id)
    return person.to_dict() if person is not None else None
