from fastapi import APIRouter, Depends
from routers.dependencies import get_session
from routers.schemas import LinkIn
from services.errors import DuplicateLink, ValidationError
from services.link_service import link_movie_person, unlink_movie_person, get_links
from logger import get_logger

router = APIRouter(prefix="/api", tags=["links"])
logger = get_logger()


def _require_ids(link: LinkIn, message: str) -> None:
    if not link.movie_id or not link.person_id:
        raise ValidationError(message)


@router.post("/link-person-to-movie")
async def link_person_to_movie(link: LinkIn, session=Depends(get_session)):
    logger.info(f"Link request: movie_id={link.movie_id}, person_id={link.person_id}")
    _require_ids(link, "movie_id and person_id required")

    try:
        async with session.begin():
            await link_movie_person(session, link.movie_id, link.person_id)
    except DuplicateLink as e:
        # An existing link is reported, not treated as a failure
        return {"message": e.message}

    return {"success": True, "message": "Person successfully linked to movie."}


@router.delete("/movie-person")
async def remove_link(link: LinkIn, session=Depends(get_session)):
    _require_ids(link, "IDs required.")
    async with session.begin():
        await unlink_movie_person(session, link.movie_id, link.person_id)
    return {"success": True, "message": "Link removed."}


@router.get("/movie-person")
async def list_links(session=Depends(get_session)):
    links = await get_links(session)
    return [link.to_dict() for link in links]
