from fastapi import APIRouter, Depends
from models.roles import RoleKind
from routers.dependencies import get_session
from services.person_service import list_role_holders

router = APIRouter(prefix="/api", tags=["roles"])

ROLE_COLLECTIONS = {
    "actors": RoleKind.ACTOR,
    "actresses": RoleKind.ACTRESS,
    "writers": RoleKind.WRITER,
    "directors": RoleKind.DIRECTOR,
    "producers": RoleKind.PRODUCER,
}


def _role_holders_endpoint(kind: RoleKind):
    async def list_holders(session=Depends(get_session)):
        return await list_role_holders(session, kind)
    list_holders.__doc__ = f"Every {kind.value} record with the person's name."
    return list_holders


for _path, _kind in ROLE_COLLECTIONS.items():
    router.add_api_route(f"/{_path}", _role_holders_endpoint(_kind), methods=["GET"], name=f"list_{_path}")
