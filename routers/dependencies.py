from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from models.roles import RoleKind
from routers.schemas import PersonIn
from services.errors import ValidationError


async def get_session(request: Request) -> AsyncSession:
    """One session per request, taken from the app's storage handle."""
    async for session in request.app.state.database.get_session():
        yield session


def require_title(movie) -> None:
    if movie is None or not movie.title:
        raise ValidationError("Title required.")


def require_person(person: PersonIn, with_type: bool = True) -> None:
    if person is None or not person.first_name or not person.last_name or person.pay is None:
        raise ValidationError("Incomplete person data.")
    if with_type and not person.type:
        raise ValidationError("Incomplete person data.")


def resolve_role(person: PersonIn, require_value: bool = True):
    """
    Map the person's `type` to a RoleKind and pick the matching descriptive
    field. Returns (kind, value); value may be None when not required.
    """
    kind = RoleKind.parse(person.type)
    if kind is None:
        raise ValidationError(f"Unknown person type '{person.type}'.")
    field = kind.spec.field
    value = getattr(person, field)
    if require_value and not value:
        raise ValidationError(f"Missing '{field}' for {kind.value}.")
    return kind, value or None
