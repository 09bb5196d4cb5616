from .movies import router as movies_router
from .persons import router as persons_router
from .links import router as links_router
from .search import router as search_router
from .roles import router as roles_router

__all__ = ["movies_router", "persons_router", "links_router", "search_router", "roles_router"]
