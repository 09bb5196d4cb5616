import asyncio
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from config import DATABASE_URL, DB_ECHO, DB_TIMEOUT, REQUEST_TIMEOUT, HOST, PORT, CORS_ORIGINS
from models import Database
from routers import movies_router, persons_router, links_router, search_router, roles_router
from services.errors import MovieDBError
from logger import get_logger

# Get logger
logger = get_logger()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def movie_db_error_handler(request: Request, exc: MovieDBError):
    return _error(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}" for err in exc.errors()
    )
    return _error(400, f"Invalid request: {details}")


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Unhandled storage error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error(500, str(getattr(exc, "orig", None) or exc))


def create_app(database: Database = None, request_timeout: float = REQUEST_TIMEOUT) -> FastAPI:
    """Build the HTTP application around a storage handle."""
    if database is None:
        database = Database(DATABASE_URL, echo=DB_ECHO, timeout=DB_TIMEOUT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not await database.create_all():
            logger.error("Schema setup failed, starting in degraded state")
        yield
        await database.dispose()
        logger.info("Server stopped")

    app = FastAPI(title="Movie DB", lifespan=lifespan)
    app.state.database = database

    @app.middleware("http")
    async def request_timeout_middleware(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=request_timeout)
        except asyncio.TimeoutError:
            logger.error(f"Request timed out: {request.method} {request.url.path}")
            return _error(504, "Request timed out.")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MovieDBError, movie_db_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    # Register routers
    app.include_router(movies_router)
    app.include_router(persons_router)
    app.include_router(links_router)
    app.include_router(search_router)
    app.include_router(roles_router)
    return app


def main():
    """Main function"""
    logger.info(f"Starting server at http://{HOST}:{PORT}")
    uvicorn.run(create_app(), host=HOST, port=PORT, log_level="info")


if __name__ == "__main__":
    main()
