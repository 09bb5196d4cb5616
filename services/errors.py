from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from logger import get_logger

logger = get_logger()


class MovieDBError(Exception):
    """Base class for every error the catalog reports to a caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MovieDBError):
    """Missing or malformed request fields."""

    status_code = 400


class NotFound(MovieDBError):
    status_code = 404


class StorageError(MovieDBError):
    """Opaque engine failure; carries the underlying message."""

    status_code = 500


class DuplicatePerson(StorageError):
    status_code = 409

    def __init__(self, message: str = "Person already exists."):
        super().__init__(message)


class DuplicateLink(StorageError):
    status_code = 409

    def __init__(self, message: str = "Person already linked to this movie."):
        super().__init__(message)


class ForeignKeyViolation(StorageError):
    status_code = 400

    def __init__(self, message: str = "Invalid movie_id or person_id (foreign key error)."):
        super().__init__(message)


def classify(exc: SQLAlchemyError, duplicate: type = None) -> StorageError:
    """
    Map an engine error raised by a write to the catalog's error taxonomy.

    `duplicate` is the error to report for a UNIQUE/PRIMARY KEY violation on the
    statement being run; without it such violations stay unclassified.
    """
    if isinstance(exc, IntegrityError):
        message = str(exc.orig)
        if "FOREIGN KEY constraint failed" in message:
            return ForeignKeyViolation()
        if duplicate is not None and "UNIQUE constraint failed" in message:
            return duplicate()
    return StorageError(str(getattr(exc, "orig", None) or exc))


def _raise_classified(exc: SQLAlchemyError, duplicate: type = None):
    error = classify(exc, duplicate)
    if type(error) is StorageError:
        logger.error(f"Storage failure: {exc}", exc_info=True)
    else:
        logger.warning(f"{type(error).__name__}: {error.message}")
    raise error from exc


async def flush(session, duplicate: type = None):
    """Flush pending writes, converting engine errors with `classify`."""
    try:
        await session.flush()
    except SQLAlchemyError as e:
        _raise_classified(e, duplicate)


async def execute(session, statement, duplicate: type = None):
    """Run a write statement, converting engine errors with `classify`."""
    try:
        return await session.execute(statement)
    except SQLAlchemyError as e:
        _raise_classified(e, duplicate)
