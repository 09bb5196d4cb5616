import asyncio
import pytest
from fastapi.testclient import TestClient
from app import create_app
from models import Database


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'MovieDB.db'}"


@pytest.fixture
def client(db_url):
    app = create_app(Database(db_url))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def run_with_db(db_url):
    """Runs `scenario(database)` against a freshly created schema in its own event loop."""
    def run(scenario):
        async def main():
            database = Database(db_url)
            assert await database.create_all()
            try:
                return await scenario(database)
            finally:
                await database.dispose()
        return asyncio.run(main())
    return run
