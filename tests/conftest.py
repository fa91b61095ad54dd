import pytest
import pytest_asyncio
import logging
from datetime import date
from httpx import AsyncClient, ASGITransport
from backend.habit_service.clock import FixedClock
from backend.habit_service.main import app as habit_app
from backend.habit_service.notifications import ConnectionManager, get_connection_manager
from backend.habit_service.store import HabitStore, get_store

# Set up logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

TODAY = date(2024, 7, 10)


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def store(clock):
    logger.info(f"Creating fresh habit store pinned to {clock.today()}")
    return HabitStore(clock)


@pytest.fixture
def manager():
    return ConnectionManager()


@pytest_asyncio.fixture
async def habit_client(store, manager):
    habit_app.dependency_overrides[get_store] = lambda: store
    habit_app.dependency_overrides[get_connection_manager] = lambda: manager
    async with AsyncClient(transport=ASGITransport(app=habit_app), base_url="http://test") as client:
        yield client
    habit_app.dependency_overrides.clear()


@pytest.fixture
def water(store):
    return store.registry.create("Water", 8)
