import pytest
from fastapi.testclient import TestClient
from backend.habit_service.main import app as habit_app
from backend.habit_service.notifications import get_connection_manager
from backend.habit_service.store import get_store


@pytest.fixture
def socket_client(store, manager):
    habit_app.dependency_overrides[get_store] = lambda: store
    habit_app.dependency_overrides[get_connection_manager] = lambda: manager
    # Not entered as a context manager, so startup tasks and the scheduler stay off
    client = TestClient(habit_app)
    yield client
    habit_app.dependency_overrides.clear()


class TestReminderSocket:
    def test_connect_registers_and_close_unregisters(self, socket_client, manager):
        with socket_client.websocket_connect("/ws") as websocket:
            assert len(manager.active_connections) == 1
            websocket.send_text("hello")
            assert len(manager.active_connections) == 1

        assert manager.active_connections == []

    def test_binary_frame_does_not_leak_connection(self, socket_client, manager):
        with socket_client.websocket_connect("/ws") as websocket:
            websocket.send_bytes(b"x")
            assert len(manager.active_connections) == 1

        assert manager.active_connections == []

    def test_several_clients_are_tracked(self, socket_client, manager):
        with socket_client.websocket_connect("/ws"):
            with socket_client.websocket_connect("/ws"):
                assert len(manager.active_connections) == 2
            assert len(manager.active_connections) == 1

        assert manager.active_connections == []
