import logging
from typing import Any, Dict, List

from fastapi import WebSocket

from .config import REMINDER_MESSAGE

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        # Registered before the handshake completes so an accepted client is always tracked
        self.active_connections.append(websocket)
        try:
            await websocket.accept()
        except Exception:
            self.disconnect(websocket)
            raise
        logger.info(f"New WebSocket connection ({len(self.active_connections)} active)")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(f"WebSocket disconnected ({len(self.active_connections)} active)")

    async def broadcast(self, payload: Dict[str, Any]) -> int:
        delivered = 0
        for websocket in list(self.active_connections):
            try:
                await websocket.send_json(payload)
                delivered += 1
            except Exception as e:
                logger.error(f"WebSocket error, dropping client: {str(e)}")
                self.disconnect(websocket)
        return delivered


def build_reminder(clock) -> Dict[str, Any]:
    return {
        "type": "reminder",
        "message": REMINDER_MESSAGE,
        "timestamp": clock.now().isoformat(),
    }


manager = ConnectionManager()


def get_connection_manager():
    return manager
