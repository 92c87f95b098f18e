"""
Менеджер WebSocket: подключения по connection id, группы по комнатам,
отправка событий одному соединению или всей комнате.
"""
import logging
import uuid
from collections import defaultdict
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class Connection:
    def __init__(self, ws: WebSocket, conn_id: str):
        self.ws = ws
        self.conn_id = conn_id
        self.closed = False


def frame(event: str, *args: Any) -> dict[str, Any]:
    return {"event": event, "args": list(args)}


class WSManager:
    def __init__(self):
        self._by_id: dict[str, Connection] = {}
        self._groups: dict[str, set[str]] = defaultdict(set)

    @property
    def count(self) -> int:
        return len(self._by_id)

    def connect(self, ws: WebSocket) -> str:
        conn_id = str(uuid.uuid4())
        self._by_id[conn_id] = Connection(ws, conn_id)
        logger.info("Socket connections %d", self.count)
        return conn_id

    def disconnect(self, conn_id: str) -> None:
        if self._by_id.pop(conn_id, None) is None:
            return
        for group_id in [g for g, members in self._groups.items() if conn_id in members]:
            self._leave(conn_id, group_id)
        logger.info("Socket connections %d", self.count)

    def join_group(self, conn_id: str, group_id: str) -> None:
        self._groups[group_id].add(conn_id)

    def _leave(self, conn_id: str, group_id: str) -> None:
        members = self._groups.get(group_id)
        if members is None:
            return
        members.discard(conn_id)
        if not members:
            del self._groups[group_id]

    def members(self, group_id: str) -> set[str]:
        return set(self._groups.get(group_id, ()))

    async def emit(self, conn_id: str, event: str, *args: Any) -> bool:
        conn = self._by_id.get(conn_id)
        if not conn or conn.closed:
            return False
        try:
            await conn.ws.send_json(frame(event, *args))
            return True
        except Exception as e:
            logger.warning("emit %s to %s: %s", event, conn_id, e)
            return False

    async def broadcast(self, group_id: str, event: str, *args: Any) -> None:
        for conn_id in sorted(self.members(group_id)):
            await self.emit(conn_id, event, *args)

    async def close_group(self, group_id: str, code: int = 1000) -> None:
        """Принудительно закрыть все соединения комнаты и распустить группу."""
        for conn_id in self.members(group_id):
            conn = self._by_id.get(conn_id)
            if conn and not conn.closed:
                conn.closed = True
                try:
                    await conn.ws.close(code=code)
                except Exception as e:
                    logger.warning("close %s: %s", conn_id, e)
        self._groups.pop(group_id, None)
