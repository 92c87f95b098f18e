"""
Реестр комнат (in-memory): открытые комнаты с явной FIFO-очередью,
закрытые комнаты и индекс соединение -> комната.
Один экземпляр на приложение, хранится в app.state.
"""
import logging
from collections import deque
from dataclasses import dataclass, field

from chess import Board

from .constants import BLACK, WHITE, Color
from .game import new_board

logger = logging.getLogger(__name__)


@dataclass
class Room:
    id: str
    white: str | None = None
    black: str | None = None
    board: Board = field(default_factory=new_board)
    connected: set[str] = field(default_factory=set)
    # player_id -> connection id, не больше одного живого соединения на игрока
    seats: dict[str, str] = field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        return (self.white is None) != (self.black is None)

    @property
    def is_closed(self) -> bool:
        return self.white is not None and self.black is not None

    def color_of(self, player_id: str) -> Color | None:
        if player_id == self.white:
            return WHITE
        if player_id == self.black:
            return BLACK
        return None


class RoomRegistry:
    def __init__(self):
        self._open: dict[str, Room] = {}
        self._open_queue: deque[str] = deque()
        self._closed: dict[str, Room] = {}
        self._by_connection: dict[str, str] = {}

    # --- открытые / закрытые ---
    def add_open(self, room: Room) -> None:
        self._open[room.id] = room
        self._open_queue.append(room.id)

    def pop_oldest_open(self) -> Room | None:
        """Самая давно ждущая открытая комната (удаляется из открытых)."""
        while self._open_queue:
            room_id = self._open_queue.popleft()
            room = self._open.pop(room_id, None)
            if room is not None:
                return room
        return None

    def add_closed(self, room: Room) -> None:
        self._closed[room.id] = room

    def get(self, room_id: str) -> Room | None:
        """Сначала закрытые, потом открытые."""
        return self._closed.get(room_id) or self._open.get(room_id)

    def get_closed(self, room_id: str) -> Room | None:
        return self._closed.get(room_id)

    def open_count(self) -> int:
        return len(self._open)

    def closed_count(self) -> int:
        return len(self._closed)

    # --- индекс соединений ---
    def bind_connection(self, conn_id: str, room_id: str) -> None:
        self._by_connection[conn_id] = room_id

    def room_id_for(self, conn_id: str) -> str | None:
        return self._by_connection.get(conn_id)

    def purge(self, room_id: str) -> Room | None:
        """Удалить комнату отовсюду вместе с записями индекса её соединений."""
        room = self._closed.pop(room_id, None)
        opened = self._open.pop(room_id, None)
        if room_id in self._open_queue:
            self._open_queue.remove(room_id)
        room = room or opened
        stale = [c for c, r in self._by_connection.items() if r == room_id]
        for conn_id in stale:
            del self._by_connection[conn_id]
        if room is not None:
            logger.info("Room %s purged (open=%d closed=%d)", room_id, self.open_count(), self.closed_count())
        return room
