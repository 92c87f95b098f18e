"""
Пейринг: первый запрос создаёт комнату (белые), следующий забирает
самую старую открытую комнату (чёрные) и переводит её в закрытые.
"""
import logging
import uuid
from dataclasses import dataclass

from .constants import BLACK, WHITE, Color
from .rooms import Room, RoomRegistry

logger = logging.getLogger(__name__)


@dataclass
class NewGame:
    room_id: str
    player_id: str
    color: Color


def _new_id() -> str:
    return str(uuid.uuid4())


def request_new_game(registry: RoomRegistry) -> NewGame:
    """Всегда успешен. Возвращает идентификаторы и цвет запросившего."""
    room = registry.pop_oldest_open()
    if room is None:
        room = Room(id=_new_id(), white=_new_id())
        registry.add_open(room)
        logger.info("Room %s created, waiting for opponent", room.id)
        return NewGame(room_id=room.id, player_id=room.white, color=WHITE)
    room.black = _new_id()
    registry.add_closed(room)
    logger.info("Room %s paired (open=%d closed=%d)", room.id, registry.open_count(), registry.closed_count())
    return NewGame(room_id=room.id, player_id=room.black, color=BLACK)
