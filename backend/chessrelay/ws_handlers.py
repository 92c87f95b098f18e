"""
Обработка сообщений WebSocket: joinRoom, move, отключение.
Все обработчики выполняются под одним asyncio.Lock, поэтому проверка
и изменение комнаты не перемежаются с другими событиями.
"""
import asyncio
import json
import logging
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect, WebSocketState

from . import game
from .constants import (
    CLOSE_FORBIDDEN_ORIGIN,
    EVENT_BOTH_PLAYERS_READY,
    EVENT_ERROR,
    EVENT_GAME_OVER,
    EVENT_JOIN_ROOM,
    EVENT_MOVE,
    EVENT_MOVE_MADE,
    EVENT_ROOM_JOINED,
)
from .errors import (
    AlreadyInRoom,
    ColorMismatch,
    NotAParticipant,
    PlayerAlreadyConnected,
    RelayError,
    RoomNotFound,
    SchemaValidation,
    WrongTurn,
)
from .rooms import RoomRegistry
from .schemas import GameOverPayload, JoinRoomData, MoveData, RoomJoinedPayload, parse_payload
from .ws_manager import WSManager

logger = logging.getLogger(__name__)


class SessionRelay:
    def __init__(self, registry: RoomRegistry, manager: WSManager):
        self.registry = registry
        self.manager = manager
        self._lock = asyncio.Lock()

    async def dispatch(self, conn_id: str, raw: str | None) -> None:
        """Разобрать кадр {"event", "data"} и вызвать обработчик; ошибки уходят только отправителю."""
        async with self._lock:
            try:
                event, data = _parse_frame(raw)
                logger.info("WS: msg from %s event=%s", conn_id, event)
                if event == EVENT_JOIN_ROOM:
                    await self.join(conn_id, data)
                elif event == EVENT_MOVE:
                    await self.move(conn_id, data)
                else:
                    raise SchemaValidation(f"Unknown event: {event}")
            except RelayError as e:
                logger.warning("WS: %s from %s: %s", type(e).__name__, conn_id, e)
                await self.manager.emit(conn_id, EVENT_ERROR, e.client_message)

    async def join(self, conn_id: str, data: Any) -> None:
        req = parse_payload(JoinRoomData, data)
        room = self.registry.get(req.room_id)
        if room is None:
            raise RoomNotFound()
        color = room.color_of(req.player_id)
        if color is None:
            raise NotAParticipant()
        if color != req.player_color:
            raise ColorMismatch()
        if conn_id in room.connected:
            return
        bound = self.registry.room_id_for(conn_id)
        if bound is not None and bound != room.id:
            # одно соединение играет не больше чем в одной комнате
            raise AlreadyInRoom()
        if req.player_id in room.seats:
            raise PlayerAlreadyConnected()

        self.manager.join_group(conn_id, room.id)
        self.registry.bind_connection(conn_id, room.id)
        room.connected.add(conn_id)
        room.seats[req.player_id] = conn_id
        logger.info("Player %s joined room %s as %s", req.player_id, room.id, color)

        joined = RoomJoinedPayload(
            room_id=room.id,
            player_id=req.player_id,
            player_color=color,
            fen=room.board.fen(),
        )
        await self.manager.emit(conn_id, EVENT_ROOM_JOINED, joined.to_wire())

        if len(room.connected) == 2:
            await self.manager.broadcast(room.id, EVENT_BOTH_PLAYERS_READY)

    async def move(self, conn_id: str, data: Any) -> None:
        req = parse_payload(MoveData, data)
        # в открытой комнате (без второго игрока) ходить нельзя
        room = self.registry.get_closed(req.room_id)
        if room is None:
            raise RoomNotFound()
        color = room.color_of(req.player_id)
        if color is None:
            raise NotAParticipant()
        if game.turn_color(room.board) != color:
            raise WrongTurn()

        game.apply_move(room.board, req.move.from_square, req.move.to_square, req.move.promotion)
        logger.info("Room %s: %s played %s%s", room.id, color, req.move.from_square, req.move.to_square)
        await self.manager.broadcast(room.id, EVENT_MOVE_MADE, req.move.to_wire(), color)

        if game.is_game_over(room.board):
            result = GameOverPayload(winner=game.winner(room.board))
            logger.info("Room %s: game over, winner=%s", room.id, result.winner)
            await self.manager.broadcast(room.id, EVENT_GAME_OVER, result.to_wire())
            await self.manager.close_group(room.id)
            self.registry.purge(room.id)

    async def disconnect(self, conn_id: str) -> None:
        """Любое отключение завершает партию для обоих игроков."""
        async with self._lock:
            room_id = self.registry.room_id_for(conn_id)
            if room_id is None:
                return
            await self.manager.close_group(room_id)
            self.registry.purge(room_id)
            logger.info("Room %s closed after %s disconnected", room_id, conn_id)


def _parse_frame(raw: str | None) -> tuple[str, Any]:
    if raw is None:
        raise SchemaValidation("Only text frames are supported")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SchemaValidation(f"Invalid JSON: {e.msg}") from e
    except (ValueError, RecursionError) as e:
        # слишком длинные числа и слишком глубокая вложенность
        raise SchemaValidation("Invalid JSON: frame too large or too deeply nested") from e
    if not isinstance(data, dict) or not isinstance(data.get("event"), str):
        raise SchemaValidation("Frame must be an object with an 'event' name")
    return data["event"], data.get("data")


def origin_allowed(ws: WebSocket, allowed_origins: list[str]) -> bool:
    origin = ws.headers.get("origin")
    if origin is None or "*" in allowed_origins:
        return True
    return origin in allowed_origins


async def ws_loop(ws: WebSocket, relay: SessionRelay, allowed_origins: list[str]) -> None:
    """Принять соединение и обрабатывать кадры до отключения."""
    if not origin_allowed(ws, allowed_origins):
        logger.warning("WS: origin %s not allowed, closing %d", ws.headers.get("origin"), CLOSE_FORBIDDEN_ORIGIN)
        await ws.close(code=CLOSE_FORBIDDEN_ORIGIN)
        return
    await ws.accept()
    conn_id = relay.manager.connect(ws)
    try:
        # после закрытия сервером (конец партии) читать уже нельзя
        while ws.application_state == WebSocketState.CONNECTED:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
            # у бинарного кадра нет "text", dispatch ответит ошибкой
            await relay.dispatch(conn_id, message.get("text"))
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s conn_id=%s", e.code, conn_id)
    except Exception as e:
        logger.exception("WS: error conn_id=%s: %s", conn_id, e)
    finally:
        relay.manager.disconnect(conn_id)
        await relay.disconnect(conn_id)
