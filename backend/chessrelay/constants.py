"""Цвета и имена событий протокола."""
from typing import Literal

Color = Literal["w", "b"]

WHITE: Color = "w"
BLACK: Color = "b"

# client -> server
EVENT_JOIN_ROOM = "joinRoom"
EVENT_MOVE = "move"

# server -> client
EVENT_ERROR = "error"
EVENT_ROOM_JOINED = "roomJoined"
EVENT_BOTH_PLAYERS_READY = "bothPlayersReady"
EVENT_MOVE_MADE = "moveMade"
EVENT_GAME_OVER = "gameOver"

# Закрытие ws с недопустимого Origin
CLOSE_FORBIDDEN_ORIGIN = 4003
