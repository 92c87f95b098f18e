"""
Ошибки клиентского ввода. Каждая уходит одним событием error
только тому соединению, которое её вызвало.
"""


class RelayError(Exception):
    message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def client_message(self) -> str:
        return str(self)


class RoomNotFound(RelayError):
    message = "Room does not exist"


class NotAParticipant(RelayError):
    message = "You are not part of this game"


class ColorMismatch(RelayError):
    message = "Invalid color"


class WrongTurn(RelayError):
    message = "It's not your turn"


class IllegalMove(RelayError):
    message = "Invalid move"


class SchemaValidation(RelayError):
    message = "Invalid payload"


class AlreadyInRoom(RelayError):
    message = "You have already joined another game"


class PlayerAlreadyConnected(RelayError):
    message = "You are already connected to this game"
