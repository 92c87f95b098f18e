"""Модели входящих сообщений и ответов (pydantic)."""
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .constants import Color
from .errors import SchemaValidation

T = TypeVar("T", bound=BaseModel)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MovePayload(CamelModel):
    from_square: str = Field(alias="from")
    to_square: str = Field(alias="to")
    promotion: Optional[str] = None


class JoinRoomData(CamelModel):
    room_id: str
    player_id: str
    player_color: Color


class MoveData(CamelModel):
    room_id: str
    player_id: str
    move: MovePayload


class NewGameResponse(CamelModel):
    room_id: str
    player_id: str
    player_color: Color


class RoomJoinedPayload(NewGameResponse):
    fen: str


class GameOverPayload(CamelModel):
    winner: Optional[Color] = None


def parse_payload(model: type[T], data: Any) -> T:
    """Провалидировать payload события; ошибка схемы -> SchemaValidation."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise SchemaValidation(f"{SchemaValidation.message}: {details}") from e
