"""Unit tests for chessrelay/pairing.py"""

from chessrelay.pairing import request_new_game
from chessrelay.rooms import Room, RoomRegistry


def test_first_request_creates_open_room(registry: RoomRegistry) -> None:
    """With no open room the requester becomes white in a new open room."""
    created = request_new_game(registry)

    assert created.color == "w"
    assert registry.open_count() == 1
    assert registry.closed_count() == 0

    room = registry.get(created.room_id)
    assert room is not None
    assert room.white == created.player_id
    assert room.black is None
    assert room.is_open
    assert room.connected == set()
    assert room.board.fen() == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_second_request_closes_the_open_room(registry: RoomRegistry) -> None:
    """Second requester joins the same room as black and the room moves to closed."""
    first = request_new_game(registry)
    second = request_new_game(registry)

    assert second.room_id == first.room_id
    assert second.color == "b"
    assert second.player_id != first.player_id
    assert registry.open_count() == 0
    assert registry.closed_count() == 1

    room = registry.get_closed(first.room_id)
    assert room is not None
    assert room.is_closed
    assert room.black == second.player_id


def test_requests_alternate_between_create_and_close(registry: RoomRegistry) -> None:
    """Never more than one open room while pairing is single-slot."""
    results = [request_new_game(registry) for _ in range(7)]

    assert [r.color for r in results] == ["w", "b", "w", "b", "w", "b", "w"]
    for white, black in zip(results[0::2], results[1::2]):
        assert white.room_id == black.room_id
    assert len({r.room_id for r in results}) == 4
    assert registry.open_count() == 1
    assert registry.closed_count() == 3


def test_oldest_open_room_is_completed_first(registry: RoomRegistry) -> None:
    """FIFO: with several open rooms the one waiting longest gets the next player."""
    older = Room(id="older", white="p-older")
    newer = Room(id="newer", white="p-newer")
    registry.add_open(older)
    registry.add_open(newer)

    assert request_new_game(registry).room_id == "older"
    assert request_new_game(registry).room_id == "newer"


def test_purged_open_room_is_skipped(registry: RoomRegistry) -> None:
    """A waiting room torn down by a disconnect is not handed out again."""
    abandoned = request_new_game(registry)
    registry.purge(abandoned.room_id)

    created = request_new_game(registry)
    assert created.color == "w"
    assert created.room_id != abandoned.room_id
