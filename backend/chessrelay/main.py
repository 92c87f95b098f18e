"""
ChessRelay API и WebSocket.
"""
import logging

import uvicorn
from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .pairing import request_new_game
from .rooms import RoomRegistry
from .schemas import NewGameResponse
from .ws_handlers import SessionRelay, ws_loop
from .ws_manager import WSManager

logging.basicConfig(
    level=get_config().log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(config=None) -> FastAPI:
    """Собрать приложение со своим реестром комнат и менеджером соединений."""
    config = config or get_config()
    app = FastAPI(title="ChessRelay API")
    app.state.config = config
    app.state.registry = RoomRegistry()
    app.state.manager = WSManager()
    app.state.relay = SessionRelay(app.state.registry, app.state.manager)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/newgame", response_model=NewGameResponse, response_model_by_alias=True)
    def new_game(request: Request):
        created = request_new_game(request.app.state.registry)
        return NewGameResponse(
            room_id=created.room_id,
            player_id=created.player_id,
            player_color=created.color,
        )

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        logger.info("WS: connection attempt from %s", ws.client)
        await ws_loop(ws, ws.app.state.relay, ws.app.state.config.allowed_origins)

    return app


app = create_app()


def run() -> None:
    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
