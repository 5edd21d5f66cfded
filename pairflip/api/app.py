"""
FastAPI Application - REST and WebSocket API for the browser front-end.

Endpoints:
    POST   /api/v1/sessions               Create game session (deals a board)
    GET    /api/v1/sessions               List active sessions
    GET    /api/v1/sessions/{id}          Get game state
    POST   /api/v1/sessions/{id}/select   Flip a card
    POST   /api/v1/sessions/{id}/reset    Start over with a fresh board
    DELETE /api/v1/sessions/{id}          End session
    WS     /api/v1/sessions/{id}/ws       Real-time state updates

Turn Flow:
    1. POST /select for the first card -> card face up
    2. POST /select for the second card -> status becomes "resolving"
    3. After the delay the server applies the outcome and pushes a
       state_update over the WebSocket (or clients poll GET state)

All responses are JSON with explicit Pydantic schemas.
"""

import asyncio
import json
import logging
from typing import Optional, Union

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.websockets import WebSocketState

from .. import __version__
from ..config import get_config, LOG_FORMAT, LOG_DATEFMT
from .service import APIService
from .schemas import (
    CreateSessionRequest,
    SelectCardRequest,
    GameStateResponse,
    SelectCardResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    ErrorCode,
    WSMessageType,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "pairflip"
SERVICE_VERSION = __version__

# Application close codes for the WebSocket
WS_CLOSE_SESSION_NOT_FOUND = 4404
WS_CLOSE_SESSION_ENDED = 4410


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    config = get_config()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    app = FastAPI(
        title="Pairflip API",
        description="""
Memory-match game engine. Sixteen face-down cards, eight pairs.

## Turn Flow

1. Select two cards with `POST /select`
2. The session enters `resolving`; further selections are ignored
3. After a short delay the pair is kept (match) or flipped back (mismatch)
   and the move counter increases

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Malformed request |
        """,
        version=SERVICE_VERSION,
        debug=config.debug,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return make_error_response(response.error_code, response.error, status_code=404)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = None,
    ) -> GameStateResponse:
        """Deal a fresh board. Pass `seed` for a reproducible deal."""
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a session; any pending turn evaluation is cancelled."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/select",
        response_model=SelectCardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Flip a card",
    )
    async def select_card(
        session_id: str,
        body: SelectCardRequest,
    ) -> Union[SelectCardResponse, JSONResponse]:
        """
        Flip a card.

        Selections of face-up or unknown cards, or while a turn is
        resolving, are ignored: `accepted` is false and the state is
        unchanged.
        """
        response = api_service.select_card(session_id, body.card_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start a new game in this session",
    )
    async def reset_game(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.reset_game(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed (selection, resolution, reset)
        - error: Error occurred
        - pong: Reply to ping

        Messages from client:
        - ping: Keep-alive

        The socket is closed with WS_CLOSE_SESSION_ENDED when the session
        is ended or swept.
        """
        await websocket.accept()

        initial = api_service.get_game_state(session_id)
        if isinstance(initial, ErrorResponse):
            await websocket.send_json({
                "type": WSMessageType.ERROR.value,
                "payload": initial.model_dump(mode="json"),
            })
            await websocket.close(code=WS_CLOSE_SESSION_NOT_FOUND)
            return

        # None marks the end of the session
        updates: asyncio.Queue[Optional[GameStateResponse]] = asyncio.Queue()
        unsubscribe = api_service.subscribe(
            session_id,
            updates.put_nowait,
            on_end=lambda: updates.put_nowait(None),
        )

        async def push_updates():
            while True:
                state = await updates.get()
                if state is None:
                    logger.info("WS: session ended, closing session=%s", session_id)
                    await websocket.close(code=WS_CLOSE_SESSION_ENDED)
                    return
                await websocket.send_json({
                    "type": WSMessageType.STATE_UPDATE.value,
                    "payload": state.model_dump(mode="json"),
                })

        await websocket.send_json({
            "type": WSMessageType.STATE_UPDATE.value,
            "payload": initial.model_dump(mode="json"),
        })
        pusher = asyncio.create_task(push_updates())

        try:
            while websocket.application_state == WebSocketState.CONNECTED:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": WSMessageType.ERROR.value,
                        "payload": ErrorResponse(
                            error="Invalid JSON",
                            error_code=ErrorCode.VALIDATION_ERROR,
                        ).model_dump(mode="json"),
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == WSMessageType.PING.value:
                    await websocket.send_json({"type": WSMessageType.PONG.value})
        except WebSocketDisconnect as e:
            logger.info("WS: client disconnected code=%s session=%s", e.code, session_id)
        finally:
            if unsubscribe:
                unsubscribe()
            if pusher.done() and not pusher.cancelled() and pusher.exception() is not None:
                logger.error(
                    "WS: push failed session=%s: %r", session_id, pusher.exception()
                )
            pusher.cancel()

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service=SERVICE_NAME,
            version=SERVICE_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Pairflip API",
            "version": SERVICE_VERSION,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn pairflip.api.app:app
app = create_app()
