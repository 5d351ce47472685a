from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect

from exceptions import RoomNotFound
from logging_config import get_logger
from schemas.rooms import RoomDetailsResponse, WordFrequenciesResponse, WordFrequency
from services.connection import Connection

logger = get_logger(__name__)

ws_router = APIRouter(tags=["websocket"])
rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


@ws_router.websocket("/ws")
@ws_router.websocket("/")
async def websocket_endpoint(websocket: WebSocket):
    """Room protocol endpoint.

    Every text frame is a JSON command (create-room, join-room, add-word).
    Frames are handled one at a time in the order they arrive; closing the
    socket removes the connection from every room it joined.
    """
    gateway = websocket.app.state.gateway
    await websocket.accept()

    connection = Connection(websocket, maxsize=websocket.app.state.outbound_queue_size)
    connection.start()
    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
    logger.info(f"WebSocket connection {connection.id} accepted from {client}")

    disconnected = False
    message_count = 0
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            message_count += 1
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            logger.debug(f"Received message #{message_count} from connection {connection.id}")
            await gateway.handle_message(connection, raw)
    except WebSocketDisconnect as e:
        disconnected = True
        logger.info(f"WebSocket disconnected for connection {connection.id} (code {e.code})")
    except Exception as e:
        logger.error(f"WebSocket error for connection {connection.id}: {e}", exc_info=True)
    finally:
        gateway.handle_disconnect(connection)
        await connection.close()
        if not disconnected:
            try:
                await websocket.close()
            except Exception as e:
                logger.debug(f"Error closing WebSocket: {e}")


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    registry = request.app.state.registry
    try:
        room = registry.get(room_id)
    except RoomNotFound:
        logger.info(f"Room details failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")

    return RoomDetailsResponse(
        room_id=room.id,
        name=room.name,
        participants=room.participants,
        word_count=len(room.words),
    )


@rooms_router.get("/{room_id}/frequencies", response_model=WordFrequenciesResponse)
async def get_word_frequencies(room_id: str, request: Request):
    """Distinct words with their occurrence counts, for rendering the word cloud."""
    ledger = request.app.state.ledger
    try:
        counts = ledger.frequencies(room_id)
    except RoomNotFound:
        logger.info(f"Word frequencies failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")

    return WordFrequenciesResponse(
        room_id=room_id,
        frequencies=[WordFrequency(word=word, count=count) for word, count in counts.items()],
    )
