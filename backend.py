from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from exceptions import RoomAlreadyExists, RoomNotFound
from logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Room:
    id: str
    name: str
    members: List[Any] = field(default_factory=list)
    words: List[str] = field(default_factory=list)

    @property
    def participants(self) -> int:
        return len(self.members)


class RoomRegistry:
    """In-process map of every active room, keyed by room id.

    Rooms are only ever inserted. Nothing removes an entry, so a room that
    loses all its members stays addressable until the process exits.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        logger.info("Initializing in-memory RoomRegistry")

    def exists(self, room_id: str) -> bool:
        return room_id in self._rooms

    def create(self, room_id: str, name: str, initial_member) -> Room:
        if room_id in self._rooms:
            raise RoomAlreadyExists(room_id)
        room = Room(id=room_id, name=name, members=[initial_member])
        self._rooms[room_id] = room
        logger.debug(f"Room {room_id} stored in registry ({len(self._rooms)} rooms total)")
        return room

    def get(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            logger.debug(f"Room {room_id} not found in registry")
            raise RoomNotFound(room_id)
        return room

    def for_each(self, fn: Callable[[Room], None]):
        # Snapshot so fn may add rooms without breaking iteration
        for room in list(self._rooms.values()):
            fn(room)

    def __len__(self) -> int:
        return len(self._rooms)
