from typing import List, Optional

from backend import Room, RoomRegistry
from exceptions import RoomAlreadyExists, RoomNotFound
from logging_config import get_logger
from schemas.messages import RoomCreatedEvent, RoomJoinedEvent
from services.broadcaster import Broadcaster

logger = get_logger(__name__)


class MembershipManager:
    """Creates rooms, admits connections and drops them again on disconnect.

    Membership is a plain list: joining twice from the same connection adds a
    second entry and that connection then receives every broadcast twice.
    """

    def __init__(self, registry: RoomRegistry, broadcaster: Broadcaster):
        self.registry = registry
        self.broadcaster = broadcaster

    def create_room(self, room_id: str, name: str, requester) -> Optional[Room]:
        try:
            room = self.registry.create(room_id, name, requester)
        except RoomAlreadyExists:
            logger.info(f"Create room ignored: room {room_id} already exists (requested by {requester.id})")
            return None

        logger.info(f"User {requester.id} created room {room_id} ({name})")
        self.broadcaster.send([requester], RoomCreatedEvent(room=room.id, name=room.name, participants=room.participants))
        return room

    def join_room(self, room_id: str, requester) -> Optional[Room]:
        try:
            room = self.registry.get(room_id)
        except RoomNotFound:
            logger.info(f"Join room ignored: room {room_id} not found (requested by {requester.id})")
            return None

        room.members.append(requester)
        logger.info(f"User {requester.id} joined room {room_id} ({room.participants} participants)")
        self.broadcaster.send(
            room.members,
            RoomJoinedEvent(room=room.id, name=room.name, participants=room.participants, words=list(room.words)),
        )
        return room

    def remove_participant(self, handle) -> List[Room]:
        """Remove ``handle`` from every room it is a member of.

        Every occurrence is removed. Rooms whose member count changed get a
        count-only ``room-joined`` update for the members that remain.
        """
        affected: List[Room] = []

        def _remove(room: Room):
            before = len(room.members)
            room.members[:] = [member for member in room.members if member is not handle]
            if len(room.members) == before:
                return
            affected.append(room)
            logger.info(f"User {handle.id} left room {room.id} ({room.participants} participants remaining)")
            self.broadcaster.send(
                room.members,
                RoomJoinedEvent(room=room.id, name=room.name, participants=room.participants),
            )

        self.registry.for_each(_remove)
        return affected
