class WordPulseError(Exception):
    """Base class for every error raised by the room core."""


class RoomNotFound(WordPulseError):
    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} not found")
        self.room_id = room_id


class RoomAlreadyExists(WordPulseError):
    def __init__(self, room_id: str):
        super().__init__(f"Room {room_id} already exists")
        self.room_id = room_id


class MalformedCommand(WordPulseError):
    """Inbound frame is not valid JSON or lacks a required field."""


class UnknownCommandType(WordPulseError):
    def __init__(self, command_type):
        super().__init__(f"Unknown message type: {command_type}")
        self.command_type = command_type


class DeliveryFailure(WordPulseError):
    """A payload could not be handed to a connection's outbound channel."""
