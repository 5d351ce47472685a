import json
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from exceptions import MalformedCommand, UnknownCommandType
from logging_config import get_logger
from schemas.messages import COMMAND_TYPES, AddWordCommand, Command, CreateRoomCommand, JoinRoomCommand
from services.ledger import WordLedger
from services.membership import MembershipManager
from services.profanity import ProfanityChecker

logger = get_logger(__name__)

_command_adapter = TypeAdapter(Command)


def parse_command(raw: Union[str, bytes]) -> Command:
    """Decode one inbound frame into a typed command.

    Raises MalformedCommand when the frame is not a JSON object with the
    fields its ``type`` requires, and UnknownCommandType when ``type`` is
    missing or not one we handle.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedCommand(f"Frame is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedCommand(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedCommand(f"Expected a JSON object, got {type(data).__name__}")

    command_type = data.get("type")
    if command_type not in COMMAND_TYPES:
        raise UnknownCommandType(command_type)

    try:
        return _command_adapter.validate_python(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedCommand(f"Invalid {command_type} command ({fields})") from e


class ConnectionGateway:
    def __init__(
        self,
        membership: MembershipManager,
        ledger: WordLedger,
        profanity_checker: Optional[ProfanityChecker] = None,
    ):
        self.membership = membership
        self.ledger = ledger
        self.profanity_checker = profanity_checker

    async def handle_message(self, connection, raw) -> bool:
        """Route one inbound frame. Returns False when the frame was dropped."""
        try:
            command = parse_command(raw)
        except UnknownCommandType as e:
            logger.warning(f"Unknown message type from connection {connection.id}: {e.command_type!r}")
            return False
        except MalformedCommand as e:
            logger.warning(f"Dropping malformed message from connection {connection.id}: {e}")
            return False

        logger.debug(f"Connection {connection.id} sent {command.type} for room {command.room}")

        if isinstance(command, CreateRoomCommand):
            self.membership.create_room(command.room, command.name, connection)
        elif isinstance(command, JoinRoomCommand):
            self.membership.join_room(command.room, connection)
        elif isinstance(command, AddWordCommand):
            if self.profanity_checker is not None and not await self.profanity_checker.is_allowed(command.words):
                logger.info(f"Dropping profane submission from connection {connection.id} for room {command.room}")
                return False
            self.ledger.add_words(command.room, command.words, connection)
        return True

    def handle_disconnect(self, connection):
        rooms = self.membership.remove_participant(connection)
        logger.debug(f"Connection {connection.id} cleaned up from {len(rooms)} rooms")
