from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


# Inbound (client -> server)

class _Command(BaseModel):
    @field_validator("*")
    @classmethod
    def check_utf8_encodable(cls, value):
        # JSON allows lone surrogate escapes that cannot be re-encoded on the way out
        if isinstance(value, str):
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ValueError(f"not valid UTF-8 text: {e.reason}")
        return value


class CreateRoomCommand(_Command):
    type: Literal["create-room"]
    room: str
    name: str


class JoinRoomCommand(_Command):
    type: Literal["join-room"]
    room: str


class AddWordCommand(_Command):
    type: Literal["add-word"]
    room: str
    words: str


Command = Annotated[
    Union[CreateRoomCommand, JoinRoomCommand, AddWordCommand],
    Field(discriminator="type"),
]

COMMAND_TYPES = ("create-room", "join-room", "add-word")


# Outbound (server -> client)

class RoomCreatedEvent(BaseModel):
    type: Literal["room-created"] = "room-created"
    room: str
    name: str
    participants: int


class RoomJoinedEvent(BaseModel):
    """Sent on join (with ``words``) and on disconnect count updates (without)."""

    type: Literal["room-joined"] = "room-joined"
    room: str
    name: str
    participants: int
    words: Optional[List[str]] = None


class WordsAddedEvent(BaseModel):
    type: Literal["words-added"] = "words-added"
    room: str
    words: List[str]


Event = Union[RoomCreatedEvent, RoomJoinedEvent, WordsAddedEvent]
