from pydantic import BaseModel


class RoomDetailsResponse(BaseModel):
    room_id: str
    name: str
    participants: int
    word_count: int


class WordFrequency(BaseModel):
    word: str
    count: int


class WordFrequenciesResponse(BaseModel):
    room_id: str
    frequencies: list[WordFrequency]


class HealthResponse(BaseModel):
    status: str
    rooms: int
