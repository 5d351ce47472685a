from pydantic import BaseModel


class ProfanityCheckRequest(BaseModel):
    message: str


class ProfanityCheckResponse(BaseModel):
    is_profanity: bool
    status: str


class TopicSuggestionResponse(BaseModel):
    title: str
    summary: str
    prompt: str
