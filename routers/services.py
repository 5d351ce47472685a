from fastapi import APIRouter, HTTPException, Request

from logging_config import get_logger
from schemas.services import ProfanityCheckRequest, ProfanityCheckResponse, TopicSuggestionResponse

logger = get_logger(__name__)

services_router = APIRouter(tags=["services"])


@services_router.post("/profanity", response_model=ProfanityCheckResponse)
async def check_profanity(body: ProfanityCheckRequest, request: Request):
    # Fail open: service errors report the text as clean
    checker = request.app.state.profanity_checker
    result = await checker.check(body.message)
    return ProfanityCheckResponse(
        is_profanity=bool(result.value) if result.ok else False,
        status=result.status.value,
    )


@services_router.get("/topics/random", response_model=TopicSuggestionResponse)
async def random_topic(request: Request):
    suggester = request.app.state.topic_suggester
    result = await suggester.suggest()
    if not result.ok:
        logger.warning(f"Random topic unavailable: {result.status.value} ({result.error})")
        raise HTTPException(status_code=503, detail="Topic service unavailable")

    topic = result.value
    return TopicSuggestionResponse(title=topic.title, summary=topic.summary, prompt=topic.prompt)
