from typing import Optional

import httpx

from constants import HTTP_TIMEOUT_SECONDS, PROFANITY_API_URL
from logging_config import get_logger
from services.external import ServiceResult

logger = get_logger(__name__)


class ProfanityChecker:
    def __init__(
        self,
        api_url: str = PROFANITY_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def check(self, text: str) -> ServiceResult[bool]:
        """Ask the profanity service whether ``text`` is profane."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(self.api_url, json={"message": text})
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException as e:
            logger.warning(f"Profanity check timed out after {self.timeout}s: {e}")
            return ServiceResult.timed_out(str(e) or "timeout")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"Profanity check failed: {e}")
            return ServiceResult.failure(str(e))

        verdict = data.get("isProfanity") if isinstance(data, dict) else None
        if not isinstance(verdict, bool):
            logger.warning(f"Profanity service returned unexpected payload: {data!r}")
            return ServiceResult.failure("missing isProfanity in response")
        return ServiceResult.success(verdict)

    async def is_allowed(self, text: str) -> bool:
        # Fail open: an unreachable service never blocks a submission
        result = await self.check(text)
        if not result.ok:
            logger.info(f"Profanity check {result.status.value}, allowing submission")
            return True
        return not result.value
