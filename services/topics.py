from dataclasses import dataclass
from typing import Optional

import httpx

from constants import HTTP_TIMEOUT_SECONDS, WIKIPEDIA_API_URL
from logging_config import get_logger
from services.external import ServiceResult

logger = get_logger(__name__)

USER_AGENT = "word-pulse/0.1"


@dataclass
class TopicSuggestion:
    title: str
    summary: str

    @property
    def prompt(self) -> str:
        return f'What words come to mind when you hear about "{self.title}"?'


class TopicSuggester:
    """Picks a random Wikipedia article and returns its title and intro."""

    def __init__(
        self,
        api_url: str = WIKIPEDIA_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def suggest(self) -> ServiceResult[TopicSuggestion]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                headers={"User-Agent": USER_AGENT},
            ) as client:
                title = await self._random_title(client)
                summary = await self._summary(client, title)
        except httpx.TimeoutException as e:
            logger.warning(f"Topic suggestion timed out after {self.timeout}s: {e}")
            return ServiceResult.timed_out(str(e) or "timeout")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Topic suggestion failed: {e!r}")
            return ServiceResult.failure(repr(e))

        logger.debug(f"Suggested topic: {title}")
        return ServiceResult.success(TopicSuggestion(title=title, summary=summary))

    async def _random_title(self, client: httpx.AsyncClient) -> str:
        r = await client.get(self.api_url, params={
            "action": "query",
            "list": "random",
            "rnnamespace": 0,
            "rnlimit": 1,
            "format": "json",
            "origin": "*",
        })
        r.raise_for_status()
        return r.json()["query"]["random"][0]["title"]

    async def _summary(self, client: httpx.AsyncClient, title: str) -> str:
        r = await client.get(self.api_url, params={
            "action": "query",
            "prop": "extracts",
            "exintro": "",
            "explaintext": "",
            "titles": title,
            "format": "json",
            "origin": "*",
        })
        r.raise_for_status()
        pages = r.json()["query"]["pages"]
        # Single title requested, so exactly one page comes back
        page = list(pages.values())[0]
        return page.get("extract", "")
