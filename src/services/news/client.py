from typing import Any, Dict, List, Optional, Sequence

import httpx
import structlog

from ...config import get_settings
from ...exceptions import ProviderHTTPError, ProviderPayloadError, ProviderUnreachableError

logger = structlog.get_logger(__name__)

NO_RESPONSE_MESSAGE = "No response from API"
GENERIC_PAYLOAD_ERROR = "API error"


def _first_error_message(errors: Any) -> Optional[str]:
    if not isinstance(errors, list) or not errors:
        return None

    first = errors[0]
    if isinstance(first, str):
        return first
    if isinstance(first, dict) and first.get("message"):
        return str(first["message"])
    return None


def extract_error_message(body: Any, default: str) -> str:
    """Best-effort message from a provider error body: message, error, then errors[0]."""
    if not isinstance(body, dict):
        return default
    if body.get("message"):
        return str(body["message"])
    if body.get("error"):
        return str(body["error"])
    return _first_error_message(body.get("errors")) or default


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class GNewsClient:
    """Thin async client for the GNews v4 search and top-headlines endpoints."""

    SEARCH_PATH = "/api/v4/search"
    TOP_HEADLINES_PATH = "/api/v4/top-headlines"
    DEFAULT_CATEGORY = "general"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://gnews.io",
        timeout_seconds: float = 10.0,
        language: str = "en",
        country: str = "us",
        max_results: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.language = language
        self.country = country
        self.max_results = max_results
        self._transport = transport

    @classmethod
    def from_settings(cls, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None) -> "GNewsClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.gnews_api_key,
            base_url=settings.gnews_base_url,
            timeout_seconds=settings.news_request_timeout_seconds,
            language=settings.news_language,
            country=settings.news_country,
            max_results=settings.news_max_results,
            transport=transport,
        )

    def build_request(self, keywords: Sequence[str]) -> tuple[str, Dict[str, Any]]:
        params: Dict[str, Any] = {
            "lang": self.language,
            "country": self.country,
            "max": self.max_results,
        }
        if self.api_key:
            params["apikey"] = self.api_key

        if keywords:
            params["q"] = " OR ".join(keywords)
            return f"{self.base_url}{self.SEARCH_PATH}", params

        params["category"] = self.DEFAULT_CATEGORY
        return f"{self.base_url}{self.TOP_HEADLINES_PATH}", params

    async def fetch_articles(self, keywords: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        keywords = list(keywords or [])
        url, params = self.build_request(keywords)

        if keywords:
            logger.info("news_fetch_search", keywords=keywords)
        else:
            logger.info("news_fetch_top_headlines", category=self.DEFAULT_CATEGORY)

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            logger.warning("news_fetch_no_response", error=str(e))
            raise ProviderUnreachableError(NO_RESPONSE_MESSAGE) from e

        if not response.is_success:
            message = extract_error_message(_json_or_none(response), default=f"HTTP {response.status_code}")
            raise ProviderHTTPError(message, status_code=response.status_code)

        return self._parse_articles(_json_or_none(response))

    def _parse_articles(self, payload: Any) -> List[Dict[str, Any]]:
        if not isinstance(payload, dict):
            return []

        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            raise ProviderPayloadError(_first_error_message(errors) or GENERIC_PAYLOAD_ERROR)

        # GNews reports some failures as a bare message with a 2xx status
        if payload.get("message"):
            raise ProviderPayloadError(str(payload["message"]))

        return list(payload.get("articles") or [])


async def fetch_news_from_api(keywords: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    return await GNewsClient.from_settings().fetch_articles(keywords)
