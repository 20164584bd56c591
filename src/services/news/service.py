from typing import Any, Dict, List, Optional, Sequence

import structlog

from .cache import NewsCache, preference_key
from .client import GNewsClient

logger = structlog.get_logger(__name__)


class NewsService:
    """Serves preference-filtered articles from cache, refreshing from the provider when stale."""

    def __init__(self, client: GNewsClient, cache: Optional[NewsCache] = None):
        self.client = client
        self.cache = cache if cache is not None else NewsCache()

    async def get_news(self, preferences: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        keywords = sorted(preferences or [])
        key = preference_key(keywords)
        cached = self.cache.get(key)

        if cached is not None and self.cache.is_fresh(cached):
            logger.debug("news_cache_hit", key=key, article_count=len(cached.articles))
            return list(cached.articles)

        try:
            articles = await self.client.fetch_articles(keywords)
        except Exception as e:
            logger.error("news_fetch_failed", key=key, preferences=keywords, error=str(e))
            if cached is not None:
                logger.warning("news_serving_stale_cache", key=key, article_count=len(cached.articles))
                return list(cached.articles)
            raise

        self.cache.put(key, articles)
        logger.info("news_cache_refreshed", key=key, article_count=len(articles))
        return list(articles)
