from .cache import CacheEntry, NewsCache, preference_key, DEFAULT_PREFERENCE_KEY
from .client import GNewsClient, fetch_news_from_api, extract_error_message
from .service import NewsService

__all__ = [
    "CacheEntry",
    "NewsCache",
    "preference_key",
    "DEFAULT_PREFERENCE_KEY",
    "GNewsClient",
    "fetch_news_from_api",
    "extract_error_message",
    "NewsService",
]
