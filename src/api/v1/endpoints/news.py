import structlog
from fastapi import APIRouter, Depends, HTTPException

from ...dependencies import get_current_user, get_news_service
from ..schemas import NewsResponse
from ....models.user import User
from ....services.news import NewsService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=NewsResponse)
async def get_news(
    current_user: User = Depends(get_current_user),
    news_service: NewsService = Depends(get_news_service)
):
    """Articles matching the current user's preferences, or top headlines when none are set."""
    preferences = list(current_user.preferences or [])
    logger.info("news_requested", email=current_user.email, preferences=preferences)

    try:
        articles = await news_service.get_news(preferences)
    except Exception as e:
        logger.error(
            "news_request_failed",
            user_id=current_user.user_id,
            preferences=preferences,
            error=str(e),
            exc_info=e,
        )
        raise HTTPException(status_code=500, detail="Failed to fetch news")

    logger.info("news_served", email=current_user.email, article_count=len(articles))
    return NewsResponse(news=articles)
