from functools import lru_cache
from typing import Optional

import structlog
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.security import decode_access_token
from ..exceptions import InvalidTokenError
from ..repositories.user_repository import UserRepository
from ..services.news import GNewsClient, NewsCache, NewsService
from ..services.user_service import UserService
from ..models.user import User
from ..config import get_settings

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_user_service(user_repo: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(user_repo)


@lru_cache()
def get_news_service() -> NewsService:
    """Process-wide news service; the cache lives as long as the process."""
    settings = get_settings()
    cache = NewsCache(
        ttl_seconds=settings.news_cache_ttl_seconds,
        max_entries=settings.news_cache_max_entries,
    )
    return NewsService(client=GNewsClient.from_settings(settings), cache=cache)


async def get_current_user(
    user_repo: UserRepository = Depends(get_user_repository),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> User:
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access token required")

    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("authentication_failed", reason=e.message)
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = user_repo.get_by_id(user_id)
    if not user:
        logger.warning("authentication_failed", reason="user_not_found", user_id=user_id)
        raise HTTPException(status_code=401, detail="User not found")

    return user
