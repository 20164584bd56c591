from datetime import datetime, timezone
from typing import Dict, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import text

from ...dependencies import get_db, get_news_service
from ....config import get_settings
from ....services.news import NewsService

logger = structlog.get_logger(__name__)
settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check(
    db: Session = Depends(get_db),
    news_service: NewsService = Depends(get_news_service)
) -> Dict[str, Any]:
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "database": "unhealthy",
                "error": "Database connectivity failed",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )

    return {
        "status": "healthy",
        "service": "Preference News API",
        "version": "0.1.0",
        "environment": settings.environment,
        "database": "healthy",
        "news_cache": news_service.cache.get_stats(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
