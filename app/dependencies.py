import logging
from app.services.rating.rating_service import RatingService
from app.services.review.typed_review_service import TypedReviewService
from app.core.config import settings

logger = logging.getLogger(__name__)


def get_rating_service() -> RatingService:
    """설정에 맞는 평점 서비스 (중복 방지 여부)"""
    return RatingService(dedup_enabled=settings.RATING_DEDUP_ENABLED)


def get_typed_review_service() -> TypedReviewService:
    return TypedReviewService()
