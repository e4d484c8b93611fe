from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from app.core.exceptions import DuplicateSubmission, StorageError
from app.models.rating import Rating
from app.schemas.rating import RatingCreate
from typing import List, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)

DUPLICATE_RATING_MESSAGE = "You have already submitted a rating for this product."
RATING_WRITE_FAILED_MESSAGE = "An error occurred while processing the rating."
RATING_READ_FAILED_MESSAGE = "An error occurred while fetching the reviews."


def average_of(scores: List[int]) -> Union[int, float]:
    """평균 평점. 평점이 없으면 0"""
    if not scores:
        return 0
    return sum(scores) / len(scores)


class RatingService:
    def __init__(self, dedup_enabled: bool = True):
        self.dedup_enabled = dedup_enabled

    async def get_client_rating(
        self,
        product_id: str,
        shop: str,
        client_id: str,
        db: AsyncSession
    ) -> Optional[Rating]:
        """같은 고객이 이미 남긴 평점 조회"""
        result = await db.execute(
            select(Rating).where(
                Rating.product_id == product_id,
                Rating.shop == shop,
                Rating.client_id == client_id
            ).limit(1)
        )
        return result.scalar_one_or_none()

    async def _current_average(
        self,
        product_id: str,
        shop: str,
        db: AsyncSession
    ) -> Union[int, float]:
        result = await db.execute(
            select(
                func.coalesce(func.sum(Rating.rating), 0).label("total"),
                func.count(Rating.id).label("rating_count")
            ).where(Rating.product_id == product_id, Rating.shop == shop)
        )
        total, count = result.one()
        if not count:
            return 0
        return int(total) / count

    async def create_rating(
        self,
        rating_data: RatingCreate,
        db: AsyncSession
    ) -> Tuple[Rating, Union[int, float]]:
        """새로운 평점 저장 후 (평점, 평균) 반환

        중복 확인, 저장, 평균 재계산이 한 트랜잭션에서 수행된다. 동시에 들어온
        중복 제출은 (shop, product_id, client_id) 유니크 제약에 걸려 롤백된다.
        """
        client_id = rating_data.client_id if self.dedup_enabled else None

        try:
            if client_id is not None:
                existing_rating = await self.get_client_rating(
                    rating_data.product_id,
                    rating_data.shop,
                    client_id,
                    db
                )
                if existing_rating:
                    raise DuplicateSubmission(DUPLICATE_RATING_MESSAGE)

            rating = Rating(
                product_id=rating_data.product_id,
                shop=rating_data.shop,
                client_id=client_id,
                rating=rating_data.rating
            )
            db.add(rating)
            await db.flush()

            avg_rating = await self._current_average(rating_data.product_id, rating_data.shop, db)

            await db.commit()
            await db.refresh(rating)
            logger.info(
                f"Rating saved: shop={rating.shop} product={rating.product_id} "
                f"rating={rating.rating} avg={avg_rating}"
            )
            return rating, avg_rating

        except DuplicateSubmission:
            await db.rollback()
            raise
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Concurrent duplicate rating rejected: {str(e)}")
            raise DuplicateSubmission(DUPLICATE_RATING_MESSAGE)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Rating creation failed: {str(e)}", exc_info=True)
            raise StorageError(RATING_WRITE_FAILED_MESSAGE)

    async def get_product_ratings(
        self,
        product_id: str,
        shop: str,
        db: AsyncSession,
        client_id: Optional[str] = None
    ) -> Tuple[List[Rating], Union[int, float]]:
        """상품 평점 목록(최신순)과 평균"""
        try:
            query = select(Rating).where(
                Rating.product_id == product_id,
                Rating.shop == shop
            )
            if client_id:
                query = query.where(Rating.client_id == client_id)

            result = await db.execute(query.order_by(Rating.created_at.desc()))
            ratings = list(result.scalars().all())

            return ratings, average_of([r.rating for r in ratings])

        except SQLAlchemyError as e:
            logger.error(f"Failed to get ratings: {str(e)}", exc_info=True)
            raise StorageError(RATING_READ_FAILED_MESSAGE)
