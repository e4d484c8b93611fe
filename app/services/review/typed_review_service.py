from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from app.core.exceptions import StorageError
from app.models.typed_review import TypedReview
from app.schemas.typed_review import TypedReviewCreate
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

REVIEW_WRITE_FAILED_MESSAGE = "An error occurred while creating the typed review."
REVIEW_READ_FAILED_MESSAGE = "An error occurred while fetching the typed reviews."


class TypedReviewService:
    """텍스트 리뷰 저장/조회. 같은 고객도 여러 번 작성할 수 있다"""

    async def create_review(
        self,
        review_data: TypedReviewCreate,
        db: AsyncSession
    ) -> TypedReview:
        try:
            review = TypedReview(
                product_id=review_data.product_id,
                shop=review_data.shop,
                client_id=review_data.client_id,
                rating_description=review_data.rating_description,
                logged_in=review_data.logged_in
            )
            db.add(review)
            await db.commit()
            await db.refresh(review)
            logger.info(f"Typed review saved: shop={review.shop} product={review.product_id} id={review.id}")
            return review

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Typed review creation failed: {str(e)}", exc_info=True)
            raise StorageError(REVIEW_WRITE_FAILED_MESSAGE)

    async def get_product_reviews(
        self,
        product_id: str,
        shop: str,
        db: AsyncSession,
        client_id: Optional[str] = None
    ) -> List[TypedReview]:
        """상품 텍스트 리뷰 목록 (최신순)"""
        try:
            query = select(TypedReview).where(
                TypedReview.product_id == product_id,
                TypedReview.shop == shop
            )
            if client_id:
                query = query.where(TypedReview.client_id == client_id)

            result = await db.execute(query.order_by(TypedReview.created_at.desc()))
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Failed to get typed reviews: {str(e)}", exc_info=True)
            raise StorageError(REVIEW_READ_FAILED_MESSAGE)
