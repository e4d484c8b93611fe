from sqlalchemy import Column, Integer, String, DateTime, Index, UniqueConstraint, CheckConstraint
from datetime import datetime, timezone
import uuid
from app.database import Base


def _generate_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Rating(Base):
    __tablename__ = "ratings"
    __table_args__ = (
        # client_id가 NULL인 행(중복 허용 모드)은 제약 대상이 아니다
        UniqueConstraint("shop", "product_id", "client_id", name="uq_ratings_shop_product_client"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_ratings_rating_range"),
        Index("ix_ratings_shop_product", "shop", "product_id"),
    )

    id = Column(String(32), primary_key=True, default=_generate_id)
    shop = Column(String, nullable=False)
    product_id = Column(String, nullable=False)
    client_id = Column(String, nullable=True)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self):
        return f"<Rating {self.id} shop={self.shop} product={self.product_id} rating={self.rating}>"
