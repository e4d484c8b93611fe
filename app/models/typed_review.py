from sqlalchemy import Column, String, DateTime, Text, Index
from app.database import Base
from .rating import _generate_id, _utcnow


class TypedReview(Base):
    __tablename__ = "typed_reviews"
    __table_args__ = (
        Index("ix_typed_reviews_shop_product", "shop", "product_id"),
    )

    id = Column(String(32), primary_key=True, default=_generate_id)
    shop = Column(String, nullable=False)
    product_id = Column(String, nullable=False)
    client_id = Column(String, nullable=False)
    rating_description = Column(Text, nullable=False)
    logged_in = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
