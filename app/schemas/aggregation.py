from pydantic import BaseModel
from typing import Optional
from .base import CamelModel


class Product(CamelModel):
    """상품 카탈로그 항목 (Shopify GraphQL 조회 결과)"""
    id: str
    title: str
    description: Optional[str] = None
    updated_at: Optional[str] = None


class ReviewRow(BaseModel):
    """리뷰 테이블의 한 행"""
    product_id: str
    product_title: str
    avg_rating: str
    rating: int = 0
    logged_in: str
    rating_description: str
    created_at: Optional[str] = None
