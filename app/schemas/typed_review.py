from typing import List
from datetime import datetime
from .base import CamelModel, ResponseBase


class TypedReviewCreate(CamelModel):
    product_id: str
    shop: str
    rating_description: str
    logged_in: str
    client_id: str


class TypedReviewResponse(CamelModel):
    id: str
    shop: str
    product_id: str
    client_id: str
    rating_description: str
    logged_in: str
    created_at: datetime


class TypedReviewCreatedResponse(ResponseBase):
    review: TypedReviewResponse


class TypedReviewListResponse(ResponseBase):
    reviews: List[TypedReviewResponse]
