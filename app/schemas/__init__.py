from .base import ResponseBase, CamelModel
from .rating import RatingCreate, RatingResponse, RatingSubmitResponse, RatingListResponse
from .typed_review import (
    TypedReviewCreate,
    TypedReviewResponse,
    TypedReviewCreatedResponse,
    TypedReviewListResponse
)
from .aggregation import Product, ReviewRow

__all__ = [
    "ResponseBase",
    "CamelModel",
    "RatingCreate",
    "RatingResponse",
    "RatingSubmitResponse",
    "RatingListResponse",
    "TypedReviewCreate",
    "TypedReviewResponse",
    "TypedReviewCreatedResponse",
    "TypedReviewListResponse",
    "Product",
    "ReviewRow"
]
